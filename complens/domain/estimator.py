"""
Price estimator

Reads a price off the score curve of a reference set:

1. score above the curve   -> (point - max_point) / 2 + max_price
2. score below the curve   -> (min_price - point) / 2 + point
3. score equal to an entry -> that entry's price
4. otherwise               -> midpoint of the first adjacent pair whose
                              prices bracket the score

The two extrapolation formulas are not symmetric and step 4 compares a
score with prices. Both are kept as they are; ESTIMATE_BRACKET_BY=point
brackets by neighbouring scores instead.
"""

from typing import Optional, Sequence

from loguru import logger

from complens.config import settings
from complens.domain.errors import EmptyInputError, InterpolationError
from complens.domain.pricing import parse_price
from complens.domain.ranking import Ranker
from complens.domain.scoring import CompositeScorer
from complens.schemas.listing import FeatureSet, PropertyRecord
from complens.schemas.results import Estimate, EstimateMethod, ScoredProperty


class PriceEstimator:
    """Estimates a price for a feature set from a reference set"""

    def __init__(
        self,
        missing_year_policy: Optional[str] = None,
        bracket_by: Optional[str] = None,
    ):
        self.missing_year_policy = missing_year_policy
        self.bracket_by = bracket_by or settings.ESTIMATE_BRACKET_BY
        if self.bracket_by not in ("price", "point"):
            raise ValueError(f"Unknown bracket mode: {self.bracket_by}")
        self.ranker = Ranker(missing_year_policy=missing_year_policy)
        self.logger = logger.bind(component="PriceEstimator")

    def estimate(self, records: Sequence[PropertyRecord], query: FeatureSet) -> Estimate:
        """
        Estimate the price of `query`.

        Raises:
            EmptyInputError: If `records` is empty
            InterpolationError: If no curve pair brackets the query score
        """
        scorer = CompositeScorer(records, missing_year_policy=self.missing_year_policy)
        point = scorer.score(query)
        curve = self.ranker.rank(records, scorer=scorer)
        return self.estimate_from_curve(curve, point)

    def estimate_from_curve(self, curve: Sequence[ScoredProperty], point: float) -> Estimate:
        """Estimate the price for a score on an already ranked curve"""
        if not curve:
            raise EmptyInputError("Score curve is empty")

        first, last = curve[0], curve[-1]

        if point > last.point:
            price = (point - last.point) / 2 + parse_price(last.price)
            method = EstimateMethod.ABOVE_RANGE
        elif point < first.point:
            price = (parse_price(first.price) - point) / 2 + point
            method = EstimateMethod.BELOW_RANGE
        else:
            match = next((entry for entry in curve if entry.point == point), None)
            if match is not None:
                price = float(parse_price(match.price))
                method = EstimateMethod.EXACT
            else:
                price = self._interpolate(curve, point)
                method = EstimateMethod.INTERPOLATED

        self.logger.info(f"Estimate for point {point:.1f}: {price:,.0f} ({method.value})")
        return Estimate(point=point, price=price, method=method)

    def _interpolate(self, curve: Sequence[ScoredProperty], point: float) -> float:
        prices = [parse_price(entry.price) for entry in curve]

        for i in range(len(curve) - 1):
            if self.bracket_by == "price":
                low, high = prices[i], prices[i + 1]
            else:
                low, high = curve[i].point, curve[i + 1].point

            if low <= point <= high:
                return (prices[i + 1] - prices[i]) / 2 + prices[i]

        raise InterpolationError(
            f"No adjacent curve pair brackets point {point} (by {self.bracket_by})"
        )
