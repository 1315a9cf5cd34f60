"""
Composite scoring engine
Combines per-feature points into one score per listing.
"""

from typing import Optional, Sequence

from loguru import logger

from complens.domain.errors import EmptyInputError
from complens.domain.features import (
    YearScorer,
    parse_area,
    score_condition,
    score_feature,
    to_number,
)
from complens.domain.keys import Condition
from complens.domain.pricing import find_price_range
from complens.schemas.listing import FeatureSet, PropertyRecord
from complens.schemas.results import ScoreBreakdown


class CompositeScorer:
    """
    Rule-based composite scorer

    Scores feature sets against one reference set. The reference set's
    cheapest and most expensive listings (the exemplars) decide whether
    more of a feature is rewarded or penalised:

        total = rooms * 20 * sign + year delta
                + area * 1 * sign * floors + condition points

    Exemplars and the oldest built-in year are computed once per scorer
    and shared by every score.
    """

    # points per unit of feature
    WEIGHTS = {
        "rooms": 20,
        "totalArea": 1,
    }

    def __init__(
        self,
        records: Sequence[PropertyRecord],
        missing_year_policy: Optional[str] = None,
    ):
        if not records:
            raise EmptyInputError("Reference set is empty")

        self.price_range = find_price_range(records)
        self.min_features = FeatureSet.from_record(records[self.price_range.min.index])
        self.max_features = FeatureSet.from_record(records[self.price_range.max.index])
        self.year_scorer = YearScorer(records, policy=missing_year_policy)

        logger.debug(
            f"Exemplars: min={self.price_range.min.id} ({self.price_range.min.price}), "
            f"max={self.price_range.max.id} ({self.price_range.max.price})"
        )

    def score(self, features: FeatureSet, missing_year_policy: Optional[str] = None) -> float:
        """
        Composite score of a feature set.

        `missing_year_policy` overrides the scorer's year policy for this
        score only.

        Raises:
            ParseError: If a numeric feature is malformed
            MissingFeatureError: If the built-in year is missing under the "error" policy
        """
        return sum(b.score for b in self.breakdown(features, missing_year_policy))

    def breakdown(
        self,
        features: FeatureSet,
        missing_year_policy: Optional[str] = None,
    ) -> list[ScoreBreakdown]:
        """Per-feature contributions, in aggregation order"""
        return [
            self._score_rooms(features),
            self._score_built_in_year(features, missing_year_policy),
            self._score_total_area(features),
            self._score_condition(features),
        ]

    def _score_rooms(self, features: FeatureSet) -> ScoreBreakdown:
        """Rooms: 20 points per room, signed by the exemplars"""
        score = score_feature(
            feature=features.rooms,
            minimum=self.min_features.rooms,
            maximum=self.max_features.rooms,
            points=self.WEIGHTS["rooms"],
        )
        return ScoreBreakdown(
            category="rooms",
            score=score,
            reason=f"{features.rooms or 0} rooms (exemplars {self.min_features.rooms or 0} -> {self.max_features.rooms or 0})",
        )

    def _score_built_in_year(self, features: FeatureSet, policy: Optional[str]) -> ScoreBreakdown:
        """Built-in year: years newer than the oldest reference listing"""
        score = self.year_scorer.score(features.built_in_year, policy=policy)
        return ScoreBreakdown(
            category="builtInYear",
            score=score,
            reason=f"built {features.built_in_year}, oldest reference {self.year_scorer.min_year}",
        )

    def _score_total_area(self, features: FeatureSet) -> ScoreBreakdown:
        """Total area: 1 point per m², signed by the exemplars, times floors"""
        area = parse_area(features.total_area)
        area_points = score_feature(
            feature=area,
            minimum=parse_area(self.min_features.total_area),
            maximum=parse_area(self.max_features.total_area),
            points=self.WEIGHTS["totalArea"],
        )
        floors = to_number(features.number_of_floors, default=1.0)
        return ScoreBreakdown(
            category="totalArea",
            score=area_points * floors,
            reason=f"{area:g} m² x {floors:g} floor(s)",
        )

    def _score_condition(self, features: FeatureSet) -> ScoreBreakdown:
        """Condition: fixed points per recognised label"""
        condition = Condition.from_label(features.condition)
        return ScoreBreakdown(
            category="condition",
            score=float(score_condition(features.condition)),
            reason=f"{features.condition or 'no condition'} ({condition.value})",
        )
