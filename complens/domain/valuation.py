"""
Function-level entry points of the valuation engine.
"""

from typing import Any, Sequence, Union

from complens.domain.estimator import PriceEstimator
from complens.domain.pricing import find_price_range
from complens.domain.ranking import Ranker
from complens.schemas.listing import FeatureSet, PropertyRecord
from complens.schemas.results import PriceRange, ScoredProperty


def rank(records: Sequence[PropertyRecord]) -> list[ScoredProperty]:
    """Score curve of `records`, ascending by point."""
    return Ranker().rank(records)


def estimate_price(
    records: Sequence[PropertyRecord],
    query: Union[FeatureSet, dict[str, Any]],
) -> float:
    """Estimated price of `query` against the reference set `records`."""
    if not isinstance(query, FeatureSet):
        query = FeatureSet.model_validate(query)
    return PriceEstimator().estimate(records, query).price


def price_range(records: Sequence[PropertyRecord]) -> PriceRange:
    """Cheapest and most expensive record of `records`."""
    return find_price_range(records)
