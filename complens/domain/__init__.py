"""
CompLens domain package
Valuation engine: price parsing, exemplar selection, feature scoring,
ranking and price estimation. No I/O happens in this layer.
"""

from .errors import (
    ValuationError,
    ParseError,
    EmptyInputError,
    MissingFeatureError,
    InterpolationError,
)
from .keys import Condition, FeatureKey, camel_key
from .pricing import parse_price, find_price_range
from .features import score_feature, score_condition, YearScorer
from .scoring import CompositeScorer
from .ranking import Ranker
from .estimator import PriceEstimator
from .valuation import rank, estimate_price, price_range

__all__ = [
    "ValuationError",
    "ParseError",
    "EmptyInputError",
    "MissingFeatureError",
    "InterpolationError",
    "Condition",
    "FeatureKey",
    "camel_key",
    "parse_price",
    "find_price_range",
    "score_feature",
    "score_condition",
    "YearScorer",
    "CompositeScorer",
    "Ranker",
    "PriceEstimator",
    "rank",
    "estimate_price",
    "price_range",
]
