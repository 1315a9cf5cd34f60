"""
CompLens schema package
Input and output models shared by the engine, agents and API.
"""

from .listing import PropertyRecord, PropertyType, Location, FeatureSet
from .results import (
    PricePoint,
    PriceRange,
    ScoredProperty,
    ScoreBreakdown,
    Estimate,
    EstimateMethod,
    ValuationReport,
)

__all__ = [
    "PropertyRecord",
    "PropertyType",
    "Location",
    "FeatureSet",
    "PricePoint",
    "PriceRange",
    "ScoredProperty",
    "ScoreBreakdown",
    "Estimate",
    "EstimateMethod",
    "ValuationReport",
]
