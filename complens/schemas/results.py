"""
Result schemas
Outputs of the valuation engine and the pipeline.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class PricePoint(BaseModel):
    """One record projected onto its numeric price"""
    model_config = ConfigDict(frozen=True)

    price: int = Field(description="Parsed price")
    id: str = Field(description="Listing identifier")
    index: int = Field(description="Position of the record in the input sequence")


class PriceRange(BaseModel):
    """Cheapest and most expensive record of a reference set"""
    model_config = ConfigDict(frozen=True)

    min: PricePoint
    max: PricePoint


class ScoredProperty(BaseModel):
    """One entry of the score curve"""
    model_config = ConfigDict(frozen=True)

    id: str
    price: str = Field(description="Price as shown on the listing")
    point: float = Field(description="Composite score")


class ScoreBreakdown(BaseModel):
    """Contribution of one feature to a composite score"""
    category: str = Field(description="Feature name")
    score: float = Field(description="Points contributed")
    reason: str = Field(description="How the points were derived")


class EstimateMethod(str, Enum):
    """How an estimate was read off the score curve"""
    EXACT = "exact"
    ABOVE_RANGE = "above_range"
    BELOW_RANGE = "below_range"
    INTERPOLATED = "interpolated"


class Estimate(BaseModel):
    """
    Price estimate

    `point` is the composite score of the query, `price` the estimated
    price and `method` which branch of the curve lookup produced it.
    """
    model_config = ConfigDict(use_enum_values=True)

    point: float
    price: float
    method: EstimateMethod


class ValuationReport(BaseModel):
    """
    Pipeline output
    Collected reference set summary, score curve and optional estimate.
    """
    created_at: datetime = Field(default_factory=datetime.now)
    requested_ids: list[str] = Field(
        default_factory=list,
        description="Listing ids the collection was asked for"
    )
    skipped_ids: list[str] = Field(
        default_factory=list,
        description="Listing ids that failed to fetch or parse"
    )
    price_range: Optional[PriceRange] = None
    curve: list[ScoredProperty] = Field(
        default_factory=list,
        description="Reference set ranked ascending by score"
    )
    estimate: Optional[Estimate] = None

    @property
    def collected_count(self) -> int:
        return len(self.curve)
