"""
CompLens API router
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from complens.schemas.listing import FeatureSet, PropertyRecord
from complens.schemas.results import Estimate, PriceRange, ScoredProperty, ValuationReport
from complens.domain.errors import ValuationError
from complens.domain.estimator import PriceEstimator
from complens.domain.pricing import find_price_range
from complens.domain.ranking import Ranker
from complens.data_sources.kv_client import BlockedError
from complens.pipeline import ValuationPipeline

router = APIRouter()


_EXAMPLE_RECORDS = [
    {
        "id": "3435688",
        "price": "100 000 €",
        "propertyType": {"property": "Apartment", "deal": "sale"},
        "features": {"rooms": "2", "builtInYear": "1975", "totalArea": "48 m²", "condition": "Satisfactory"},
    },
    {
        "id": "3473089",
        "price": "200 000 €",
        "propertyType": {"property": "Apartment", "deal": "sale"},
        "features": {"rooms": "4", "builtInYear": "2005", "totalArea": "92 m²", "condition": "Renovated"},
    },
]


class ReferenceRequest(BaseModel):
    """Reference set request"""
    model_config = ConfigDict(json_schema_extra={"example": {"records": _EXAMPLE_RECORDS}})

    records: list[PropertyRecord]


class EstimateRequest(BaseModel):
    """Price estimate request"""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "records": _EXAMPLE_RECORDS,
                "query": {"rooms": "3", "builtInYear": "1990", "totalArea": "70 m²", "condition": "Good condition"},
            }
        }
    )

    records: list[PropertyRecord]
    query: FeatureSet


class ValuateRequest(BaseModel):
    """Collect-and-value request"""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "listing_ids": ["3435688", "3473089", "3475429"],
                "query": {"rooms": "3", "builtInYear": "1990", "totalArea": "70 m²"},
            }
        }
    )

    listing_ids: list[str] = Field(min_length=1)
    query: Optional[FeatureSet] = None


def get_pipeline() -> ValuationPipeline:
    return ValuationPipeline()


def _unprocessable(e: ValuationError) -> HTTPException:
    logger.warning(f"Valuation rejected: {e}")
    return HTTPException(status_code=422, detail=str(e))


@router.post("/rank", response_model=list[ScoredProperty])
async def rank_listings(request: ReferenceRequest) -> list[ScoredProperty]:
    """
    Rank a reference set

    Every listing is scored against the set's cheapest and most
    expensive listings; the result is sorted ascending by score.
    """
    try:
        return Ranker().rank(request.records)
    except ValuationError as e:
        raise _unprocessable(e)


@router.post("/price-range", response_model=PriceRange)
async def get_price_range(request: ReferenceRequest) -> PriceRange:
    """Cheapest and most expensive listing of a reference set"""
    try:
        return find_price_range(request.records)
    except ValuationError as e:
        raise _unprocessable(e)


@router.post("/estimate", response_model=Estimate)
async def estimate_price(request: EstimateRequest) -> Estimate:
    """Estimate the price of a feature set against a reference set"""
    try:
        return PriceEstimator().estimate(request.records, request.query)
    except ValuationError as e:
        raise _unprocessable(e)


@router.post("/valuate", response_model=ValuationReport)
def valuate_listings(
    request: ValuateRequest,
    pipeline: ValuationPipeline = Depends(get_pipeline),
) -> ValuationReport:
    """
    Collect listings from kv.ee, rank them and optionally estimate

    Listings that fail to fetch or parse are skipped and reported in
    `skipped_ids`.
    """
    try:
        return pipeline.run(listing_ids=request.listing_ids, query=request.query)
    except ValuationError as e:
        raise _unprocessable(e)
    except BlockedError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Valuation failed: {str(e)}")


@router.get("/schema/property-record")
async def get_property_record_schema():
    """PropertyRecord JSON schema"""
    return PropertyRecord.model_json_schema(by_alias=True)
