from fastapi import APIRouter, Depends

from mortgage_compare.entrypoints.http.dependencies import get_compare_to_market_use_case
from mortgage_compare.entrypoints.http.dtos.market import (
    MarketCompareRequestDTO,
    MarketCompareResponseDTO,
)
from mortgage_compare.entrypoints.http.error_responses import ErrorResponse
from mortgage_compare.entrypoints.http.mappers.market_mapper import MarketMapper
from mortgage_compare.infra.config import Settings, get_settings
from mortgage_compare.use_cases.compare_to_market import CompareToMarket


router = APIRouter(prefix="/market", tags=["Market"])


@router.post(
    "/compare",
    response_model=MarketCompareResponseDTO,
    summary="Compare an APR to market rates",
    description="""
    Benchmark a quoted APR against current market rates.

    ## Quality Bands (first match wins)
    - Excellent: within 0.125 of the lowest market rate
    - Good: at or below the market average
    - Fair: at most 0.25 above the average
    - Poor: anything higher

    ## Potential Savings
    Monthly, five-year and lifetime savings at the lowest market rate.
    """,
    responses={
        422: {"description": "Validation error", "model": ErrorResponse},
        500: {"description": "Market data unavailable", "model": ErrorResponse},
    },
)
def compare_to_market(
    payload: MarketCompareRequestDTO,
    use_case: CompareToMarket = Depends(get_compare_to_market_use_case),
    settings: Settings = Depends(get_settings),
) -> MarketCompareResponseDTO:
    request = MarketMapper.to_domain_request(payload, default_credit_score=settings.default_credit_score)
    report = use_case.execute(request)
    return MarketMapper.to_response(report)
