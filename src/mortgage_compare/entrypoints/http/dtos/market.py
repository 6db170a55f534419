from pydantic import BaseModel, ConfigDict, Field

from mortgage_compare.domain.market import RateQuality
from mortgage_compare.entrypoints.http.dtos.loans import MONEY_PATTERN, RATE_PATTERN


class MarketCompareRequestDTO(BaseModel):
    """Request payload for benchmarking a quoted APR against market rates."""

    loan_amount: str = Field(examples=["280000.00"], pattern=MONEY_PATTERN)
    apr: str = Field(examples=["6.875"], pattern=RATE_PATTERN)
    loan_term: int = Field(examples=[30], ge=1)
    monthly_payment: str = Field(
        description="Current total monthly payment",
        examples=["2266.07"],
        pattern=MONEY_PATTERN,
    )
    credit_score: int | None = Field(default=None, examples=[720])
    points_paid: str | None = Field(
        default=None,
        description="Discount points paid, in percent of the loan amount",
        examples=["1.0"],
        pattern=RATE_PATTERN,
    )
    property_value: str | None = Field(
        default=None,
        description="Property value; enables the LTV note",
        examples=["340000.00"],
        pattern=MONEY_PATTERN,
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "loan_amount": "280000.00",
                "apr": "6.875",
                "loan_term": 30,
                "monthly_payment": "2266.07",
                "credit_score": 720,
            }
        }
    )


class MarketRangeDTO(BaseModel):
    min: str
    max: str


class MarketComparisonDTO(BaseModel):
    quality: RateQuality
    difference: str
    percentile: int
    better_than_percent: int
    market_average: str
    market_range: MarketRangeDTO


class MarketRatesDTO(BaseModel):
    average: str
    min: str
    max: str
    median: str


class MarketSourceDTO(BaseModel):
    provider: str
    rate: str
    apr: str
    points: str


class MarketDataDTO(BaseModel):
    rates: MarketRatesDTO
    sources: list[MarketSourceDTO]


class PotentialSavingsDTO(BaseModel):
    monthly: str
    five_year: str
    lifetime: str


class MarketCompareResponseDTO(BaseModel):
    comparison: MarketComparisonDTO
    market_data: MarketDataDTO
    potential_savings: PotentialSavingsDTO
    recommendations: list[str]
