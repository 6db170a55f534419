from pydantic import BaseModel, ConfigDict, Field

from mortgage_compare.domain.refinance import RefinanceRecommendation
from mortgage_compare.entrypoints.http.dtos.loans import MONEY_PATTERN, RATE_PATTERN


class RefinanceRequestDTO(BaseModel):
    """Request payload for a refinance breakeven evaluation."""

    loan_amount: str = Field(examples=["280000.00"], pattern=MONEY_PATTERN)
    current_monthly_payment: str = Field(examples=["2100.00"], pattern=MONEY_PATTERN)
    current_loan_term: int = Field(examples=[30], ge=1)
    new_interest_rate: str = Field(examples=["5.75"], pattern=RATE_PATTERN)
    new_closing_costs: str = Field(examples=["3600.00"], pattern=MONEY_PATTERN)
    new_loan_term: int | None = Field(default=None, description="Defaults to current_loan_term", ge=1)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "loan_amount": "280000.00",
                "current_monthly_payment": "2100.00",
                "current_loan_term": 30,
                "new_interest_rate": "5.75",
                "new_closing_costs": "3600.00",
            }
        }
    )


class RefinanceAnalysisDTO(BaseModel):
    short_term: str
    long_term: str


class RefinanceResponseDTO(BaseModel):
    recommendation: RefinanceRecommendation
    current_monthly: str
    new_monthly: str
    monthly_savings: str
    break_even_months: int | None = Field(description="Null when the refinance never pays for itself")
    break_even_years: str | None
    new_closing_costs: str
    total_savings_over_life: str
    analysis: RefinanceAnalysisDTO | None = None
