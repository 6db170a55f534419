from pydantic import BaseModel, ConfigDict, Field

from mortgage_compare.domain.fees import FeeLevel
from mortgage_compare.entrypoints.http.dtos.loans import MONEY_PATTERN, RATE_PATTERN


class FeeAnalysisRequestDTO(BaseModel):
    """Request payload for reading the fees implied by an APR."""

    loan_amount: str = Field(examples=["280000.00"], pattern=MONEY_PATTERN)
    interest_rate: str = Field(examples=["6.75"], pattern=RATE_PATTERN)
    apr: str = Field(
        description="APR in percent, must be >= interest_rate",
        examples=["7.125"],
        pattern=RATE_PATTERN,
    )
    loan_term: int = Field(examples=[30], ge=1)
    closing_costs: str = Field(default="0", examples=["9800.00"], pattern=MONEY_PATTERN)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "loan_amount": "280000.00",
                "interest_rate": "6.75",
                "apr": "7.125",
                "loan_term": 30,
                "closing_costs": "9800.00",
            }
        }
    )


class FeeAnalysisResponseDTO(BaseModel):
    interest_rate: str
    apr: str
    apr_difference: str
    interpretation: FeeLevel
    monthly_payment_at_rate: str
    monthly_payment_at_apr: str
    monthly_difference: str
    closing_costs: str
    fee_percent: str = Field(description="Closing costs as a percent of the loan amount")
    recommendations: list[str]
