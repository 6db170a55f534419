from pydantic import BaseModel, ConfigDict, Field

from mortgage_compare.entrypoints.http.dtos.loans import (
    MONEY_PATTERN,
    RATE_PATTERN,
    PaymentBreakdownDTO,
)


class ScenarioRequestDTO(BaseModel):
    """Request payload for pricing down payment / term combinations."""

    property_value: str = Field(examples=["350000.00"], pattern=MONEY_PATTERN)
    interest_rate: str = Field(examples=["6.75"], pattern=RATE_PATTERN)
    down_payment_percents: list[str] = Field(
        default=["5", "10", "15", "20"],
        description="Down payments in percent of the property value",
    )
    loan_terms: list[int] = Field(default=[15, 30], description="Terms in years")
    credit_score: int | None = Field(default=None, examples=[720])
    closing_costs: str = Field(
        default="0",
        description="Closing costs applied to every scenario's five-year cost",
        pattern=MONEY_PATTERN,
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "property_value": "350000.00",
                "interest_rate": "6.75",
                "down_payment_percents": ["10", "20"],
                "loan_terms": [15, 30],
            }
        }
    )


class ScenarioDTO(BaseModel):
    down_payment_percent: str
    down_payment_amount: str
    loan_term: int
    loan_amount: str
    ltv: str | None
    monthly_payment: PaymentBreakdownDTO
    total_interest: str
    total_paid: str
    lifetime_cost: str
    five_year_cost: str


class ScenarioSummaryDTO(BaseModel):
    property_value: str
    interest_rate: str
    scenarios_generated: int


class ScenarioResponseDTO(BaseModel):
    scenarios: list[ScenarioDTO] = Field(description="Sorted by five-year cost, cheapest first")
    best_scenario: ScenarioDTO
    summary: ScenarioSummaryDTO
