from pydantic import BaseModel, ConfigDict, Field

from mortgage_compare.domain.comparison import BetterOption, Metric

MONEY_PATTERN = r"^\d+(\.\d{1,2})?$"
SIGNED_MONEY_PATTERN = r"^-?\d+(\.\d{1,2})?$"
RATE_PATTERN = r"^\d+(\.\d{1,3})?$"


class LoanDetailsDTO(BaseModel):
    """Core loan terms as decimal strings."""

    loan_amount: str = Field(
        description="Loan amount as decimal string",
        examples=["280000.00"],
        pattern=MONEY_PATTERN,
    )
    interest_rate: str = Field(
        description="Nominal annual rate in percent (e.g., '6.75' = 6.75%)",
        examples=["6.75"],
        pattern=RATE_PATTERN,
    )
    apr: str = Field(
        description="APR in percent, must be >= interest_rate",
        examples=["6.875"],
        pattern=RATE_PATTERN,
    )
    loan_term: int = Field(
        description="Loan term in years. Must be one of: 10, 15, 20, 25, 30",
        examples=[30],
        ge=1,
    )
    property_value: str | None = Field(
        default=None,
        description="Property value as decimal string",
        examples=["350000.00"],
        pattern=MONEY_PATTERN,
    )
    credit_score: int | None = Field(
        default=None,
        description="Borrower credit score (300-850). Defaults to 720",
        examples=[720],
    )


class ClosingCostsDTO(BaseModel):
    total: str = Field(default="0", examples=["8500.00"], pattern=MONEY_PATTERN)
    loan_costs: str = Field(default="0", examples=["4200.00"], pattern=MONEY_PATTERN)
    other_costs: str = Field(default="0", examples=["4300.00"], pattern=MONEY_PATTERN)
    lender_credits: str = Field(
        default="0",
        description="Lender credits; negative values are credits to the borrower",
        examples=["-500.00"],
        pattern=SIGNED_MONEY_PATTERN,
    )


class PaymentBreakdownDTO(BaseModel):
    principal_interest: str
    mortgage_insurance: str
    escrow: str
    total: str


class LoanEstimateRequestDTO(BaseModel):
    """Request payload for building a loan estimate record."""

    loan_details: LoanDetailsDTO
    closing_costs: ClosingCostsDTO = ClosingCostsDTO()
    escrow: str = Field(default="0", examples=["450.00"], pattern=MONEY_PATTERN)
    principal_interest: str | None = Field(
        default=None,
        description="P&I as stated on the estimate; derived when omitted",
        pattern=MONEY_PATTERN,
    )
    mortgage_insurance: str | None = Field(
        default=None,
        description="Monthly mortgage insurance as stated; estimated above 80% LTV when omitted",
        pattern=MONEY_PATTERN,
    )
    lender_name: str | None = Field(default=None, examples=["Lender A"])
    points_paid: str | None = Field(default=None, pattern=MONEY_PATTERN)
    include_schedule: bool = Field(
        default=False,
        description="Attach the year-by-year amortization schedule at the note rate",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "loan_details": {
                    "loan_amount": "280000.00",
                    "interest_rate": "6.75",
                    "apr": "6.875",
                    "loan_term": 30,
                    "property_value": "350000.00",
                    "credit_score": 720,
                },
                "closing_costs": {"total": "8500.00", "loan_costs": "4200.00"},
                "escrow": "450.00",
                "lender_name": "Lender A",
            }
        }
    )


class AmortizationYearDTO(BaseModel):
    year: int
    principal_paid: str
    interest_paid: str
    ending_balance: str


class LoanEstimateResponseDTO(BaseModel):
    """Completed loan estimate with derived figures."""

    loan_details: LoanDetailsDTO
    monthly_payment: PaymentBreakdownDTO
    closing_costs: ClosingCostsDTO
    lender_name: str | None
    ltv: str | None = Field(description="Loan-to-value percent, null without a property value")
    total_interest: str
    implied_apr: str = Field(description="Rough APR implied by loan costs (not a regulatory APR)")
    five_year_total: str
    schedule: list[AmortizationYearDTO] | None = Field(
        default=None,
        description="Yearly amortization schedule, present when include_schedule was set",
    )


class LoanOfferDTO(BaseModel):
    """One offer to compare: terms, stated payment parts and closing costs."""

    loan_details: LoanDetailsDTO
    principal_interest: str = Field(examples=["1816.07"], pattern=MONEY_PATTERN)
    mortgage_insurance: str = Field(default="0", pattern=MONEY_PATTERN)
    escrow: str = Field(default="0", pattern=MONEY_PATTERN)
    closing_costs: ClosingCostsDTO = ClosingCostsDTO()
    lender_name: str | None = None


class CompareLoansRequestDTO(BaseModel):
    loans: list[LoanOfferDTO] = Field(description="At least 2 offers")
    metrics: list[Metric] | None = Field(
        default=None,
        description="Metrics to score on; all four when omitted",
    )


class RankedLoanDTO(BaseModel):
    index: int = Field(description="Position of the offer in the request")
    lender_name: str | None
    apr: str
    monthly_payment: str
    closing_costs: str
    five_year_total: str


class PairwiseComparisonDTO(BaseModel):
    loan1_index: int
    loan2_index: int
    monthly_payment_diff: str
    apr_diff: str
    closing_costs_diff: str
    five_year_diff: str
    better_option: BetterOption


class MetricScoreDTO(BaseModel):
    index: int
    score: int
    metrics_won: list[Metric]


class CompareLoansResponseDTO(BaseModel):
    ranking: list[RankedLoanDTO]
    best_loan: RankedLoanDTO
    comparisons: list[PairwiseComparisonDTO]
    scores: list[MetricScoreDTO]


class CompareTwoLoansRequestDTO(BaseModel):
    loan1: LoanOfferDTO
    loan2: LoanOfferDTO


class MetricBreakdownDTO(BaseModel):
    metric: Metric
    loan1: str
    loan2: str
    difference: str = Field(description="loan2 - loan1")
    winner: BetterOption = Field(description="Lower value wins; equal values go to loan1")


class CompareTwoLoansResponseDTO(BaseModel):
    comparison: PairwiseComparisonDTO
    breakdown: list[MetricBreakdownDTO]
    overall_winner: BetterOption


class LoanStatisticsRequestDTO(BaseModel):
    loans: list[LoanOfferDTO] = Field(description="At least 1 offer")


class LoanStatisticsResponseDTO(BaseModel):
    total_loans: int
    average_apr: str
    lowest_apr: str
    highest_apr: str
    average_monthly_payment: str
    total_loan_amount: str
    best_loan: RankedLoanDTO = Field(description="Offer with the lowest APR")
