from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from mortgage_compare.domain.loan import (
    MAX_INTEREST_RATE,
    InvalidLoanInput,
    require_number,
    require_term,
)
from mortgage_compare.domain.money import TENTH, round_half_up
from mortgage_compare.domain.refinance import (
    DEFAULT_RECOMMENDED_MAX_MONTHS,
    RefinanceRecommendation,
)
from mortgage_compare.engine.amortization import MONTHS_PER_YEAR, monthly_payment
from mortgage_compare.engine.estimators import classify_refinance, refinance_breakeven_months

GREAT_DEAL_MAX_MONTHS = 24
EXCELLENT_SAVINGS_MULTIPLE = 3


@dataclass(frozen=True, slots=True)
class RefinanceRequest:
    loan_amount: Decimal
    current_monthly_payment: Decimal
    current_term_years: int
    new_interest_rate: Decimal
    new_closing_costs: Decimal
    new_term_years: int | None = None

    def validate(self) -> None:
        if require_number(self.loan_amount, "loan_amount") <= 0:
            raise InvalidLoanInput.for_field("loan_amount", "loan_amount must be > 0")
        if require_number(self.current_monthly_payment, "current_monthly_payment") <= 0:
            raise InvalidLoanInput.for_field("current_monthly_payment", "current_monthly_payment must be > 0")
        require_term(self.current_term_years)
        if not 0 < require_number(self.new_interest_rate, "new_interest_rate") < MAX_INTEREST_RATE:
            raise InvalidLoanInput.for_field(
                "new_interest_rate", f"new_interest_rate must be > 0 and < {MAX_INTEREST_RATE}"
            )
        if require_number(self.new_closing_costs, "new_closing_costs") < 0:
            raise InvalidLoanInput.for_field("new_closing_costs", "new_closing_costs must be >= 0")
        if self.new_term_years is not None:
            require_term(self.new_term_years)


@dataclass(frozen=True, slots=True)
class RefinanceEvaluation:
    recommendation: RefinanceRecommendation
    current_monthly: Decimal
    new_monthly: Decimal
    monthly_savings: Decimal
    break_even_months: int | None
    break_even_years: Decimal | None
    new_closing_costs: Decimal
    total_savings_over_life: Decimal
    short_term: str | None = None
    long_term: str | None = None


@dataclass(frozen=True, slots=True)
class EvaluateRefinance:
    """
    Decide whether refinancing at a new rate pays for itself.

    The recommendation is evaluated fresh on every call:
    - NOT_RECOMMENDED: the new payment is not lower, breakeven is never reached
    - RECOMMENDED: closing costs are recovered within recommended_max_months (inclusive)
    - CONSIDER: savings exist but take longer to recover the costs
    """

    recommended_max_months: int = DEFAULT_RECOMMENDED_MAX_MONTHS

    def execute(self, req: RefinanceRequest) -> RefinanceEvaluation:
        req.validate()

        term_years = req.new_term_years or req.current_term_years
        new_monthly = monthly_payment(req.loan_amount, req.new_interest_rate, term_years)
        monthly_savings = req.current_monthly_payment - new_monthly

        break_even = refinance_breakeven_months(req.new_closing_costs, monthly_savings)
        recommendation = classify_refinance(break_even, self.recommended_max_months)

        gross_savings = monthly_savings * term_years * MONTHS_PER_YEAR

        break_even_years = short_term = long_term = None
        if break_even is not None:
            break_even_years = round_half_up(Decimal(break_even) / MONTHS_PER_YEAR, TENTH)
            short_term = "Great deal" if break_even <= GREAT_DEAL_MAX_MONTHS else "Decent"
            long_term = (
                "Excellent"
                if gross_savings > req.new_closing_costs * EXCELLENT_SAVINGS_MULTIPLE
                else "Good"
            )

        return RefinanceEvaluation(
            recommendation=recommendation,
            current_monthly=req.current_monthly_payment,
            new_monthly=new_monthly,
            monthly_savings=round_half_up(monthly_savings),
            break_even_months=break_even,
            break_even_years=break_even_years,
            new_closing_costs=req.new_closing_costs,
            total_savings_over_life=round_half_up(gross_savings - req.new_closing_costs),
            short_term=short_term,
            long_term=long_term,
        )
