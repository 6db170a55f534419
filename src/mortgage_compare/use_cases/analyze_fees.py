from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from mortgage_compare.domain.fees import FeeAnalysis
from mortgage_compare.domain.loan import (
    MAX_APR,
    MAX_INTEREST_RATE,
    MAX_LOAN_AMOUNT,
    InvalidLoanInput,
    require_number,
    require_term,
)
from mortgage_compare.engine.fee_analysis import analyze_fees


@dataclass(frozen=True, slots=True)
class FeeAnalysisRequest:
    loan_amount: Decimal
    interest_rate: Decimal
    apr: Decimal
    term_years: int
    closing_costs: Decimal = Decimal("0")

    def validate(self) -> None:
        if not 0 < require_number(self.loan_amount, "loan_amount") <= MAX_LOAN_AMOUNT:
            raise InvalidLoanInput.for_field(
                "loan_amount", f"loan_amount must be > 0 and <= {MAX_LOAN_AMOUNT}"
            )
        if not 0 < require_number(self.interest_rate, "interest_rate") < MAX_INTEREST_RATE:
            raise InvalidLoanInput.for_field(
                "interest_rate", f"interest_rate must be > 0 and < {MAX_INTEREST_RATE}"
            )
        if not self.interest_rate <= require_number(self.apr, "apr") < MAX_APR:
            raise InvalidLoanInput.for_field("apr", f"apr must be >= interest_rate and < {MAX_APR}")
        require_term(self.term_years)
        if require_number(self.closing_costs, "closing_costs") < 0:
            raise InvalidLoanInput.for_field("closing_costs", "closing_costs must be >= 0")


@dataclass(frozen=True, slots=True)
class AnalyzeFees:
    """
    Read the fees folded into a quoted APR.

    The APR - rate gap picks a fee level; the payment at the APR against the
    payment at the note rate shows what the fees cost per month.
    """

    def execute(self, req: FeeAnalysisRequest) -> FeeAnalysis:
        """
        Raises:
            InvalidLoanInput: If the request is invalid
        """
        req.validate()
        return analyze_fees(req.loan_amount, req.interest_rate, req.apr, req.term_years, req.closing_costs)
