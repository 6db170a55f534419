from __future__ import annotations

from dataclasses import dataclass

from mortgage_compare.domain.comparison import LoanStatistics
from mortgage_compare.domain.loan import LoanRecord
from mortgage_compare.engine.comparator import loan_statistics


@dataclass(frozen=True, slots=True)
class SummarizeLoansRequest:
    loans: tuple[LoanRecord, ...]


class SummarizeLoans:
    """Use case for aggregate figures (APR range, average payment...) across offers."""

    def execute(self, request: SummarizeLoansRequest) -> LoanStatistics:
        """
        Raises:
            InvalidLoanInput: If no loans are given or any terms are invalid
        """
        for loan in request.loans:
            loan.terms.validate()

        return loan_statistics(request.loans)
