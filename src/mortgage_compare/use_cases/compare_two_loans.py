from __future__ import annotations

from dataclasses import dataclass

from mortgage_compare.domain.comparison import HeadToHead
from mortgage_compare.domain.loan import LoanRecord
from mortgage_compare.engine.comparator import head_to_head


@dataclass(frozen=True, slots=True)
class CompareTwoLoansRequest:
    loan1: LoanRecord
    loan2: LoanRecord


class CompareTwoLoans:
    """
    Use case for a side-by-side breakdown of exactly two offers.

    Responsibilities:
    - Validate both offers' terms
    - Report each metric (apr, monthly payment, closing costs, five-year total)
      with its difference and winner
    - Name the overall winner by five-year total
    """

    def execute(self, request: CompareTwoLoansRequest) -> HeadToHead:
        """
        Raises:
            InvalidLoanInput: If either offer's terms are invalid
        """
        request.loan1.terms.validate()
        request.loan2.terms.validate()

        return head_to_head(request.loan1, request.loan2)
