from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from mortgage_compare.domain.loan import (
    ClosingCosts,
    InvalidLoanInput,
    LoanRecord,
    LoanTerms,
    PaymentBreakdown,
    require_number,
)
from mortgage_compare.engine.amortization import (
    AmortizationYear,
    amortization_schedule,
    estimate_apr,
    monthly_payment,
    total_interest,
)
from mortgage_compare.engine.estimators import (
    DEFAULT_PMI_TIERS,
    PmiTier,
    estimate_pmi,
    loan_to_value,
)


@dataclass(frozen=True, slots=True)
class LoanEstimateRequest:
    """
    Loan estimate terms as captured from the borrower's document.

    principal_interest and mortgage_insurance are optional: when the estimate
    does not state them they are derived from the terms. include_schedule adds
    the yearly amortization schedule at the note rate.
    """

    terms: LoanTerms
    closing_costs: ClosingCosts = field(default_factory=ClosingCosts)
    escrow: Decimal = Decimal("0")
    principal_interest: Decimal | None = None
    mortgage_insurance: Decimal | None = None
    lender_name: str | None = None
    points_paid: Decimal | None = None
    include_schedule: bool = False

    def validate(self) -> None:
        self.terms.validate()
        if require_number(self.escrow, "escrow") < 0:
            raise InvalidLoanInput.for_field("escrow", "escrow must be >= 0")
        if self.principal_interest is not None and require_number(self.principal_interest, "principal_interest") <= 0:
            raise InvalidLoanInput.for_field("principal_interest", "principal_interest must be > 0")
        if self.mortgage_insurance is not None and require_number(self.mortgage_insurance, "mortgage_insurance") < 0:
            raise InvalidLoanInput.for_field("mortgage_insurance", "mortgage_insurance must be >= 0")
        if require_number(self.closing_costs.total, "closing_costs.total") < 0:
            raise InvalidLoanInput.for_field("closing_costs.total", "closing_costs.total must be >= 0")
        if require_number(self.closing_costs.loan_costs, "closing_costs.loan_costs") < 0:
            raise InvalidLoanInput.for_field("closing_costs.loan_costs", "closing_costs.loan_costs must be >= 0")
        if self.points_paid is not None and require_number(self.points_paid, "points_paid") < 0:
            raise InvalidLoanInput.for_field("points_paid", "points_paid must be >= 0")


@dataclass(frozen=True, slots=True)
class LoanEstimate:
    record: LoanRecord
    ltv: Decimal | None
    total_interest: Decimal
    implied_apr: Decimal
    schedule: tuple[AmortizationYear, ...] = ()


@dataclass(frozen=True, slots=True)
class BuildLoanEstimate:
    """
    Complete a loan record from its terms.

    - P&I is derived with the amortization formula unless the estimate states it
    - LTV is derived when a property value is known
    - PMI is estimated above 80% LTV unless the estimate states it
    - The total payment is always the sum of P&I, PMI and escrow
    - implied_apr is a rough APR from the loan costs, for sanity-checking the quoted APR
    - The yearly amortization schedule is attached only when requested
    """

    pmi_tiers: tuple[PmiTier, ...] = DEFAULT_PMI_TIERS

    def execute(self, req: LoanEstimateRequest) -> LoanEstimate:
        req.validate()
        terms = req.terms

        principal_interest = req.principal_interest
        if principal_interest is None:
            principal_interest = monthly_payment(terms.loan_amount, terms.interest_rate, terms.term_years)

        ltv = loan_to_value(terms.loan_amount, terms.property_value)

        mortgage_insurance = req.mortgage_insurance
        if mortgage_insurance is None:
            mortgage_insurance = estimate_pmi(terms.loan_amount, ltv, terms.credit_score, self.pmi_tiers)

        record = LoanRecord(
            terms=terms,
            payment=PaymentBreakdown(
                principal_interest=principal_interest,
                mortgage_insurance=mortgage_insurance,
                escrow=req.escrow,
            ),
            closing_costs=req.closing_costs,
            lender_name=req.lender_name,
            points_paid=req.points_paid,
        )

        schedule: tuple[AmortizationYear, ...] = ()
        if req.include_schedule:
            schedule = tuple(amortization_schedule(terms.loan_amount, terms.interest_rate, terms.term_years))

        return LoanEstimate(
            record=record,
            ltv=ltv,
            total_interest=total_interest(terms.loan_amount, principal_interest, terms.term_years),
            implied_apr=estimate_apr(
                terms.loan_amount,
                terms.interest_rate,
                req.closing_costs.loan_costs,
                terms.term_years,
            ),
            schedule=schedule,
        )
