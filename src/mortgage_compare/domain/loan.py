from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from decimal import Decimal
from typing import Any

from mortgage_compare.domain.errors import ValidationError


class InvalidLoanInput(ValidationError):
    """Raised when a loan input is non-numeric, negative or out of range."""

    @classmethod
    def for_field(cls, name: str, message: str, code: str = "INVALID_VALUE") -> InvalidLoanInput:
        return cls(message, errors=[field_error(name, message, code)])


ALLOWED_TERMS_YEARS = frozenset({10, 15, 20, 25, 30})
MAX_LOAN_AMOUNT = Decimal("10000000")
MAX_INTEREST_RATE = Decimal("20")
MAX_APR = Decimal("25")
MAX_PROPERTY_VALUE = Decimal("50000000")
MIN_CREDIT_SCORE = 300
MAX_CREDIT_SCORE = 850
DEFAULT_CREDIT_SCORE = 720


def field_error(name: str, message: str, code: str = "INVALID_VALUE") -> dict[str, str]:
    return {"field": name, "message": message, "code": code}


def require_number(value: Any, name: str) -> Decimal:
    """
    Accept Decimal or int and return a Decimal.

    Raises:
        InvalidLoanInput: For floats, bools, strings or anything else
    """
    # Guardrails: prevent float leakage past boundary
    if isinstance(value, bool) or not isinstance(value, (Decimal, int)):
        message = f"{name} must be Decimal or int (no floats past the boundary)"
        raise InvalidLoanInput.for_field(name, message, "INVALID_TYPE")
    return Decimal(value)


def require_term(term_years: Any) -> int:
    if isinstance(term_years, bool) or term_years not in ALLOWED_TERMS_YEARS:
        message = f"term_years must be one of {sorted(ALLOWED_TERMS_YEARS)}"
        raise InvalidLoanInput.for_field("term_years", message)
    return int(term_years)


def require_credit_score(credit_score: Any) -> int:
    if isinstance(credit_score, bool) or not isinstance(credit_score, int):
        message = "credit_score must be an integer"
        raise InvalidLoanInput.for_field("credit_score", message, "INVALID_TYPE")
    if not MIN_CREDIT_SCORE <= credit_score <= MAX_CREDIT_SCORE:
        message = f"credit_score must be between {MIN_CREDIT_SCORE} and {MAX_CREDIT_SCORE}"
        raise InvalidLoanInput.for_field("credit_score", message)
    return credit_score


@dataclass(frozen=True, slots=True)
class LoanTerms:
    loan_amount: Decimal
    interest_rate: Decimal
    apr: Decimal
    term_years: int
    property_value: Decimal | None = None
    credit_score: int = DEFAULT_CREDIT_SCORE

    def validate(self) -> None:
        """
        Validate every field and report all failures at once.

        Raises:
            InvalidLoanInput: If any field is out of range
        """
        require_number(self.loan_amount, "loan_amount")
        require_number(self.interest_rate, "interest_rate")
        require_number(self.apr, "apr")
        if self.property_value is not None:
            require_number(self.property_value, "property_value")

        errors = []
        if not 0 < self.loan_amount <= MAX_LOAN_AMOUNT:
            errors.append(field_error("loan_amount", f"loan_amount must be > 0 and <= {MAX_LOAN_AMOUNT}"))
        if not 0 < self.interest_rate < MAX_INTEREST_RATE:
            errors.append(field_error("interest_rate", f"interest_rate must be > 0 and < {MAX_INTEREST_RATE}"))
        if not self.interest_rate <= self.apr < MAX_APR:
            errors.append(field_error("apr", f"apr must be >= interest_rate and < {MAX_APR}"))
        if isinstance(self.term_years, bool) or self.term_years not in ALLOWED_TERMS_YEARS:
            errors.append(field_error("term_years", f"term_years must be one of {sorted(ALLOWED_TERMS_YEARS)}"))
        if self.property_value is not None and not 0 < self.property_value <= MAX_PROPERTY_VALUE:
            errors.append(
                field_error("property_value", f"property_value must be > 0 and <= {MAX_PROPERTY_VALUE}")
            )
        if isinstance(self.credit_score, bool) or not isinstance(self.credit_score, int):
            errors.append(field_error("credit_score", "credit_score must be an integer", "INVALID_TYPE"))
        elif not MIN_CREDIT_SCORE <= self.credit_score <= MAX_CREDIT_SCORE:
            errors.append(
                field_error(
                    "credit_score",
                    f"credit_score must be between {MIN_CREDIT_SCORE} and {MAX_CREDIT_SCORE}",
                )
            )

        if errors:
            raise InvalidLoanInput("; ".join(e["message"] for e in errors), errors=errors)


@dataclass(frozen=True, slots=True)
class PaymentBreakdown:
    principal_interest: Decimal
    mortgage_insurance: Decimal = Decimal("0")
    escrow: Decimal = Decimal("0")

    @property
    def total(self) -> Decimal:
        # Always the sum of the parts, never stored
        return self.principal_interest + self.mortgage_insurance + self.escrow


@dataclass(frozen=True, slots=True)
class ClosingCosts:
    total: Decimal = Decimal("0")
    loan_costs: Decimal = Decimal("0")
    other_costs: Decimal = Decimal("0")
    lender_credits: Decimal = Decimal("0")


@dataclass(frozen=True, slots=True)
class LoanRecord:
    """A single loan offer as the comparator sees it."""

    terms: LoanTerms
    payment: PaymentBreakdown
    closing_costs: ClosingCosts = field(default_factory=ClosingCosts)
    lender_name: str | None = None
    points_paid: Decimal | None = None

    @property
    def five_year_total(self) -> Decimal:
        from mortgage_compare.engine.amortization import five_year_cost

        return five_year_cost(self.payment.total, self.closing_costs.total)


# ==============================================================================
# Partial updates
# ==============================================================================


@dataclass(frozen=True, slots=True)
class LoanTermsUpdate:
    loan_amount: Decimal | None = None
    interest_rate: Decimal | None = None
    apr: Decimal | None = None
    term_years: int | None = None
    property_value: Decimal | None = None
    credit_score: int | None = None


@dataclass(frozen=True, slots=True)
class PaymentBreakdownUpdate:
    principal_interest: Decimal | None = None
    mortgage_insurance: Decimal | None = None
    escrow: Decimal | None = None


@dataclass(frozen=True, slots=True)
class ClosingCostsUpdate:
    total: Decimal | None = None
    loan_costs: Decimal | None = None
    other_costs: Decimal | None = None
    lender_credits: Decimal | None = None


def _set_fields(update: Any) -> dict[str, Any]:
    return {f.name: getattr(update, f.name) for f in fields(update) if getattr(update, f.name) is not None}


def merge_loan_terms(current: LoanTerms, update: LoanTermsUpdate) -> LoanTerms:
    """
    Apply an update field by field: set fields override, None keeps current.

    The merged terms are validated before being returned.

    Raises:
        InvalidLoanInput: If the merged terms are invalid
    """
    merged = replace(current, **_set_fields(update))
    merged.validate()
    return merged


def merge_payment(current: PaymentBreakdown, update: PaymentBreakdownUpdate) -> PaymentBreakdown:
    return replace(current, **_set_fields(update))


def merge_closing_costs(current: ClosingCosts, update: ClosingCostsUpdate) -> ClosingCosts:
    return replace(current, **_set_fields(update))
