"""
Fixed-rate amortization math.

Rounding policy:
- Intermediate calculations use full precision Decimal
- The monthly payment is rounded to cents using ROUND_HALF_UP
- Totals are computed from the rounded payment (not re-rounded)
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from mortgage_compare.domain.loan import (
    MAX_INTEREST_RATE,
    InvalidLoanInput,
    require_number,
    require_term,
)
from mortgage_compare.domain.money import RATE, round_half_up

MONTHS_PER_YEAR = 12
FIVE_YEAR_MONTHS = 60


def _monthly_rate(annual_rate_percent: Decimal) -> Decimal:
    return annual_rate_percent / Decimal("100") / Decimal(MONTHS_PER_YEAR)


def _require_principal(value: Any) -> Decimal:
    principal = require_number(value, "principal")
    if principal <= 0:
        raise InvalidLoanInput.for_field("principal", "principal must be > 0")
    return principal


def _require_rate(value: Any, max_rate: Decimal = MAX_INTEREST_RATE) -> Decimal:
    rate = require_number(value, "annual_rate_percent")
    if not 0 <= rate < max_rate:
        raise InvalidLoanInput.for_field(
            "annual_rate_percent", f"annual_rate_percent must be >= 0 and < {max_rate}"
        )
    return rate


def monthly_payment(
    principal: Decimal | int,
    annual_rate_percent: Decimal | int,
    term_years: int,
    max_rate: Decimal = MAX_INTEREST_RATE,
) -> Decimal:
    """
    Principal-and-interest payment of a fixed-rate loan.

    Standard amortized loan payment:
        M = P * [r(1+r)^n] / [(1+r)^n - 1]
    with r = annual_rate_percent / 100 / 12 and n = term_years * 12.

    A zero rate returns P / n exactly, since the formula divides by zero there.
    max_rate caps the accepted rate; pass MAX_APR to price a payment at an APR.

    Raises:
        InvalidLoanInput: If principal <= 0, the rate is outside [0, max_rate) or
            the term is not an allowed term
    """
    principal = _require_principal(principal)
    rate = _require_rate(annual_rate_percent, max_rate)
    term_years = require_term(term_years)

    monthly_rate = _monthly_rate(rate)
    num_payments = Decimal(term_years * MONTHS_PER_YEAR)

    if monthly_rate == 0:
        return principal / num_payments

    one = Decimal("1")
    factor = (one + monthly_rate) ** num_payments
    return round_half_up(principal * (monthly_rate * factor) / (factor - one))


def total_interest(principal: Decimal | int, monthly_payment: Decimal | int, term_years: int) -> Decimal:
    """
    Interest paid over the full term at the given payment.

    Raises:
        InvalidLoanInput: If the payment does not even repay the principal
    """
    principal = _require_principal(principal)
    payment = require_number(monthly_payment, "monthly_payment")
    term_years = require_term(term_years)

    interest = payment * term_years * MONTHS_PER_YEAR - principal
    if interest < 0:
        raise InvalidLoanInput.for_field(
            "monthly_payment", "monthly_payment does not repay the principal over the term"
        )
    return interest


def five_year_cost(monthly_payment_total: Decimal | int, closing_costs_total: Decimal | int) -> Decimal:
    """Sixty months of total payment plus closing costs, the canonical ranking metric."""
    total = require_number(monthly_payment_total, "monthly_payment_total")
    closing = require_number(closing_costs_total, "closing_costs_total")
    if total < 0:
        raise InvalidLoanInput.for_field("monthly_payment_total", "monthly_payment_total must be >= 0")
    return total * FIVE_YEAR_MONTHS + closing


def estimate_apr(
    principal: Decimal | int,
    annual_rate_percent: Decimal | int,
    fees: Decimal | int,
    term_years: int,
) -> Decimal:
    """
    Rough APR indicator: total cost over principal, spread evenly across the term.

    Not a regulatory APR (no iterative cash-flow solve); use it only to flag
    estimates whose quoted APR looks far from what their fees imply.
    """
    principal = _require_principal(principal)
    fee_total = require_number(fees, "fees")
    if fee_total < 0:
        raise InvalidLoanInput.for_field("fees", "fees must be >= 0")

    payment = monthly_payment(principal, annual_rate_percent, term_years)
    total_cost = payment * term_years * MONTHS_PER_YEAR + fee_total
    apr = (total_cost - principal) / principal / term_years * Decimal("100")
    return round_half_up(apr, RATE)


@dataclass(frozen=True, slots=True)
class AmortizationYear:
    year: int
    principal_paid: Decimal
    interest_paid: Decimal
    ending_balance: Decimal


def amortization_schedule(
    principal: Decimal | int, annual_rate_percent: Decimal | int, term_years: int
) -> list[AmortizationYear]:
    """
    Year-by-year schedule at the rounded monthly payment.

    Monthly interest is rounded to cents; the final payment absorbs whatever
    balance remains so the schedule always ends at zero.
    """
    payment = monthly_payment(principal, annual_rate_percent, term_years)
    monthly_rate = _monthly_rate(Decimal(annual_rate_percent))
    num_payments = term_years * MONTHS_PER_YEAR

    balance = Decimal(principal)
    principal_ytd = Decimal("0")
    interest_ytd = Decimal("0")
    rows: list[AmortizationYear] = []

    for month in range(1, num_payments + 1):
        interest = round_half_up(balance * monthly_rate)
        principal_paid = payment - interest
        if month == num_payments or principal_paid > balance:
            principal_paid = balance

        balance -= principal_paid
        principal_ytd += principal_paid
        interest_ytd += interest

        if month % MONTHS_PER_YEAR == 0:
            rows.append(
                AmortizationYear(
                    year=month // MONTHS_PER_YEAR,
                    principal_paid=round_half_up(principal_ytd),
                    interest_paid=interest_ytd,
                    ending_balance=round_half_up(balance),
                )
            )
            principal_ytd = Decimal("0")
            interest_ytd = Decimal("0")

    return rows
