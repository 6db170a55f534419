from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from mortgage_compare.domain.loan import (
    DEFAULT_CREDIT_SCORE,
    MAX_INTEREST_RATE,
    MAX_PROPERTY_VALUE,
    InvalidLoanInput,
    PaymentBreakdown,
    require_credit_score,
    require_number,
    require_term,
)
from mortgage_compare.domain.money import round_half_up
from mortgage_compare.engine.amortization import (
    MONTHS_PER_YEAR,
    five_year_cost,
    monthly_payment,
    total_interest,
)
from mortgage_compare.engine.estimators import (
    DEFAULT_PMI_TIERS,
    PmiTier,
    estimate_pmi,
    loan_to_value,
)

DEFAULT_DOWN_PAYMENT_PERCENTS = (Decimal("5"), Decimal("10"), Decimal("15"), Decimal("20"))
DEFAULT_SCENARIO_TERMS = (15, 30)


@dataclass(frozen=True, slots=True)
class ScenarioRequest:
    property_value: Decimal
    interest_rate: Decimal
    down_payment_percents: tuple[Decimal, ...] = DEFAULT_DOWN_PAYMENT_PERCENTS
    loan_terms: tuple[int, ...] = DEFAULT_SCENARIO_TERMS
    credit_score: int = DEFAULT_CREDIT_SCORE
    closing_costs: Decimal = Decimal("0")

    def validate(self) -> None:
        property_value = require_number(self.property_value, "property_value")
        if not 0 < property_value <= MAX_PROPERTY_VALUE:
            raise InvalidLoanInput.for_field(
                "property_value", f"property_value must be > 0 and <= {MAX_PROPERTY_VALUE}"
            )
        rate = require_number(self.interest_rate, "interest_rate")
        if not 0 < rate < MAX_INTEREST_RATE:
            raise InvalidLoanInput.for_field(
                "interest_rate", f"interest_rate must be > 0 and < {MAX_INTEREST_RATE}"
            )
        if not self.down_payment_percents:
            raise InvalidLoanInput.for_field("down_payment_percents", "at least one down payment is required")
        for percent in self.down_payment_percents:
            if not 0 <= require_number(percent, "down_payment_percents") < 100:
                raise InvalidLoanInput.for_field(
                    "down_payment_percents", "down_payment_percents must be >= 0 and < 100"
                )
        if not self.loan_terms:
            raise InvalidLoanInput.for_field("loan_terms", "at least one loan term is required")
        for term in self.loan_terms:
            require_term(term)
        require_credit_score(self.credit_score)
        if require_number(self.closing_costs, "closing_costs") < 0:
            raise InvalidLoanInput.for_field("closing_costs", "closing_costs must be >= 0")


@dataclass(frozen=True, slots=True)
class Scenario:
    down_payment_percent: Decimal
    down_payment_amount: Decimal
    loan_term: int
    loan_amount: Decimal
    ltv: Decimal | None
    payment: PaymentBreakdown
    total_interest: Decimal
    total_paid: Decimal
    lifetime_cost: Decimal
    five_year_cost: Decimal


@dataclass(frozen=True, slots=True)
class ScenarioSet:
    scenarios: tuple[Scenario, ...]

    @property
    def best(self) -> Scenario:
        return self.scenarios[0]


@dataclass(frozen=True, slots=True)
class CalculateScenarios:
    """
    Price every down payment / term combination for one property.

    Combinations are generated with down payment as the outer loop and term as
    the inner loop, then stably sorted by five-year cost, so equal costs keep
    generation order.
    """

    pmi_tiers: tuple[PmiTier, ...] = DEFAULT_PMI_TIERS

    def execute(self, req: ScenarioRequest) -> ScenarioSet:
        req.validate()

        scenarios = [
            self._scenario(req, Decimal(percent), term)
            for percent in req.down_payment_percents
            for term in req.loan_terms
        ]
        scenarios.sort(key=lambda s: s.five_year_cost)

        return ScenarioSet(scenarios=tuple(scenarios))

    def _scenario(self, req: ScenarioRequest, percent: Decimal, term: int) -> Scenario:
        down_payment = round_half_up(req.property_value * percent / Decimal("100"))
        loan_amount = req.property_value - down_payment
        ltv = loan_to_value(loan_amount, req.property_value)

        principal_interest = monthly_payment(loan_amount, req.interest_rate, term)
        pmi = estimate_pmi(loan_amount, ltv, req.credit_score, self.pmi_tiers)
        payment = PaymentBreakdown(principal_interest=principal_interest, mortgage_insurance=pmi)

        total_paid = payment.total * term * MONTHS_PER_YEAR

        return Scenario(
            down_payment_percent=percent,
            down_payment_amount=down_payment,
            loan_term=term,
            loan_amount=loan_amount,
            ltv=ltv,
            payment=payment,
            total_interest=total_interest(loan_amount, principal_interest, term),
            total_paid=total_paid,
            lifetime_cost=total_paid + down_payment,
            five_year_cost=five_year_cost(payment.total, req.closing_costs),
        )
