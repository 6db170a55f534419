from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class FeeLevel(str, Enum):
    """How heavy the fees folded into an APR look, judged by the APR - rate gap."""

    EXCELLENT = "Excellent - Very low fees"
    GOOD = "Good - Reasonable fees"
    FAIR = "Fair - Moderate fees"
    HIGH = "High - Significant fees included"


@dataclass(frozen=True, slots=True)
class FeeAnalysis:
    """
    What the spread between a quoted APR and its note rate says about fees.

    Payments are rounded to cents; apr_difference and fee_percent keep full
    precision.
    """

    interest_rate: Decimal
    apr: Decimal
    apr_difference: Decimal
    level: FeeLevel
    monthly_payment_at_rate: Decimal
    monthly_payment_at_apr: Decimal
    closing_costs: Decimal
    fee_percent: Decimal
    recommendations: tuple[str, ...]

    @property
    def monthly_difference(self) -> Decimal:
        return self.monthly_payment_at_apr - self.monthly_payment_at_rate
