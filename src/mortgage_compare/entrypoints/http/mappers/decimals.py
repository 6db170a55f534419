from __future__ import annotations

from decimal import Decimal, InvalidOperation

from mortgage_compare.domain.errors import ValidationError
from mortgage_compare.domain.money import CENTS, RATE, round_half_up


class DecimalParser:
    """
    Converts DTO strings to Decimal, collecting every failure.

    Call raise_if_errors() once all fields are parsed so the client sees all
    invalid fields in one response.
    """

    def __init__(self) -> None:
        self.errors: list[dict[str, str]] = []

    def parse(self, field: str, value: str) -> Decimal:
        try:
            parsed = Decimal(value)
        except (InvalidOperation, ValueError, TypeError):
            parsed = None

        if parsed is None or not parsed.is_finite():
            self.errors.append(
                {
                    "field": field,
                    "message": f"Must be a valid decimal: {value}",
                    "code": "INVALID_DECIMAL",
                }
            )
            return Decimal("0")  # Placeholder to continue validation

        return parsed

    def parse_optional(self, field: str, value: str | None) -> Decimal | None:
        if value is None:
            return None
        return self.parse(field, value)

    def raise_if_errors(self) -> None:
        """
        Raises:
            ValidationError: If any field failed to parse
        """
        if self.errors:
            raise ValidationError(errors=self.errors)


def money(value: Decimal) -> str:
    """Decimal → string rounded to cents."""
    return str(round_half_up(value, CENTS))


def rate(value: Decimal) -> str:
    """Decimal → string rounded to 3 places."""
    return str(round_half_up(value, RATE))


def optional_money(value: Decimal | None) -> str | None:
    return None if value is None else money(value)
