"""Errors raised by the loan engine and use cases.

None of them know about HTTP; the entrypoint decides status codes from
``error_code``.
"""

from typing import Any


class DomainError(Exception):
    """Root of every error the loan engine raises on purpose.

    ``error_code`` is a stable identifier clients can switch on; ``context``
    holds whatever extra facts explain the failure (offending field, term...).
    """

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "code": self.error_code, **self.context}


class ValidationError(DomainError):
    """An input broke a loan rule.

    Examples:
        - interest_rate of 20 or more
        - apr below interest_rate
        - term outside 10, 15, 20, 25 or 30 years
        - a comparison with a single offer

    ``errors`` lists one entry per offending field, each a dict with
    ``field``, ``message`` and usually ``code``:

        [{"field": "apr", "message": "apr must be >= interest_rate and < 25", "code": "INVALID_VALUE"}]

    Surfaces over REST as 422 Unprocessable Entity.
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, str]] | None = None,
        **context: Any,
    ) -> None:
        self.errors: list[dict[str, str]] | None = errors or None
        if message is None:
            message = "Validation failed" if self.errors else "Validation error"
        super().__init__(message, **context)

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        if self.errors:
            payload["errors"] = self.errors
        return payload


class InternalError(DomainError):
    """Something the caller could not have prevented, e.g. an empty market feed.

    Surfaces over REST as 500 and is logged at ERROR.
    """

    error_code: str = "INTERNAL_ERROR"
