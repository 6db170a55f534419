"""Body of every non-2xx response, referenced from the route ``responses`` maps."""

from pydantic import BaseModel, ConfigDict

_DECIMAL_FAILURE = {
    "field": "loan_details.interest_rate",
    "message": "Must be a valid decimal: abc",
    "code": "INVALID_DECIMAL",
}


class ErrorDetail(BaseModel):
    """One offending field of a rejected request."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "apr",
                "message": "apr must be >= interest_rate and < 25",
                "code": "INVALID_VALUE",
            }
        }
    )


class ErrorResponse(BaseModel):
    """
    ``detail`` is always present. ``code`` mirrors the domain error code
    (VALIDATION_ERROR, INTERNAL_ERROR, INVALID_VALUE...). ``errors`` only
    appears when individual fields can be blamed.
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "Market rate provider returned no rates", "code": "INTERNAL_ERROR"},
                {"detail": "Validation failed", "code": "VALIDATION_ERROR", "errors": [_DECIMAL_FAILURE]},
            ]
        }
    )
