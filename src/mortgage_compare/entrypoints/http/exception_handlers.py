"""Turn exceptions into ErrorResponse-shaped JSON.

Status codes come from the domain error code; anything unknown to the domain
becomes a generic 500 so internals never leak to clients.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from mortgage_compare.domain.errors import DomainError

logger = logging.getLogger(__name__)

UNPROCESSABLE = 422

STATUS_BY_ERROR_CODE: dict[str, int] = {
    "VALIDATION_ERROR": UNPROCESSABLE,
    "INTERNAL_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _where(request: Request) -> dict[str, str]:
    return {"path": request.url.path, "method": request.method}


def _error_body(detail: str, code: str, errors: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"detail": detail, "code": code}
    if errors is not None:
        body["errors"] = errors
    return body


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """VALIDATION_ERROR → 422, INTERNAL_ERROR → 500, any other domain code → 400."""
    status_code = STATUS_BY_ERROR_CODE.get(exc.error_code, status.HTTP_400_BAD_REQUEST)
    payload = exc.to_dict()

    server_side = status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR
    logger.log(
        logging.ERROR if server_side else logging.INFO,
        "Domain error" if server_side else "Client error",
        extra={
            "error_code": exc.error_code,
            "error_message": exc.message,
            **({"context": exc.context} if server_side else {}),
            **_where(request),
        },
    )

    return JSONResponse(
        status_code=status_code,
        content=_error_body(payload["message"], payload["code"], payload.get("errors")),
    )


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Schema failures caught by FastAPI before a route runs, e.g. apr="6.5%" or a missing loan_term."""
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part not in ("body", "query")),
            "message": error["msg"],
            "code": error["type"],
        }
        for error in exc.errors()
    ]

    logger.info("Request validation error", extra={"errors": errors, **_where(request)})

    return JSONResponse(
        status_code=UNPROCESSABLE,
        content=_error_body("Invalid request parameters", "VALIDATION_ERROR", errors),
    )


async def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
    logger.info("Value error", extra={"error_message": str(exc), **_where(request)})

    return JSONResponse(status_code=UNPROCESSABLE, content=_error_body(str(exc), "INVALID_VALUE"))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unexpected error",
        exc_info=exc,
        extra={"error_type": type(exc).__name__, "error_message": str(exc), **_where(request)},
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("An unexpected error occurred", "INTERNAL_ERROR"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, handle_domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(ValueError, handle_value_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)

    logger.debug("Exception handlers registered")
