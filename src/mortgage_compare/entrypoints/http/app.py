from fastapi import FastAPI

from mortgage_compare.entrypoints.http.exception_handlers import register_exception_handlers
from mortgage_compare.entrypoints.http.routes.health import router as health_router
from mortgage_compare.entrypoints.http.routes.loans import router as loans_router
from mortgage_compare.entrypoints.http.routes.market import router as market_router
from mortgage_compare.infra.config import get_settings
from mortgage_compare.infra.logging_config import configure_logging

API_VERSION = "0.1.0"

DESCRIPTION = """
Decimal-exact mortgage economics over loan estimates.

## Features
- Build loan estimates (P&I, LTV, PMI, five-year cost)
- Compare and rank multiple offers
- Price down payment / term scenarios
- Evaluate refinance breakeven
- Benchmark an APR against market rates

Amounts and rates travel as decimal strings, never JSON floats. Every
error body follows the ErrorResponse schema.
"""

VERSIONED_ROUTERS = (loans_router, market_router)


def build_app() -> FastAPI:
    """Fresh app per call, so tests can override dependencies in isolation."""
    configure_logging(get_settings().log_level)

    app = FastAPI(
        title="Mortgage Compare API",
        description=DESCRIPTION,
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    register_exception_handlers(app)

    app.include_router(health_router)
    for router in VERSIONED_ROUTERS:
        app.include_router(router, prefix="/v1")

    return app


app = build_app()
