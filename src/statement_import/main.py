from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from statement_import.api.middleware.error_handler import (
    handle_generic_error,
    handle_statement_processing_error,
    handle_validation_error,
)
from statement_import.api.middleware.logging import JSONLogFormatter, RequestLoggingMiddleware
from statement_import.api.v1 import router as v1_router
from statement_import.api.v1.health import router as health_router
from statement_import.config import settings
from statement_import.core.exceptions import StatementProcessingError
from statement_import.core.logging_setup import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging(settings.log_level, formatter=JSONLogFormatter())
    yield
    # Shutdown


def create_app() -> FastAPI:
    app = FastAPI(
        title="Statement Import API",
        description="Credit card statement PDF to transaction extraction",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Add request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers (order matters - most specific first)
    app.add_exception_handler(StatementProcessingError, handle_statement_processing_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_generic_error)

    # Register routers
    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()
