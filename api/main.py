"""FastAPI main application."""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import get_settings
from exceptions import (
    ClientNotFoundError,
    ConfigurationError,
    InvalidWindowError,
    StorageFailureError,
    ValidationError,
    YardBillingException,
)
from logging_config import get_logger, setup_logging
from models import init_db
from api.middleware import setup_middleware
from api.routes import billing, health

setup_logging()
logger = get_logger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan events."""
    logger.info("Starting Yard Billing API")

    problems = settings.validate_required_settings()
    if problems and settings.is_production:
        raise ConfigurationError("; ".join(problems))
    for problem in problems:
        logger.warning("Configuration problem", problem=problem)

    init_db()
    logger.info("Database initialized")

    yield

    logger.info("Shutting down Yard Billing API")


app = FastAPI(
    title="Yard Billing",
    description="Storage and handling billing for a container yard",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_middleware(app)


def _error_response(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": type(exc).__name__,
            "message": str(exc),
        },
    )


# Exception handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "detail": exc.detail},
    )


@app.exception_handler(InvalidWindowError)
async def invalid_window_handler(request: Request, exc: InvalidWindowError):
    return _error_response(422, exc)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    logger.warning("Validation error", error=str(exc))
    return _error_response(400, exc)


@app.exception_handler(ClientNotFoundError)
async def client_not_found_handler(request: Request, exc: ClientNotFoundError):
    return _error_response(404, exc)


@app.exception_handler(StorageFailureError)
async def storage_failure_handler(request: Request, exc: StorageFailureError):
    """Storage is down: fail the whole request, never return partial billing."""
    logger.error("Storage failure", error=str(exc), cause=repr(exc.__cause__))
    return _error_response(503, exc)


@app.exception_handler(YardBillingException)
async def yard_billing_exception_handler(request: Request, exc: YardBillingException):
    logger.warning("Business logic error", error=str(exc), error_type=type(exc).__name__)
    return _error_response(400, exc)


# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(billing.router, prefix="/api/billing", tags=["Billing"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Yard Billing",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
    )
