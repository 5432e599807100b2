"""FastAPI application main entry point."""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from apps.api.responses import failure
from apps.api.v1.endpoints import orders
from core.domain.exceptions import (
    DomainError,
    InsufficientStockError,
    InvalidStateError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from core.infrastructure.database import close_database, init_database
from core.infrastructure.event_bus import ALL_EVENTS, get_event_bus, log_order_event
from core.settings import get_app_settings

_settings = get_app_settings()

logging.basicConfig(level=_settings.logging.level.upper(), format=_settings.logging.format)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables if configured and attach the audit log subscriber."""
    if _settings.database.create_tables:
        await init_database()
    event_bus = get_event_bus()
    event_bus.subscribe(ALL_EVENTS, log_order_event)
    logger.info("✅ API started")
    try:
        yield
    finally:
        event_bus.unsubscribe(ALL_EVENTS, log_order_event)
        await close_database()


app = FastAPI(
    title="Spare Parts Marketplace API",
    description="Order lifecycle and stock workflow",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(orders.router, prefix="/api/v1")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"{request.method} {request.url.path} → {response.status_code} ({elapsed_ms:.1f} ms)")
    return response


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

_STATUS_BY_ERROR = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (InvalidStateError, status.HTTP_400_BAD_REQUEST),
    (InsufficientStockError, status.HTTP_400_BAD_REQUEST),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Map domain exceptions onto status codes and the error envelope.

    Args:
        request: FastAPI request
        exc: Domain exception

    Returns:
        JSONResponse with error details
    """
    status_code = status.HTTP_400_BAD_REQUEST
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            status_code = code
            break
    logger.info(f"{request.method} {request.url.path} rejected: {type(exc).__name__}: {exc.message}")
    return JSONResponse(status_code=status_code, content=failure(exc.message))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are client errors (400)."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=failure("; ".join(messages) or "Invalid request"),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions; details are logged, never returned.

    Args:
        request: FastAPI request
        exc: Exception

    Returns:
        JSONResponse with a generic message
    """
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=failure("Server error, please try again later"),
    )


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint.

    Returns:
        Health status
    """
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
