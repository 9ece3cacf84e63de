import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from booking_api.api.deps import get_engine
from booking_api.api.routers.booking import router as booking_router
from booking_api.api.routers.health import router as health_router
from booking_api.api.routers.worker import router as worker_router
from booking_api.config import get_settings
from booking_api.domain.errors import (
    ActiveRentalExistsError,
    DomainError,
    DraftNotFoundError,
    DraftValidationError,
    ExtraNotFoundError,
    InvalidRangeError,
    MissingRateError,
    MissingUpstreamStateError,
    PaymentSessionError,
    RentalNotFoundError,
    VehicleNotFoundError,
    VehicleUnavailableError,
)
from booking_api.infrastructure.db.engine import create_schema

# Configure structured logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[DomainError], int], ...] = (
    (DraftValidationError, 422),
    (InvalidRangeError, 422),
    (MissingRateError, 422),
    (MissingUpstreamStateError, 409),
    (DraftNotFoundError, 409),
    (ActiveRentalExistsError, 409),
    (VehicleUnavailableError, 409),
    (VehicleNotFoundError, 404),
    (RentalNotFoundError, 404),
    (ExtraNotFoundError, 404),
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    if not settings.use_in_memory:
        # Initialize DB tables (for dev/demo purposes)
        await create_schema(get_engine())
    yield
    await get_engine().dispose()


app = FastAPI(
    title="Booking API",
    version="0.1.0",
    lifespan=lifespan,
)


def _status_for(exc: DomainError) -> int:
    if isinstance(exc, PaymentSessionError):
        return exc.status_code
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 400


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    status_code = _status_for(exc)
    content = {"detail": exc.message, "code": exc.code}
    if isinstance(exc, DraftValidationError):
        content["errors"] = exc.errors
    if isinstance(exc, MissingUpstreamStateError):
        content["missing"] = exc.missing
    redirect_to = getattr(exc, "redirect_to", None)
    if redirect_to:
        content["redirect_to"] = redirect_to

    logger.info(
        "Request rejected",
        extra={"path": request.url.path, "code": exc.code, "status_code": status_code},
    )
    return JSONResponse(status_code=status_code, content=content)


# Global Exception Handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler to prevent stack trace exposure to clients.
    Unhandled exceptions are logged with an error_id the client can quote to support.
    """
    error_id = str(uuid.uuid4())

    logger.error(
        "Unhandled exception occurred",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "path": request.url.path,
            "method": request.method,
            "client_host": request.client.host if request.client else None,
        },
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "message": (
                "An unexpected error occurred. Please contact "
                f"{get_settings().support_email} with the error_id if the issue persists."
            ),
        },
    )


app.include_router(health_router, tags=["Health"])
app.include_router(booking_router, prefix="/api/v1", tags=["Booking"])
app.include_router(worker_router, prefix="/api/v1", tags=["Worker"])
