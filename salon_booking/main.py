import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from salon_booking import __version__
from salon_booking.api.errors import DomainErrorResponse, domain_error_handler
from salon_booking.api.routers import health_router, reservations_router
from salon_booking.config import get_settings
from salon_booking.infrastructure.db.engine import engine
from salon_booking.infrastructure.db.tables import metadata

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.use_in_memory:
        # Dev convenience; production schemas are managed by migrations.
        async with engine.begin() as conn:
            await conn.run_sync(metadata.create_all)
    yield
    await engine.dispose()

app = FastAPI(
    title="Salon Booking API",
    version=__version__,
    lifespan=lifespan
)

app.add_exception_handler(DomainErrorResponse, domain_error_handler)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Logs unhandled exceptions with an error_id and returns a generic 500,
    so stack traces never reach clients.
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
        }
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "message": "An unexpected error occurred. Please contact support with the error_id if the issue persists."
        }
    )


app.include_router(health_router, tags=["Health"])
app.include_router(reservations_router, prefix="/api/v1", tags=["Reservations"])
