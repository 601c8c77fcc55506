"""Translation of domain errors into HTTP responses."""

import logging
from typing import TypeVar

from fastapi import Request, status
from fastapi.responses import JSONResponse

from salon_booking.domain.errors import DomainError
from salon_booking.domain.result import Err, Result

logger = logging.getLogger(__name__)

T = TypeVar("T")

STATUS_BY_CODE: dict[str, int] = {
    "INVALID_ID_FORMAT": status.HTTP_400_BAD_REQUEST,
    "INVALID_TIME_RANGE": status.HTTP_400_BAD_REQUEST,
    "PAST_TIME_NOT_ALLOWED": status.HTTP_400_BAD_REQUEST,
    "INVALID_AMOUNT": status.HTTP_400_BAD_REQUEST,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CANNOT_CANCEL": status.HTTP_403_FORBIDDEN,
    "SLOT_CONFLICT": status.HTTP_409_CONFLICT,
    "CONSTRAINT_VIOLATION": status.HTTP_409_CONFLICT,
    "INVALID_STATUS": status.HTTP_409_CONFLICT,
    "CANNOT_MODIFY": status.HTTP_409_CONFLICT,
    "DATABASE_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class DomainErrorResponse(Exception):
    """Raised by routers to short-circuit with a domain error body."""

    def __init__(self, error: DomainError) -> None:
        super().__init__(error.message)
        self.error = error

    @property
    def status_code(self) -> int:
        return STATUS_BY_CODE.get(self.error.code, status.HTTP_400_BAD_REQUEST)


def unwrap(result: Result[T, DomainError]) -> T:
    if isinstance(result, Err):
        raise DomainErrorResponse(result.error)
    return result.value


async def domain_error_handler(request: Request, exc: DomainErrorResponse) -> JSONResponse:
    error = exc.error
    if exc.status_code >= 500:
        logger.error(
            "Domain operation failed",
            extra={"path": request.url.path, "error_code": error.code, "error": error.message},
        )
    else:
        logger.info(
            "Request rejected",
            extra={"path": request.url.path, "error_code": error.code},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"code": error.code, "message": error.message},
    )
