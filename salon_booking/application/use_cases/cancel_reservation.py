import logging
from typing import Union

from salon_booking.application.dtos.reservation_dto import CancelReservationInput, RefundQueryInput
from salon_booking.application.interfaces.clock import Clock
from salon_booking.application.interfaces.reservation_repo import ReservationRepo
from salon_booking.domain.entities.reservation import (
    Reservation,
    calculate_refund_amount,
    cancellation_block_reason,
)
from salon_booking.domain.errors import CannotCancel, RepositoryError
from salon_booking.domain.result import Err, Ok, Result
from salon_booking.domain.value_objects.money import Amount

CancelReservationError = Union[CannotCancel, RepositoryError]


class CancelReservationUseCase:
    """
    Cancels a pending or confirmed reservation more than an hour before start.

    Wrong status and "too close to start time" share the CannotCancel error;
    the message tells them apart.
    """

    def __init__(self, reservation_repo: ReservationRepo, clock: Clock) -> None:
        self._reservation_repo = reservation_repo
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def execute(
        self, request: CancelReservationInput
    ) -> Result[Reservation, CancelReservationError]:
        existing = await self._reservation_repo.find_by_id(request.id)
        if isinstance(existing, Err):
            return existing

        blocked = cancellation_block_reason(existing.value, now=self._clock.now())
        if blocked is not None:
            self._logger.info(
                "Cancellation rejected",
                extra={"reservation_id": request.id, "reason": blocked},
            )
            return Err(CannotCancel(message=blocked))

        result = await self._reservation_repo.cancel(
            request.id, request.reason, request.cancelled_by
        )
        if isinstance(result, Ok):
            self._logger.info(
                "Reservation cancelled",
                extra={"reservation_id": request.id, "cancelled_by": request.cancelled_by},
            )
        return result


class CalculateRefundUseCase:
    """Read-only query: deposit refund owed for a reservation cancelled at a given instant."""

    def __init__(self, reservation_repo: ReservationRepo) -> None:
        self._reservation_repo = reservation_repo

    async def execute(self, request: RefundQueryInput) -> Result[Amount, RepositoryError]:
        existing = await self._reservation_repo.find_by_id(request.id)
        if isinstance(existing, Err):
            return existing
        return Ok(calculate_refund_amount(existing.value, request.cancellation_date))
