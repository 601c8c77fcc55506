"""Confirm, complete and no-show transitions."""

import logging

from salon_booking.application.dtos.reservation_dto import (
    CompleteReservationInput,
    ConfirmReservationInput,
    MarkAsNoShowInput,
)
from salon_booking.application.interfaces.clock import Clock
from salon_booking.application.interfaces.reservation_repo import ReservationRepo
from salon_booking.domain.entities.reservation import (
    Reservation,
    get_reservation_status,
    is_confirmed_reservation,
    is_pending_reservation,
)
from salon_booking.domain.errors import InvalidStatus, RepositoryError
from salon_booking.domain.result import Err, Result

logger = logging.getLogger(__name__)


def _invalid(reservation: Reservation, target: str, message: str) -> Err[InvalidStatus]:
    return Err(
        InvalidStatus(
            message=message,
            current_status=get_reservation_status(reservation).value,
            target_status=target,
        )
    )


class ConfirmReservationUseCase:
    def __init__(self, reservation_repo: ReservationRepo) -> None:
        self._reservation_repo = reservation_repo

    async def execute(
        self, request: ConfirmReservationInput
    ) -> Result[Reservation, InvalidStatus | RepositoryError]:
        existing = await self._reservation_repo.find_by_id(request.id)
        if isinstance(existing, Err):
            return existing

        reservation = existing.value
        if not is_pending_reservation(reservation):
            status = get_reservation_status(reservation).value
            return _invalid(reservation, "confirmed", f"Cannot confirm reservation in {status} status")

        logger.info("Confirming reservation", extra={"reservation_id": request.id})
        return await self._reservation_repo.confirm(request.id, request.confirmed_by)


class CompleteReservationUseCase:
    def __init__(self, reservation_repo: ReservationRepo) -> None:
        self._reservation_repo = reservation_repo

    async def execute(
        self, request: CompleteReservationInput
    ) -> Result[Reservation, InvalidStatus | RepositoryError]:
        existing = await self._reservation_repo.find_by_id(request.id)
        if isinstance(existing, Err):
            return existing

        reservation = existing.value
        if not is_confirmed_reservation(reservation):
            status = get_reservation_status(reservation).value
            return _invalid(reservation, "completed", f"Cannot complete reservation in {status} status")

        logger.info("Completing reservation", extra={"reservation_id": request.id})
        return await self._reservation_repo.complete(request.id, request.completed_by)


class MarkAsNoShowUseCase:
    """A confirmed reservation can be marked as no-show once its start time has passed."""

    def __init__(self, reservation_repo: ReservationRepo, clock: Clock) -> None:
        self._reservation_repo = reservation_repo
        self._clock = clock

    async def execute(
        self, request: MarkAsNoShowInput
    ) -> Result[Reservation, InvalidStatus | RepositoryError]:
        existing = await self._reservation_repo.find_by_id(request.id)
        if isinstance(existing, Err):
            return existing

        reservation = existing.value
        if not is_confirmed_reservation(reservation):
            status = get_reservation_status(reservation).value
            return _invalid(
                reservation,
                "no_show",
                f"Cannot mark as no-show for reservation in {status} status",
            )

        if reservation.data.start_time > self._clock.now():
            return _invalid(
                reservation,
                "no_show",
                "Cannot mark future reservations as no-show",
            )

        logger.info("Marking reservation as no-show", extra={"reservation_id": request.id})
        return await self._reservation_repo.mark_as_no_show(request.id, request.marked_by)
