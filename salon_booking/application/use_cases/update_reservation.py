import logging
from typing import Union

from salon_booking.application.dtos.reservation_dto import UpdateReservationInput
from salon_booking.application.interfaces.clock import Clock
from salon_booking.application.interfaces.reservation_repo import ReservationRepo, ReservationUpdate
from salon_booking.domain.entities.reservation import (
    Reservation,
    can_be_modified,
    cannot_modify,
)
from salon_booking.domain.errors import (
    CannotModify,
    InvalidTimeRange,
    PastTimeNotAllowed,
    RepositoryError,
    SlotConflict,
)
from salon_booking.domain.result import Err, Result
from salon_booking.domain.value_objects.time_range import validate_time_range

UpdateReservationError = Union[
    CannotModify,
    InvalidTimeRange,
    PastTimeNotAllowed,
    SlotConflict,
    RepositoryError,
]


class UpdateReservationUseCase:
    """
    Moves a reservation to another slot or staff member, or edits its notes.

    Only pending and confirmed reservations can change. A schedule change
    re-validates the time range and re-runs the conflict check, ignoring
    the reservation being edited.
    """

    def __init__(self, reservation_repo: ReservationRepo, clock: Clock) -> None:
        self._reservation_repo = reservation_repo
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def execute(
        self, request: UpdateReservationInput
    ) -> Result[Reservation, UpdateReservationError]:
        existing = await self._reservation_repo.find_by_id(request.id)
        if isinstance(existing, Err):
            return existing

        reservation = existing.value
        if not can_be_modified(reservation):
            return Err(cannot_modify(reservation))

        if request.changes_schedule:
            start_time = request.start_time or reservation.data.start_time
            end_time = request.end_time or reservation.data.end_time
            staff_id = request.staff_id or reservation.data.staff_id

            time_range = validate_time_range(start_time, end_time, now=self._clock.now())
            if isinstance(time_range, Err):
                return time_range

            conflict = await self._reservation_repo.check_time_slot_conflict(
                staff_id, start_time, end_time, exclude_reservation_id=request.id
            )
            if isinstance(conflict, Err):
                return conflict
            if conflict.value:
                return Err(SlotConflict(message="The selected time slot is not available"))

        self._logger.info("Updating reservation", extra={"reservation_id": request.id})
        return await self._reservation_repo.update(
            ReservationUpdate(
                id=request.id,
                start_time=request.start_time,
                end_time=request.end_time,
                staff_id=request.staff_id,
                notes=request.notes,
                updated_by=request.updated_by,
            )
        )
