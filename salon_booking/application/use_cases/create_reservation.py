import logging
from typing import Union

from salon_booking.application.dtos.reservation_dto import CreateReservationInput
from salon_booking.application.interfaces.clock import Clock
from salon_booking.application.interfaces.reservation_repo import NewReservation, ReservationRepo
from salon_booking.domain.entities.reservation import Reservation, ReservationStatus
from salon_booking.domain.errors import (
    InvalidAmount,
    InvalidTimeRange,
    PastTimeNotAllowed,
    RepositoryError,
    SlotConflict,
)
from salon_booking.domain.result import Err, Result
from salon_booking.domain.value_objects.money import validate_amount, validate_deposit_amount
from salon_booking.domain.value_objects.time_range import validate_time_range

CreateReservationError = Union[
    InvalidTimeRange,
    PastTimeNotAllowed,
    InvalidAmount,
    SlotConflict,
    RepositoryError,
]

INITIAL_STATUSES = (ReservationStatus.PENDING, ReservationStatus.CONFIRMED)


class CreateReservationUseCase:
    """
    Creates a reservation after validating time, amounts and slot availability.

    Steps run strictly in order and the first failure is returned as-is.
    Nothing is written until every check has passed. The conflict check and
    the write are not atomic: a concurrent booking that slips in between is
    rejected by the database constraint and surfaces as ConstraintViolation.
    """

    def __init__(self, reservation_repo: ReservationRepo, clock: Clock) -> None:
        self._reservation_repo = reservation_repo
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def execute(
        self, request: CreateReservationInput
    ) -> Result[Reservation, CreateReservationError]:
        if request.initial_status not in INITIAL_STATUSES:
            raise ValueError(f"Unsupported initial status: {request.initial_status}")

        # 1. Time range
        time_range = validate_time_range(
            request.start_time, request.end_time, now=self._clock.now()
        )
        if isinstance(time_range, Err):
            return time_range

        # 2. Amounts
        amount = validate_amount(request.total_amount)
        if isinstance(amount, Err):
            return amount

        deposit = validate_deposit_amount(request.deposit_amount, request.total_amount)
        if isinstance(deposit, Err):
            return deposit

        # 3. Slot conflict
        conflict = await self._reservation_repo.check_time_slot_conflict(
            request.staff_id,
            time_range.value.start,
            time_range.value.end,
        )
        if isinstance(conflict, Err):
            return conflict
        if conflict.value:
            self._logger.info(
                "Slot conflict",
                extra={
                    "staff_id": request.staff_id,
                    "start_time": request.start_time.isoformat(),
                    "end_time": request.end_time.isoformat(),
                },
            )
            return Err(SlotConflict(message="The selected time slot is not available"))

        # 4. Persist
        result = await self._reservation_repo.create(
            NewReservation(
                salon_id=request.salon_id,
                customer_id=request.customer_id,
                staff_id=request.staff_id,
                service_id=request.service_id,
                start_time=time_range.value.start,
                end_time=time_range.value.end,
                total_amount=amount.value,
                deposit_amount=deposit.value,
                notes=request.notes,
                created_by=request.created_by,
                status=request.initial_status,
            )
        )
        if isinstance(result, Err):
            self._logger.warning(
                "Reservation write rejected",
                extra={"staff_id": request.staff_id, "error_code": result.error.code},
            )
            return result

        self._logger.info(
            "Reservation created",
            extra={
                "reservation_id": result.value.data.id,
                "staff_id": request.staff_id,
                "status": request.initial_status.value,
            },
        )
        return result
