import uuid
from dataclasses import replace
from datetime import datetime

from salon_booking.application.interfaces.clock import Clock, SystemClock
from salon_booking.application.interfaces.reservation_repo import (
    NewReservation,
    Page,
    Pagination,
    ReservationRepo,
    ReservationSearchCriteria,
    ReservationUpdate,
)
from salon_booking.domain.entities.reservation import (
    PendingReservation,
    Reservation,
    ReservationData,
    ReservationStatus,
    can_be_modified,
    cancel_reservation,
    cannot_modify,
    complete_reservation,
    confirm_reservation,
    get_reservation_status,
    mark_reservation_no_show,
    reservation_from_status,
    with_data,
)
from salon_booking.domain.errors import ConstraintViolation, RepositoryError, not_found
from salon_booking.domain.ids import ReservationId, StaffId
from salon_booking.domain.result import Err, Ok, Result
from salon_booking.domain.value_objects.time_range import TimeRange

NO_OVERLAP_CONSTRAINT = "reservations_staff_no_overlap"


class InMemoryReservationRepo(ReservationRepo):
    """
    Repositorio en memoria para desarrollo y tests.

    Aplica las mismas transiciones de dominio que el adaptador SQL y emula la
    restricción de exclusión por staff/franja, de modo que una escritura que
    gane la carrera contra el chequeo de conflicto se rechaza con
    ConstraintViolation.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or SystemClock()
        self.reservations: dict[str, Reservation] = {}

    def _overlapping(
        self,
        staff_id: StaffId,
        start_time: datetime,
        end_time: datetime,
        exclude_reservation_id: ReservationId | None = None,
    ) -> bool:
        wanted = TimeRange(start=start_time, end=end_time)
        for reservation in self.reservations.values():
            data = reservation.data
            if data.staff_id != staff_id or data.id == exclude_reservation_id:
                continue
            if get_reservation_status(reservation) is ReservationStatus.CANCELLED:
                continue
            if data.time_range.overlaps_with(wanted):
                return True
        return False

    def _get(self, reservation_id: ReservationId) -> Result[Reservation, RepositoryError]:
        reservation = self.reservations.get(reservation_id)
        if reservation is None:
            return Err(not_found("Reservation", reservation_id))
        return Ok(reservation)

    def _store(self, reservation: Reservation) -> Ok[Reservation]:
        self.reservations[reservation.data.id] = reservation
        return Ok(reservation)

    async def find_by_id(self, reservation_id: ReservationId) -> Result[Reservation, RepositoryError]:
        return self._get(reservation_id)

    async def create(self, data: NewReservation) -> Result[Reservation, RepositoryError]:
        if self._overlapping(data.staff_id, data.start_time, data.end_time):
            return Err(
                ConstraintViolation(
                    message="Reservation overlaps an existing booking for this staff member",
                    constraint=NO_OVERLAP_CONSTRAINT,
                )
            )
        now = self._clock.now()
        record = ReservationData(
            id=ReservationId(str(uuid.uuid4())),
            salon_id=data.salon_id,
            customer_id=data.customer_id,
            staff_id=data.staff_id,
            service_id=data.service_id,
            start_time=data.start_time,
            end_time=data.end_time,
            total_amount=data.total_amount,
            deposit_amount=data.deposit_amount,
            notes=data.notes,
            is_paid=False,
            created_at=now,
            updated_at=now,
            created_by=data.created_by,
            updated_by=data.created_by,
        )
        if data.status is ReservationStatus.CONFIRMED:
            reservation = reservation_from_status(
                data.status,
                record,
                confirmed_at=now,
                confirmed_by=data.created_by or "system",
            )
        else:
            reservation = PendingReservation(data=record)
        return self._store(reservation)

    async def update(self, data: ReservationUpdate) -> Result[Reservation, RepositoryError]:
        existing = self._get(data.id)
        if isinstance(existing, Err):
            return existing
        if not can_be_modified(existing.value):
            return Err(cannot_modify(existing.value))
        current = existing.value.data
        staff_id = data.staff_id or current.staff_id
        start_time = data.start_time or current.start_time
        end_time = data.end_time or current.end_time
        if self._overlapping(staff_id, start_time, end_time, exclude_reservation_id=data.id):
            return Err(
                ConstraintViolation(
                    message="Reservation overlaps an existing booking for this staff member",
                    constraint=NO_OVERLAP_CONSTRAINT,
                )
            )
        updated = replace(
            current,
            staff_id=staff_id,
            start_time=start_time,
            end_time=end_time,
            notes=data.notes if data.notes is not None else current.notes,
            updated_at=self._clock.now(),
            updated_by=data.updated_by if data.updated_by is not None else current.updated_by,
        )
        return self._store(with_data(existing.value, updated))

    async def confirm(
        self, reservation_id: ReservationId, confirmed_by: str
    ) -> Result[Reservation, RepositoryError]:
        existing = self._get(reservation_id)
        if isinstance(existing, Err):
            return existing
        result = confirm_reservation(existing.value, confirmed_by=confirmed_by, at=self._clock.now())
        if isinstance(result, Err):
            return result
        return self._store(result.value)

    async def cancel(
        self, reservation_id: ReservationId, reason: str, cancelled_by: str
    ) -> Result[Reservation, RepositoryError]:
        existing = self._get(reservation_id)
        if isinstance(existing, Err):
            return existing
        result = cancel_reservation(
            existing.value, reason=reason, cancelled_by=cancelled_by, at=self._clock.now()
        )
        if isinstance(result, Err):
            return result
        return self._store(result.value)

    async def complete(
        self, reservation_id: ReservationId, completed_by: str
    ) -> Result[Reservation, RepositoryError]:
        existing = self._get(reservation_id)
        if isinstance(existing, Err):
            return existing
        result = complete_reservation(existing.value, completed_by=completed_by, at=self._clock.now())
        if isinstance(result, Err):
            return result
        return self._store(result.value)

    async def mark_as_no_show(
        self, reservation_id: ReservationId, marked_by: str
    ) -> Result[Reservation, RepositoryError]:
        existing = self._get(reservation_id)
        if isinstance(existing, Err):
            return existing
        result = mark_reservation_no_show(existing.value, marked_by=marked_by, at=self._clock.now())
        if isinstance(result, Err):
            return result
        return self._store(result.value)

    async def update_payment_status(
        self, reservation_id: ReservationId, is_paid: bool, updated_by: str
    ) -> Result[Reservation, RepositoryError]:
        existing = self._get(reservation_id)
        if isinstance(existing, Err):
            return existing
        updated = replace(
            existing.value.data,
            is_paid=is_paid,
            updated_at=self._clock.now(),
            updated_by=updated_by,
        )
        return self._store(with_data(existing.value, updated))

    async def check_time_slot_conflict(
        self,
        staff_id: StaffId,
        start_time: datetime,
        end_time: datetime,
        exclude_reservation_id: ReservationId | None = None,
    ) -> Result[bool, RepositoryError]:
        return Ok(self._overlapping(staff_id, start_time, end_time, exclude_reservation_id))

    async def search(
        self,
        criteria: ReservationSearchCriteria,
        pagination: Pagination,
    ) -> Result[Page[Reservation], RepositoryError]:
        def matches(reservation: Reservation) -> bool:
            data = reservation.data
            checks = [
                criteria.salon_id is None or data.salon_id == criteria.salon_id,
                criteria.customer_id is None or data.customer_id == criteria.customer_id,
                criteria.staff_id is None or data.staff_id == criteria.staff_id,
                criteria.service_id is None or data.service_id == criteria.service_id,
                criteria.status is None or get_reservation_status(reservation) == criteria.status,
                criteria.is_paid is None or data.is_paid == criteria.is_paid,
                criteria.start_date is None or data.start_time >= criteria.start_date,
                criteria.end_date is None or data.start_time <= criteria.end_date,
            ]
            return all(checks)

        found = sorted(
            (r for r in self.reservations.values() if matches(r)),
            key=lambda r: r.data.start_time,
        )
        return Ok(
            Page(
                items=found[pagination.offset : pagination.offset + pagination.limit],
                total=len(found),
                limit=pagination.limit,
                offset=pagination.offset,
            )
        )
