import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Mapping, assert_never

from sqlalchemy import func, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

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
    MODIFIABLE_STATUSES,
    CancelledReservation,
    CompletedReservation,
    ConfirmedReservation,
    NoShowReservation,
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
)
from salon_booking.domain.errors import (
    ConstraintViolation,
    DatabaseError,
    RepositoryError,
    not_found,
)
from salon_booking.domain.ids import (
    CustomerId,
    ReservationId,
    SalonId,
    ServiceId,
    StaffId,
)
from salon_booking.domain.result import Err, Ok, Result
from salon_booking.infrastructure.db.tables import reservations

logger = logging.getLogger(__name__)

LOCK_VERSION_CONSTRAINT = "reservations_lock_version"


def _utc(value: datetime | None) -> datetime | None:
    # SQLite drops tzinfo on the way back; stored values are always UTC.
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _variant_columns(reservation: Reservation) -> dict[str, Any]:
    match reservation:
        case PendingReservation():
            return {}
        case ConfirmedReservation():
            return {
                "confirmed_at": reservation.confirmed_at,
                "confirmed_by": reservation.confirmed_by,
            }
        case CancelledReservation():
            return {
                "cancelled_at": reservation.cancelled_at,
                "cancelled_by": reservation.cancelled_by,
                "cancellation_reason": reservation.cancellation_reason,
            }
        case CompletedReservation():
            return {
                "completed_at": reservation.completed_at,
                "completed_by": reservation.completed_by,
            }
        case NoShowReservation():
            return {
                "marked_no_show_at": reservation.marked_no_show_at,
                "marked_no_show_by": reservation.marked_no_show_by,
            }
        case _:
            assert_never(reservation)


class ReservationRepoSQL(ReservationRepo):
    def __init__(self, session: AsyncSession, clock: Clock | None = None) -> None:
        self._session = session
        self._clock = clock or SystemClock()

    # === Mapping ===

    def _to_domain(self, row: Mapping[str, Any]) -> Reservation:
        data = ReservationData(
            id=ReservationId(row["id"]),
            salon_id=SalonId(row["salon_id"]),
            customer_id=CustomerId(row["customer_id"]),
            staff_id=StaffId(row["staff_id"]),
            service_id=ServiceId(row["service_id"]),
            start_time=_utc(row["start_time"]),
            end_time=_utc(row["end_time"]),
            total_amount=row["total_amount"],
            deposit_amount=row["deposit_amount"],
            is_paid=bool(row["is_paid"]),
            notes=row["notes"],
            created_at=_utc(row["created_at"]),
            updated_at=_utc(row["updated_at"]),
            created_by=row["created_by"],
            updated_by=row["updated_by"],
        )
        return reservation_from_status(
            row["status"],
            data,
            confirmed_at=_utc(row["confirmed_at"]),
            confirmed_by=row["confirmed_by"],
            cancelled_at=_utc(row["cancelled_at"]),
            cancelled_by=row["cancelled_by"],
            cancellation_reason=row["cancellation_reason"],
            completed_at=_utc(row["completed_at"]),
            completed_by=row["completed_by"],
            marked_no_show_at=_utc(row["marked_no_show_at"]),
            marked_no_show_by=row["marked_no_show_by"],
        )

    async def _fetch_row(self, reservation_id: ReservationId) -> Mapping[str, Any] | None:
        stmt = select(reservations).where(reservations.c.id == reservation_id).limit(1)
        result = await self._session.execute(stmt)
        return result.mappings().first()

    async def _write(self, stmt) -> Result[int, RepositoryError]:
        try:
            result = await self._session.execute(stmt)
            rowcount = result.rowcount
            await self._session.commit()
            return Ok(rowcount)
        except IntegrityError as exc:
            await self._session.rollback()
            logger.warning("Reservation write violated a constraint", extra={"error": str(exc.orig)})
            return Err(ConstraintViolation(message=str(exc.orig), constraint=_constraint_name(exc)))
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.error("Reservation write failed", exc_info=exc)
            return Err(DatabaseError(message=str(exc)))

    # === Queries ===

    async def find_by_id(self, reservation_id: ReservationId) -> Result[Reservation, RepositoryError]:
        try:
            row = await self._fetch_row(reservation_id)
        except SQLAlchemyError as exc:
            return Err(DatabaseError(message=str(exc)))
        if row is None:
            return Err(not_found("Reservation", reservation_id))
        return Ok(self._to_domain(row))

    async def check_time_slot_conflict(
        self,
        staff_id: StaffId,
        start_time: datetime,
        end_time: datetime,
        exclude_reservation_id: ReservationId | None = None,
    ) -> Result[bool, RepositoryError]:
        conditions = [
            reservations.c.staff_id == staff_id,
            reservations.c.status != ReservationStatus.CANCELLED.value,
            reservations.c.start_time < _utc(end_time),
            reservations.c.end_time > _utc(start_time),
        ]
        if exclude_reservation_id is not None:
            conditions.append(reservations.c.id != exclude_reservation_id)

        stmt = select(func.count()).select_from(reservations).where(*conditions)
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            return Err(DatabaseError(message=str(exc)))
        return Ok((result.scalar() or 0) > 0)

    async def search(
        self,
        criteria: ReservationSearchCriteria,
        pagination: Pagination,
    ) -> Result[Page[Reservation], RepositoryError]:
        conditions = []
        if criteria.salon_id is not None:
            conditions.append(reservations.c.salon_id == criteria.salon_id)
        if criteria.customer_id is not None:
            conditions.append(reservations.c.customer_id == criteria.customer_id)
        if criteria.staff_id is not None:
            conditions.append(reservations.c.staff_id == criteria.staff_id)
        if criteria.service_id is not None:
            conditions.append(reservations.c.service_id == criteria.service_id)
        if criteria.status is not None:
            conditions.append(reservations.c.status == criteria.status.value)
        if criteria.is_paid is not None:
            conditions.append(reservations.c.is_paid == criteria.is_paid)
        if criteria.start_date is not None:
            conditions.append(reservations.c.start_time >= _utc(criteria.start_date))
        if criteria.end_date is not None:
            conditions.append(reservations.c.start_time <= _utc(criteria.end_date))

        count_stmt = select(func.count()).select_from(reservations).where(*conditions)
        page_stmt = (
            select(reservations)
            .where(*conditions)
            .order_by(reservations.c.start_time)
            .limit(pagination.limit)
            .offset(pagination.offset)
        )
        try:
            total = (await self._session.execute(count_stmt)).scalar() or 0
            rows = (await self._session.execute(page_stmt)).mappings().all()
        except SQLAlchemyError as exc:
            return Err(DatabaseError(message=str(exc)))

        return Ok(
            Page(
                items=[self._to_domain(row) for row in rows],
                total=total,
                limit=pagination.limit,
                offset=pagination.offset,
            )
        )

    # === Commands ===

    async def create(self, data: NewReservation) -> Result[Reservation, RepositoryError]:
        now = self._clock.now()
        reservation_id = str(uuid.uuid4())
        values = {
            "id": reservation_id,
            "salon_id": data.salon_id,
            "customer_id": data.customer_id,
            "staff_id": data.staff_id,
            "service_id": data.service_id,
            "start_time": _utc(data.start_time),
            "end_time": _utc(data.end_time),
            "status": data.status.value,
            "notes": data.notes,
            "total_amount": data.total_amount,
            "deposit_amount": data.deposit_amount,
            "is_paid": False,
            "created_at": now,
            "updated_at": now,
            "created_by": data.created_by,
            "updated_by": data.created_by,
            "lock_version": 0,
        }
        if data.status is ReservationStatus.CONFIRMED:
            values["confirmed_at"] = now
            values["confirmed_by"] = data.created_by or "system"

        written = await self._write(insert(reservations).values(values))
        if isinstance(written, Err):
            return written
        return await self.find_by_id(ReservationId(reservation_id))

    def _lost_update(self, reservation_id: ReservationId) -> Err[ConstraintViolation]:
        return Err(
            ConstraintViolation(
                message=f"Reservation {reservation_id} was modified concurrently",
                constraint=LOCK_VERSION_CONSTRAINT,
            )
        )

    async def update(self, data: ReservationUpdate) -> Result[Reservation, RepositoryError]:
        try:
            row = await self._fetch_row(data.id)
        except SQLAlchemyError as exc:
            return Err(DatabaseError(message=str(exc)))
        if row is None:
            return Err(not_found("Reservation", data.id))

        current = self._to_domain(row)
        if not can_be_modified(current):
            return Err(cannot_modify(current))

        values: dict[str, Any] = {
            "updated_at": self._clock.now(),
            "lock_version": reservations.c.lock_version + 1,
        }
        if data.updated_by is not None:
            values["updated_by"] = data.updated_by
        if data.start_time is not None:
            values["start_time"] = _utc(data.start_time)
        if data.end_time is not None:
            values["end_time"] = _utc(data.end_time)
        if data.staff_id is not None:
            values["staff_id"] = data.staff_id
        if data.notes is not None:
            values["notes"] = data.notes

        stmt = (
            update(reservations)
            .where(
                reservations.c.id == data.id,
                reservations.c.lock_version == row["lock_version"],
                reservations.c.status.in_([s.value for s in MODIFIABLE_STATUSES]),
            )
            .values(**values)
        )
        written = await self._write(stmt)
        if isinstance(written, Err):
            return written
        if written.value == 0:
            # Otra escritura ganó la carrera; se reporta según el estado actual.
            latest = await self.find_by_id(data.id)
            if isinstance(latest, Err):
                return latest
            if not can_be_modified(latest.value):
                return Err(cannot_modify(latest.value))
            return self._lost_update(data.id)
        return await self.find_by_id(data.id)

    async def update_payment_status(
        self, reservation_id: ReservationId, is_paid: bool, updated_by: str
    ) -> Result[Reservation, RepositoryError]:
        stmt = (
            update(reservations)
            .where(reservations.c.id == reservation_id)
            .values(
                is_paid=is_paid,
                updated_at=self._clock.now(),
                updated_by=updated_by,
                lock_version=reservations.c.lock_version + 1,
            )
        )
        written = await self._write(stmt)
        if isinstance(written, Err):
            return written
        if written.value == 0:
            return Err(not_found("Reservation", reservation_id))
        return await self.find_by_id(reservation_id)

    async def _transition(self, reservation_id: ReservationId, apply) -> Result[Reservation, RepositoryError]:
        try:
            row = await self._fetch_row(reservation_id)
        except SQLAlchemyError as exc:
            return Err(DatabaseError(message=str(exc)))
        if row is None:
            return Err(not_found("Reservation", reservation_id))

        transitioned = apply(self._to_domain(row), self._clock.now())
        if isinstance(transitioned, Err):
            return transitioned

        reservation = transitioned.value
        stmt = (
            update(reservations)
            .where(
                reservations.c.id == reservation_id,
                reservations.c.lock_version == row["lock_version"],
            )
            .values(
                status=get_reservation_status(reservation).value,
                updated_at=reservation.data.updated_at,
                updated_by=reservation.data.updated_by,
                lock_version=reservations.c.lock_version + 1,
                **_variant_columns(reservation),
            )
        )
        written = await self._write(stmt)
        if isinstance(written, Err):
            return written
        if written.value == 0:
            return self._lost_update(reservation_id)
        return Ok(reservation)

    async def confirm(
        self, reservation_id: ReservationId, confirmed_by: str
    ) -> Result[Reservation, RepositoryError]:
        return await self._transition(
            reservation_id,
            lambda r, at: confirm_reservation(r, confirmed_by=confirmed_by, at=at),
        )

    async def cancel(
        self, reservation_id: ReservationId, reason: str, cancelled_by: str
    ) -> Result[Reservation, RepositoryError]:
        return await self._transition(
            reservation_id,
            lambda r, at: cancel_reservation(r, reason=reason, cancelled_by=cancelled_by, at=at),
        )

    async def complete(
        self, reservation_id: ReservationId, completed_by: str
    ) -> Result[Reservation, RepositoryError]:
        return await self._transition(
            reservation_id,
            lambda r, at: complete_reservation(r, completed_by=completed_by, at=at),
        )

    async def mark_as_no_show(
        self, reservation_id: ReservationId, marked_by: str
    ) -> Result[Reservation, RepositoryError]:
        return await self._transition(
            reservation_id,
            lambda r, at: mark_reservation_no_show(r, marked_by=marked_by, at=at),
        )


def _constraint_name(exc: IntegrityError) -> str:
    diag = getattr(exc.orig, "diag", None)
    name = getattr(diag, "constraint_name", None)
    return name or "unknown"
