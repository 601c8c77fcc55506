"""Entidad Reservation - Agregado raíz del dominio de reservas del salón.

Una reserva es una unión cerrada de cinco variantes inmutables que
comparten un ``ReservationData``. Los estados ``cancelled``, ``completed`` y
``no_show`` son terminales.
"""

import math
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, TypeGuard, Union, assert_never

from salon_booking.domain.errors import CannotCancel, CannotModify, InvalidStatus
from salon_booking.domain.ids import CustomerId, ReservationId, SalonId, ServiceId, StaffId
from salon_booking.domain.result import Err, Ok, Result
from salon_booking.domain.value_objects.money import Amount
from salon_booking.domain.value_objects.time_range import TimeRange

CANCELLATION_CUTOFF = timedelta(minutes=60)
FULL_REFUND_HOURS = 24
HALF_REFUND_HOURS = 12


class ReservationStatus(str, Enum):
    """Estados posibles de una reserva."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    NO_SHOW = "no_show"


TERMINAL_STATUSES = frozenset(
    {ReservationStatus.CANCELLED, ReservationStatus.COMPLETED, ReservationStatus.NO_SHOW}
)
MODIFIABLE_STATUSES = frozenset({ReservationStatus.PENDING, ReservationStatus.CONFIRMED})


@dataclass(frozen=True)
class ReservationData:
    """Datos compartidos por todas las variantes de una reserva."""

    # Identificadores
    id: ReservationId
    salon_id: SalonId
    customer_id: CustomerId
    staff_id: StaffId
    service_id: ServiceId

    # Franja
    start_time: datetime
    end_time: datetime

    # Financieros
    total_amount: Amount
    deposit_amount: Amount | None = None
    is_paid: bool = False

    notes: str | None = None

    # Auditoría
    created_at: datetime | None = None
    updated_at: datetime | None = None
    created_by: str | None = None
    updated_by: str | None = None

    @property
    def time_range(self) -> TimeRange:
        return TimeRange(start=self.start_time, end=self.end_time)


@dataclass(frozen=True)
class PendingReservation:
    """Esperando confirmación del staff."""

    data: ReservationData


@dataclass(frozen=True)
class ConfirmedReservation:
    data: ReservationData
    confirmed_at: datetime
    confirmed_by: str


@dataclass(frozen=True)
class CancelledReservation:
    data: ReservationData
    cancelled_at: datetime
    cancelled_by: str
    cancellation_reason: str


@dataclass(frozen=True)
class CompletedReservation:
    data: ReservationData
    completed_at: datetime
    completed_by: str


@dataclass(frozen=True)
class NoShowReservation:
    data: ReservationData
    marked_no_show_at: datetime
    marked_no_show_by: str


Reservation = Union[
    PendingReservation,
    ConfirmedReservation,
    CancelledReservation,
    CompletedReservation,
    NoShowReservation,
]


# === Type guards ===


def is_pending_reservation(reservation: Reservation) -> TypeGuard[PendingReservation]:
    return isinstance(reservation, PendingReservation)


def is_confirmed_reservation(reservation: Reservation) -> TypeGuard[ConfirmedReservation]:
    return isinstance(reservation, ConfirmedReservation)


def is_cancelled_reservation(reservation: Reservation) -> TypeGuard[CancelledReservation]:
    return isinstance(reservation, CancelledReservation)


def is_completed_reservation(reservation: Reservation) -> TypeGuard[CompletedReservation]:
    return isinstance(reservation, CompletedReservation)


def is_no_show_reservation(reservation: Reservation) -> TypeGuard[NoShowReservation]:
    return isinstance(reservation, NoShowReservation)


# === Consultas de estado ===


def get_reservation_status(reservation: Reservation) -> ReservationStatus:
    """Retorna el estado público de la variante."""
    match reservation:
        case PendingReservation():
            return ReservationStatus.PENDING
        case ConfirmedReservation():
            return ReservationStatus.CONFIRMED
        case CancelledReservation():
            return ReservationStatus.CANCELLED
        case CompletedReservation():
            return ReservationStatus.COMPLETED
        case NoShowReservation():
            return ReservationStatus.NO_SHOW
        case _:
            assert_never(reservation)


def can_transition(reservation: Reservation, target: ReservationStatus) -> bool:
    """Tabla de transiciones permitidas (sin considerar la ventana de cancelación)."""
    match reservation:
        case PendingReservation():
            return target in (ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED)
        case ConfirmedReservation():
            return target in (
                ReservationStatus.CANCELLED,
                ReservationStatus.COMPLETED,
                ReservationStatus.NO_SHOW,
            )
        case CancelledReservation() | CompletedReservation() | NoShowReservation():
            return False
        case _:
            assert_never(reservation)


def cancellation_block_reason(reservation: Reservation, *, now: datetime) -> str | None:
    """
    Explica por qué la reserva no puede cancelarse, o None si puede.

    Se distinguen dos causas bajo el mismo error ``CannotCancel``:
    estado no cancelable y cercanía al inicio (60 minutos o menos).
    """
    if not can_transition(reservation, ReservationStatus.CANCELLED):
        status = get_reservation_status(reservation).value
        return f"Cannot cancel reservation in {status} status"
    if reservation.data.start_time - now <= CANCELLATION_CUTOFF:
        return "Cannot cancel reservation: too close to start time"
    return None


def can_be_cancelled(reservation: Reservation, *, now: datetime) -> bool:
    """True solo para pending/confirmed con inicio estrictamente a más de 60 minutos."""
    return cancellation_block_reason(reservation, now=now) is None


def can_be_modified(reservation: Reservation) -> bool:
    return get_reservation_status(reservation) not in TERMINAL_STATUSES


def cannot_modify(reservation: Reservation) -> CannotModify:
    status = get_reservation_status(reservation).value
    return CannotModify(message=f"Cannot modify reservation in {status} status")


def calculate_refund_amount(reservation: Reservation, cancellation_date: datetime) -> Amount:
    """
    Calcula el reembolso del depósito según la anticipación de la cancelación.

    Regla de negocio:
        - >= 24 horas antes del inicio: depósito completo.
        - >= 12 y < 24 horas: 50% truncado hacia abajo.
        - < 12 horas: sin reembolso.

    Reservas no canceladas o sin depósito retornan 0.
    """
    if not is_cancelled_reservation(reservation):
        return 0
    deposit = reservation.data.deposit_amount
    if deposit is None:
        return 0

    hours_until_start = (
        reservation.data.start_time - cancellation_date
    ).total_seconds() / 3600

    if hours_until_start >= FULL_REFUND_HOURS:
        return deposit
    if hours_until_start >= HALF_REFUND_HOURS:
        return math.floor(deposit / 2)
    return 0


# === Transiciones ===


def _invalid_status(reservation: Reservation, target: ReservationStatus, verb: str) -> InvalidStatus:
    current = get_reservation_status(reservation).value
    return InvalidStatus(
        message=f"Cannot {verb} reservation in {current} status",
        current_status=current,
        target_status=target.value,
    )


def _touch(data: ReservationData, at: datetime, by: str) -> ReservationData:
    return replace(data, updated_at=at, updated_by=by)


def confirm_reservation(
    reservation: Reservation, *, confirmed_by: str, at: datetime
) -> Result[ConfirmedReservation, InvalidStatus]:
    if not is_pending_reservation(reservation):
        return Err(_invalid_status(reservation, ReservationStatus.CONFIRMED, "confirm"))
    return Ok(
        ConfirmedReservation(
            data=_touch(reservation.data, at, confirmed_by),
            confirmed_at=at,
            confirmed_by=confirmed_by,
        )
    )


def cancel_reservation(
    reservation: Reservation, *, reason: str, cancelled_by: str, at: datetime
) -> Result[CancelledReservation, CannotCancel]:
    blocked = cancellation_block_reason(reservation, now=at)
    if blocked is not None:
        return Err(CannotCancel(message=blocked))
    return Ok(
        CancelledReservation(
            data=_touch(reservation.data, at, cancelled_by),
            cancelled_at=at,
            cancelled_by=cancelled_by,
            cancellation_reason=reason,
        )
    )


def complete_reservation(
    reservation: Reservation, *, completed_by: str, at: datetime
) -> Result[CompletedReservation, InvalidStatus]:
    if not is_confirmed_reservation(reservation):
        return Err(_invalid_status(reservation, ReservationStatus.COMPLETED, "complete"))
    return Ok(
        CompletedReservation(
            data=_touch(reservation.data, at, completed_by),
            completed_at=at,
            completed_by=completed_by,
        )
    )


def mark_reservation_no_show(
    reservation: Reservation, *, marked_by: str, at: datetime
) -> Result[NoShowReservation, InvalidStatus]:
    if not is_confirmed_reservation(reservation):
        return Err(_invalid_status(reservation, ReservationStatus.NO_SHOW, "mark as no-show for"))
    return Ok(
        NoShowReservation(
            data=_touch(reservation.data, at, marked_by),
            marked_no_show_at=at,
            marked_no_show_by=marked_by,
        )
    )


def with_data(reservation: Reservation, data: ReservationData) -> Reservation:
    """Retorna la misma variante con datos compartidos actualizados."""
    return replace(reservation, data=data)


def reservation_from_status(
    status: ReservationStatus | str,
    data: ReservationData,
    **details: Any,
) -> Reservation:
    """
    Reconstruye la variante a partir de una columna de estado persistida.

    Args:
        status: Valor de ``ReservationStatus``.
        data: Datos compartidos.
        details: Campos propios de la variante (``confirmed_at``, ``cancelled_by``, ...).
    """
    status = ReservationStatus(status)
    if status is ReservationStatus.PENDING:
        return PendingReservation(data=data)
    if status is ReservationStatus.CONFIRMED:
        return ConfirmedReservation(
            data=data,
            confirmed_at=details["confirmed_at"],
            confirmed_by=details["confirmed_by"],
        )
    if status is ReservationStatus.CANCELLED:
        return CancelledReservation(
            data=data,
            cancelled_at=details["cancelled_at"],
            cancelled_by=details["cancelled_by"],
            cancellation_reason=details["cancellation_reason"],
        )
    if status is ReservationStatus.COMPLETED:
        return CompletedReservation(
            data=data,
            completed_at=details["completed_at"],
            completed_by=details["completed_by"],
        )
    if status is ReservationStatus.NO_SHOW:
        return NoShowReservation(
            data=data,
            marked_no_show_at=details["marked_no_show_at"],
            marked_no_show_by=details["marked_no_show_by"],
        )
    assert_never(status)
