"""DTOs de entrada para los casos de uso de reservas."""

from dataclasses import dataclass
from datetime import datetime

from salon_booking.domain.entities.reservation import ReservationStatus
from salon_booking.domain.ids import CustomerId, ReservationId, SalonId, ServiceId, StaffId
from salon_booking.domain.value_objects.money import Amount


@dataclass
class CreateReservationInput:
    """DTO para crear una nueva reserva."""

    # Referencias
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

    notes: str | None = None
    created_by: str | None = None

    # Política del salón: algunos confirman automáticamente
    initial_status: ReservationStatus = ReservationStatus.PENDING


@dataclass
class CancelReservationInput:
    id: ReservationId
    reason: str
    cancelled_by: str


@dataclass
class ConfirmReservationInput:
    id: ReservationId
    confirmed_by: str


@dataclass
class CompleteReservationInput:
    id: ReservationId
    completed_by: str


@dataclass
class MarkAsNoShowInput:
    id: ReservationId
    marked_by: str


@dataclass
class UpdateReservationInput:
    """DTO para modificar franja, staff o notas de una reserva."""

    id: ReservationId
    start_time: datetime | None = None
    end_time: datetime | None = None
    staff_id: StaffId | None = None
    notes: str | None = None
    updated_by: str | None = None

    @property
    def changes_schedule(self) -> bool:
        return (
            self.start_time is not None
            or self.end_time is not None
            or self.staff_id is not None
        )


@dataclass
class RefundQueryInput:
    id: ReservationId
    cancellation_date: datetime


@dataclass
class UpdatePaymentStatusInput:
    id: ReservationId
    is_paid: bool
    updated_by: str
