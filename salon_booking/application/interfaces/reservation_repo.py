from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, TypeVar

from salon_booking.domain.entities.reservation import Reservation, ReservationStatus
from salon_booking.domain.errors import RepositoryError
from salon_booking.domain.ids import CustomerId, ReservationId, SalonId, ServiceId, StaffId
from salon_booking.domain.result import Result
from salon_booking.domain.value_objects.money import Amount

T = TypeVar("T")


@dataclass
class NewReservation:
    salon_id: SalonId
    customer_id: CustomerId
    staff_id: StaffId
    service_id: ServiceId
    start_time: datetime
    end_time: datetime
    total_amount: Amount
    deposit_amount: Amount | None = None
    notes: str | None = None
    created_by: str | None = None
    status: ReservationStatus = ReservationStatus.PENDING


@dataclass
class ReservationUpdate:
    id: ReservationId
    start_time: datetime | None = None
    end_time: datetime | None = None
    staff_id: StaffId | None = None
    notes: str | None = None
    updated_by: str | None = None


@dataclass
class ReservationSearchCriteria:
    salon_id: SalonId | None = None
    customer_id: CustomerId | None = None
    staff_id: StaffId | None = None
    service_id: ServiceId | None = None
    status: ReservationStatus | None = None
    is_paid: bool | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


@dataclass
class Pagination:
    limit: int = 20
    offset: int = 0


@dataclass
class Page(Generic[T]):
    items: list[T] = field(default_factory=list)
    total: int = 0
    limit: int = 20
    offset: int = 0


class ReservationRepo:
    """
    Puerto de persistencia de reservas.

    Todas las operaciones retornan ``Ok``/``Err`` en lugar de lanzar
    excepciones. Los errores posibles son ``NotFound``, ``DatabaseError`` y
    ``ConstraintViolation``; las transiciones también pueden retornar
    ``InvalidStatus``/``CannotCancel`` y ``update`` puede retornar
    ``CannotModify`` si el estado cambió entre la lectura del caso de uso y
    la escritura.
    """

    async def find_by_id(self, reservation_id: ReservationId) -> Result[Reservation, RepositoryError]:
        raise NotImplementedError

    async def create(self, data: NewReservation) -> Result[Reservation, RepositoryError]:
        raise NotImplementedError

    async def update(self, data: ReservationUpdate) -> Result[Reservation, RepositoryError]:
        raise NotImplementedError

    async def confirm(
        self, reservation_id: ReservationId, confirmed_by: str
    ) -> Result[Reservation, RepositoryError]:
        raise NotImplementedError

    async def cancel(
        self, reservation_id: ReservationId, reason: str, cancelled_by: str
    ) -> Result[Reservation, RepositoryError]:
        raise NotImplementedError

    async def complete(
        self, reservation_id: ReservationId, completed_by: str
    ) -> Result[Reservation, RepositoryError]:
        raise NotImplementedError

    async def mark_as_no_show(
        self, reservation_id: ReservationId, marked_by: str
    ) -> Result[Reservation, RepositoryError]:
        raise NotImplementedError

    async def update_payment_status(
        self, reservation_id: ReservationId, is_paid: bool, updated_by: str
    ) -> Result[Reservation, RepositoryError]:
        raise NotImplementedError

    async def check_time_slot_conflict(
        self,
        staff_id: StaffId,
        start_time: datetime,
        end_time: datetime,
        exclude_reservation_id: ReservationId | None = None,
    ) -> Result[bool, RepositoryError]:
        """
        True si otra reserva no cancelada del mismo staff se superpone con
        la franja semiabierta [start_time, end_time).
        """
        raise NotImplementedError

    async def search(
        self,
        criteria: ReservationSearchCriteria,
        pagination: Pagination,
    ) -> Result[Page[Reservation], RepositoryError]:
        raise NotImplementedError
