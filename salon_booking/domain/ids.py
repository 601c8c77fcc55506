"""Identificadores tipados (branded) de las entidades del salón.

En runtime son ``str`` planos; ``NewType`` impide que un ``StaffId`` se pase
donde se espera un ``CustomerId``. La validación ocurre una sola vez en el
borde, mediante las funciones ``create_*_id``.
"""

import re
from typing import Callable, NewType, TypeVar

from salon_booking.domain.errors import InvalidIdFormat
from salon_booking.domain.result import Err, Ok, Result

ReservationId = NewType("ReservationId", str)
SalonId = NewType("SalonId", str)
CustomerId = NewType("CustomerId", str)
StaffId = NewType("StaffId", str)
ServiceId = NewType("ServiceId", str)

UUID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)

IdT = TypeVar("IdT", bound=str)


def is_valid_uuid(value: str) -> bool:
    """Verifica la forma textual 8-4-4-4-12 de un UUID (sin normalizar mayúsculas)."""
    return isinstance(value, str) and UUID_PATTERN.fullmatch(value) is not None


def _create_safe(value: str, brand: str, factory: Callable[[str], IdT]) -> Result[IdT, InvalidIdFormat]:
    if not is_valid_uuid(value):
        return Err(
            InvalidIdFormat(
                message=f"Invalid {brand} format: {value}",
                value=value,
                brand=brand,
            )
        )
    return Ok(factory(value))


def _create(value: str, factory: Callable[[str], IdT]) -> IdT | None:
    return factory(value) if is_valid_uuid(value) else None


def create_reservation_id(value: str) -> ReservationId | None:
    return _create(value, ReservationId)


def create_reservation_id_safe(value: str) -> Result[ReservationId, InvalidIdFormat]:
    return _create_safe(value, "ReservationId", ReservationId)


def create_salon_id(value: str) -> SalonId | None:
    return _create(value, SalonId)


def create_salon_id_safe(value: str) -> Result[SalonId, InvalidIdFormat]:
    return _create_safe(value, "SalonId", SalonId)


def create_customer_id(value: str) -> CustomerId | None:
    return _create(value, CustomerId)


def create_customer_id_safe(value: str) -> Result[CustomerId, InvalidIdFormat]:
    return _create_safe(value, "CustomerId", CustomerId)


def create_staff_id(value: str) -> StaffId | None:
    return _create(value, StaffId)


def create_staff_id_safe(value: str) -> Result[StaffId, InvalidIdFormat]:
    return _create_safe(value, "StaffId", StaffId)


def create_service_id(value: str) -> ServiceId | None:
    return _create(value, ServiceId)


def create_service_id_safe(value: str) -> Result[ServiceId, InvalidIdFormat]:
    return _create_safe(value, "ServiceId", ServiceId)
