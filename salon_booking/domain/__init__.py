"""
Capa de Dominio - Reservas de salón.

Esta capa contiene la lógica de negocio pura, sin dependencias de frameworks.

Estructura:
- entities/: Reserva como unión de variantes y su máquina de estados
- value_objects/: Validadores de franja horaria y montos
- ids.py: Identificadores tipados y sus fábricas
- errors.py: Errores de dominio (valores, no excepciones)
- result.py: Tipo Result (Ok / Err)
"""

from salon_booking.domain.entities import (
    CancelledReservation,
    CompletedReservation,
    ConfirmedReservation,
    NoShowReservation,
    PendingReservation,
    Reservation,
    ReservationData,
    ReservationStatus,
    calculate_refund_amount,
    can_be_cancelled,
    can_be_modified,
    get_reservation_status,
)
from salon_booking.domain.errors import (
    CannotCancel,
    CannotModify,
    ConstraintViolation,
    DatabaseError,
    DomainError,
    InvalidAmount,
    InvalidIdFormat,
    InvalidStatus,
    InvalidTimeRange,
    NotFound,
    PastTimeNotAllowed,
    RepositoryError,
    SlotConflict,
)
from salon_booking.domain.ids import (
    CustomerId,
    ReservationId,
    SalonId,
    ServiceId,
    StaffId,
)
from salon_booking.domain.result import Err, Ok, Result
from salon_booking.domain.value_objects import (
    TimeRange,
    validate_amount,
    validate_deposit_amount,
    validate_time_range,
)

__all__ = [
    # Entities
    "Reservation",
    "ReservationData",
    "ReservationStatus",
    "PendingReservation",
    "ConfirmedReservation",
    "CancelledReservation",
    "CompletedReservation",
    "NoShowReservation",
    "calculate_refund_amount",
    "can_be_cancelled",
    "can_be_modified",
    "get_reservation_status",
    # Ids
    "ReservationId",
    "SalonId",
    "CustomerId",
    "StaffId",
    "ServiceId",
    # Value Objects
    "TimeRange",
    "validate_amount",
    "validate_deposit_amount",
    "validate_time_range",
    # Result
    "Ok",
    "Err",
    "Result",
    # Errors
    "DomainError",
    "InvalidIdFormat",
    "InvalidTimeRange",
    "PastTimeNotAllowed",
    "InvalidAmount",
    "SlotConflict",
    "CannotCancel",
    "CannotModify",
    "InvalidStatus",
    "NotFound",
    "DatabaseError",
    "ConstraintViolation",
    "RepositoryError",
]
