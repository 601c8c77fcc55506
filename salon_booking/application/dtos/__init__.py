"""DTOs de la capa de aplicación."""

from salon_booking.application.dtos.reservation_dto import (
    CancelReservationInput,
    CompleteReservationInput,
    ConfirmReservationInput,
    CreateReservationInput,
    MarkAsNoShowInput,
    RefundQueryInput,
    UpdateReservationInput,
)

__all__ = [
    "CreateReservationInput",
    "CancelReservationInput",
    "ConfirmReservationInput",
    "CompleteReservationInput",
    "MarkAsNoShowInput",
    "UpdateReservationInput",
    "RefundQueryInput",
]
