"""Casos de uso de reservas."""

from salon_booking.application.use_cases.cancel_reservation import (
    CalculateRefundUseCase,
    CancelReservationUseCase,
)
from salon_booking.application.use_cases.change_status import (
    CompleteReservationUseCase,
    ConfirmReservationUseCase,
    MarkAsNoShowUseCase,
)
from salon_booking.application.use_cases.create_reservation import CreateReservationUseCase
from salon_booking.application.use_cases.get_reservation import (
    GetReservationUseCase,
    SearchReservationsUseCase,
)
from salon_booking.application.use_cases.update_payment_status import UpdatePaymentStatusUseCase
from salon_booking.application.use_cases.update_reservation import UpdateReservationUseCase

__all__ = [
    "CreateReservationUseCase",
    "CancelReservationUseCase",
    "CalculateRefundUseCase",
    "ConfirmReservationUseCase",
    "CompleteReservationUseCase",
    "MarkAsNoShowUseCase",
    "UpdateReservationUseCase",
    "UpdatePaymentStatusUseCase",
    "GetReservationUseCase",
    "SearchReservationsUseCase",
]
