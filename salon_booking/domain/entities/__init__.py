"""Entidades del dominio de reservas."""

from salon_booking.domain.entities.reservation import (
    CancelledReservation,
    CompletedReservation,
    ConfirmedReservation,
    NoShowReservation,
    PendingReservation,
    Reservation,
    ReservationData,
    ReservationStatus,
    TERMINAL_STATUSES,
    calculate_refund_amount,
    can_be_cancelled,
    can_be_modified,
    can_transition,
    cancel_reservation,
    cancellation_block_reason,
    complete_reservation,
    confirm_reservation,
    get_reservation_status,
    is_cancelled_reservation,
    is_completed_reservation,
    is_confirmed_reservation,
    is_no_show_reservation,
    is_pending_reservation,
    mark_reservation_no_show,
    reservation_from_status,
    with_data,
)

__all__ = [
    # Variants
    "Reservation",
    "ReservationData",
    "ReservationStatus",
    "PendingReservation",
    "ConfirmedReservation",
    "CancelledReservation",
    "CompletedReservation",
    "NoShowReservation",
    "TERMINAL_STATUSES",
    # Guards
    "is_pending_reservation",
    "is_confirmed_reservation",
    "is_cancelled_reservation",
    "is_completed_reservation",
    "is_no_show_reservation",
    # Business rules
    "get_reservation_status",
    "can_transition",
    "can_be_cancelled",
    "can_be_modified",
    "cancellation_block_reason",
    "calculate_refund_amount",
    # Transitions
    "confirm_reservation",
    "cancel_reservation",
    "complete_reservation",
    "mark_reservation_no_show",
    "reservation_from_status",
    "with_data",
]
