"""Interfaces (Puertos) de la capa de aplicación."""

from salon_booking.application.interfaces.clock import Clock, FakeClock, SystemClock
from salon_booking.application.interfaces.reservation_repo import (
    NewReservation,
    Page,
    Pagination,
    ReservationRepo,
    ReservationSearchCriteria,
    ReservationUpdate,
)

__all__ = [
    # Repositories
    "ReservationRepo",
    "NewReservation",
    "ReservationUpdate",
    "ReservationSearchCriteria",
    "Pagination",
    "Page",
    # Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
]
