"""Implementaciones in-memory para testing."""

from salon_booking.infrastructure.in_memory.reservation_repo import InMemoryReservationRepo

__all__ = [
    "InMemoryReservationRepo",
]
