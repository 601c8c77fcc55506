"""Persistencia SQL: tabla de reservas, engine async y repositorios."""

from salon_booking.infrastructure.db.tables import metadata, reservations

__all__ = [
    "metadata",
    "reservations",
]
