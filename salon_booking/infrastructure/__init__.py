"""
Capa de Infraestructura - Reservas de salón.

Implementaciones concretas del puerto ReservationRepo.

Estructura:
- db/: Tabla, engine y repositorio SQL (SQLAlchemy async)
- in_memory/: Repositorio en memoria para desarrollo y testing
"""

from salon_booking.infrastructure.db.repositories.reservation_repo_sql import ReservationRepoSQL
from salon_booking.infrastructure.in_memory import InMemoryReservationRepo

__all__ = [
    # Database - Repositories SQL
    "ReservationRepoSQL",
    # In-Memory Implementations
    "InMemoryReservationRepo",
]
