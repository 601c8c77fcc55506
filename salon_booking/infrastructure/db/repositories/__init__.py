from salon_booking.infrastructure.db.repositories.reservation_repo_sql import ReservationRepoSQL

__all__ = ["ReservationRepoSQL"]
