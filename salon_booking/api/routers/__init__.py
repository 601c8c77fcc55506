from salon_booking.api.routers.health import router as health_router
from salon_booking.api.routers.reservations import router as reservations_router

__all__ = ["health_router", "reservations_router"]
