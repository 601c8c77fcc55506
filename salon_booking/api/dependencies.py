from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from salon_booking.application.interfaces.clock import Clock, SystemClock
from salon_booking.application.interfaces.reservation_repo import ReservationRepo
from salon_booking.application.use_cases import (
    CalculateRefundUseCase,
    CancelReservationUseCase,
    CompleteReservationUseCase,
    ConfirmReservationUseCase,
    CreateReservationUseCase,
    GetReservationUseCase,
    MarkAsNoShowUseCase,
    SearchReservationsUseCase,
    UpdatePaymentStatusUseCase,
    UpdateReservationUseCase,
)
from salon_booking.config import Settings, get_settings
from salon_booking.infrastructure.db.engine import AsyncSessionLocal
from salon_booking.infrastructure.db.repositories.reservation_repo_sql import ReservationRepoSQL
from salon_booking.infrastructure.in_memory.reservation_repo import InMemoryReservationRepo


async def get_session(settings: Settings = Depends(get_settings)) -> AsyncSession | None:
    if settings.use_in_memory:
        yield None
        return
    async with AsyncSessionLocal() as session:
        yield session


def get_clock() -> Clock:
    return SystemClock()


@lru_cache(maxsize=1)
def _in_memory_bundle():
    clock = SystemClock()
    return {
        "clock": clock,
        "reservation_repo": InMemoryReservationRepo(clock=clock),
    }


def get_reservation_repo(
    settings: Settings = Depends(get_settings),
    session: AsyncSession | None = Depends(get_session),
    clock: Clock = Depends(get_clock),
) -> ReservationRepo:
    if settings.use_in_memory:
        return _in_memory_bundle()["reservation_repo"]

    if not session:
        raise RuntimeError("DB session not available")
    return ReservationRepoSQL(session, clock=clock)


def get_use_cases(
    reservation_repo: ReservationRepo = Depends(get_reservation_repo),
    clock: Clock = Depends(get_clock),
):
    return {
        "create_reservation": CreateReservationUseCase(reservation_repo=reservation_repo, clock=clock),
        "update_reservation": UpdateReservationUseCase(reservation_repo=reservation_repo, clock=clock),
        "cancel_reservation": CancelReservationUseCase(reservation_repo=reservation_repo, clock=clock),
        "calculate_refund": CalculateRefundUseCase(reservation_repo=reservation_repo),
        "confirm_reservation": ConfirmReservationUseCase(reservation_repo=reservation_repo),
        "complete_reservation": CompleteReservationUseCase(reservation_repo=reservation_repo),
        "mark_as_no_show": MarkAsNoShowUseCase(reservation_repo=reservation_repo, clock=clock),
        "update_payment_status": UpdatePaymentStatusUseCase(reservation_repo=reservation_repo),
        "get_reservation": GetReservationUseCase(reservation_repo=reservation_repo),
        "search_reservations": SearchReservationsUseCase(reservation_repo=reservation_repo),
    }
