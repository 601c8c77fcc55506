from salon_booking.application.interfaces.reservation_repo import (
    Page,
    Pagination,
    ReservationRepo,
    ReservationSearchCriteria,
)
from salon_booking.domain.entities.reservation import Reservation
from salon_booking.domain.errors import RepositoryError
from salon_booking.domain.ids import ReservationId
from salon_booking.domain.result import Result

MAX_PAGE_SIZE = 100


class GetReservationUseCase:
    def __init__(self, reservation_repo: ReservationRepo) -> None:
        self._reservation_repo = reservation_repo

    async def execute(self, reservation_id: ReservationId) -> Result[Reservation, RepositoryError]:
        return await self._reservation_repo.find_by_id(reservation_id)


class SearchReservationsUseCase:
    def __init__(self, reservation_repo: ReservationRepo) -> None:
        self._reservation_repo = reservation_repo

    async def execute(
        self,
        criteria: ReservationSearchCriteria,
        pagination: Pagination | None = None,
    ) -> Result[Page[Reservation], RepositoryError]:
        pagination = pagination or Pagination()
        clamped = Pagination(
            limit=max(1, min(pagination.limit, MAX_PAGE_SIZE)),
            offset=max(0, pagination.offset),
        )
        return await self._reservation_repo.search(criteria, clamped)
