"""Casos de uso de ciclo de vida sobre el repositorio in-memory con reloj fijo."""

from datetime import timedelta
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from salon_booking.application.dtos.reservation_dto import (
    CancelReservationInput,
    CompleteReservationInput,
    ConfirmReservationInput,
    MarkAsNoShowInput,
    RefundQueryInput,
    UpdatePaymentStatusInput,
    UpdateReservationInput,
)
from salon_booking.application.interfaces.reservation_repo import (
    NewReservation,
    Pagination,
    ReservationRepo,
    ReservationSearchCriteria,
    ReservationUpdate,
)
from salon_booking.application.use_cases import (
    CalculateRefundUseCase,
    CancelReservationUseCase,
    CompleteReservationUseCase,
    ConfirmReservationUseCase,
    GetReservationUseCase,
    MarkAsNoShowUseCase,
    SearchReservationsUseCase,
    UpdatePaymentStatusUseCase,
    UpdateReservationUseCase,
)
from salon_booking.domain.entities.reservation import ReservationStatus, get_reservation_status
from salon_booking.domain.errors import (
    CannotCancel,
    CannotModify,
    InvalidStatus,
    NotFound,
    PastTimeNotAllowed,
    SlotConflict,
)
from salon_booking.domain.ids import ReservationId
from salon_booking.domain.result import Err, Ok

MISSING_ID = ReservationId("00000000-0000-4000-8000-000000000000")


@pytest.fixture
def book(in_memory_repo, ids, clock):
    async def _book(
        starts_in=timedelta(days=1),
        duration=timedelta(hours=1),
        staff_id=None,
        deposit_amount=None,
        status=ReservationStatus.PENDING,
    ):
        start = clock.now() + starts_in
        result = await in_memory_repo.create(
            NewReservation(
                salon_id=ids.salon,
                customer_id=ids.customer,
                staff_id=staff_id or ids.staff,
                service_id=ids.service,
                start_time=start,
                end_time=start + duration,
                total_amount=Decimal("5000"),
                deposit_amount=deposit_amount,
                created_by="front-desk",
                status=status,
            )
        )
        return result.value

    return _book


class TestCancelReservation:
    @pytest.mark.asyncio
    async def test_cancel_pending_reservation(self, in_memory_repo, clock, book):
        reservation = await book()
        use_case = CancelReservationUseCase(reservation_repo=in_memory_repo, clock=clock)

        result = await use_case.execute(
            CancelReservationInput(id=reservation.data.id, reason="sick", cancelled_by="customer")
        )

        assert isinstance(result, Ok)
        assert get_reservation_status(result.value) is ReservationStatus.CANCELLED
        assert result.value.cancelled_by == "customer"

    @pytest.mark.asyncio
    async def test_too_close_to_start_does_not_reach_repository_write(
        self, make_reservation, clock
    ):
        reservation = make_reservation(start_time=clock.now() + timedelta(minutes=45))
        repo = AsyncMock(spec=ReservationRepo)
        repo.find_by_id.return_value = Ok(reservation)
        use_case = CancelReservationUseCase(reservation_repo=repo, clock=clock)

        result = await use_case.execute(
            CancelReservationInput(id=reservation.data.id, reason="late", cancelled_by="customer")
        )

        assert isinstance(result.error, CannotCancel)
        assert result.error.message == "Cannot cancel reservation: too close to start time"
        repo.cancel.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_confirmed_thirty_minutes_out_is_rejected_without_write(
        self, make_reservation, clock
    ):
        reservation = make_reservation(
            ReservationStatus.CONFIRMED, start_time=clock.now() + timedelta(minutes=30)
        )
        repo = AsyncMock(spec=ReservationRepo)
        repo.find_by_id.return_value = Ok(reservation)
        use_case = CancelReservationUseCase(reservation_repo=repo, clock=clock)

        result = await use_case.execute(
            CancelReservationInput(id=reservation.data.id, reason="late", cancelled_by="customer")
        )

        assert isinstance(result, Err)
        assert isinstance(result.error, CannotCancel)
        assert result.error.message == "Cannot cancel reservation: too close to start time"
        repo.find_by_id.assert_awaited_once_with(reservation.data.id)
        repo.cancel.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_already_cancelled(self, in_memory_repo, clock, book):
        reservation = await book()
        use_case = CancelReservationUseCase(reservation_repo=in_memory_repo, clock=clock)
        request = CancelReservationInput(id=reservation.data.id, reason="x", cancelled_by="customer")
        await use_case.execute(request)

        result = await use_case.execute(request)

        assert result.error.code == "CANNOT_CANCEL"
        assert result.error.message == "Cannot cancel reservation in cancelled status"

    @pytest.mark.asyncio
    async def test_missing_reservation(self, in_memory_repo, clock):
        use_case = CancelReservationUseCase(reservation_repo=in_memory_repo, clock=clock)

        result = await use_case.execute(
            CancelReservationInput(id=MISSING_ID, reason="x", cancelled_by="customer")
        )

        assert isinstance(result.error, NotFound)
        assert result.error.message == f"Entity Reservation not found with id {MISSING_ID}"

    @pytest.mark.asyncio
    async def test_cancelled_slot_becomes_free(self, in_memory_repo, clock, book, ids):
        reservation = await book()
        await CancelReservationUseCase(reservation_repo=in_memory_repo, clock=clock).execute(
            CancelReservationInput(id=reservation.data.id, reason="x", cancelled_by="customer")
        )

        conflict = await in_memory_repo.check_time_slot_conflict(
            ids.staff, reservation.data.start_time, reservation.data.end_time
        )

        assert conflict == Ok(False)


class TestCalculateRefund:
    @pytest.mark.asyncio
    async def test_half_refund_eighteen_hours_before(self, in_memory_repo, clock, book):
        reservation = await book(deposit_amount=Decimal("3000"))
        await CancelReservationUseCase(reservation_repo=in_memory_repo, clock=clock).execute(
            CancelReservationInput(id=reservation.data.id, reason="x", cancelled_by="customer")
        )
        use_case = CalculateRefundUseCase(reservation_repo=in_memory_repo)

        result = await use_case.execute(
            RefundQueryInput(
                id=reservation.data.id,
                cancellation_date=reservation.data.start_time - timedelta(hours=18),
            )
        )

        assert result == Ok(1500)

    @pytest.mark.asyncio
    async def test_missing_reservation(self, in_memory_repo, clock):
        result = await CalculateRefundUseCase(reservation_repo=in_memory_repo).execute(
            RefundQueryInput(id=MISSING_ID, cancellation_date=clock.now())
        )

        assert isinstance(result.error, NotFound)


class TestStatusChanges:
    @pytest.mark.asyncio
    async def test_confirm_then_complete(self, in_memory_repo, book):
        reservation = await book()

        confirmed = await ConfirmReservationUseCase(reservation_repo=in_memory_repo).execute(
            ConfirmReservationInput(id=reservation.data.id, confirmed_by="manager")
        )
        completed = await CompleteReservationUseCase(reservation_repo=in_memory_repo).execute(
            CompleteReservationInput(id=reservation.data.id, completed_by="stylist")
        )

        assert get_reservation_status(confirmed.value) is ReservationStatus.CONFIRMED
        assert get_reservation_status(completed.value) is ReservationStatus.COMPLETED
        assert completed.value.completed_by == "stylist"

    @pytest.mark.asyncio
    async def test_confirm_twice(self, in_memory_repo, book):
        reservation = await book(status=ReservationStatus.CONFIRMED)

        result = await ConfirmReservationUseCase(reservation_repo=in_memory_repo).execute(
            ConfirmReservationInput(id=reservation.data.id, confirmed_by="manager")
        )

        assert isinstance(result.error, InvalidStatus)
        assert result.error.message == "Cannot confirm reservation in confirmed status"

    @pytest.mark.asyncio
    async def test_complete_pending(self, in_memory_repo, book):
        reservation = await book()

        result = await CompleteReservationUseCase(reservation_repo=in_memory_repo).execute(
            CompleteReservationInput(id=reservation.data.id, completed_by="stylist")
        )

        assert result.error.message == "Cannot complete reservation in pending status"

    @pytest.mark.asyncio
    async def test_no_show_waits_for_start_time(self, in_memory_repo, clock, book):
        reservation = await book(
            starts_in=timedelta(hours=2), status=ReservationStatus.CONFIRMED
        )
        use_case = MarkAsNoShowUseCase(reservation_repo=in_memory_repo, clock=clock)
        request = MarkAsNoShowInput(id=reservation.data.id, marked_by="stylist")

        early = await use_case.execute(request)
        clock.advance(hours=2, minutes=30)
        late = await use_case.execute(request)

        assert early.error.message == "Cannot mark future reservations as no-show"
        assert get_reservation_status(late.value) is ReservationStatus.NO_SHOW
        assert late.value.marked_no_show_at == clock.now()

    @pytest.mark.asyncio
    async def test_no_show_allowed_at_start_time(self, in_memory_repo, clock, book):
        reservation = await book(
            starts_in=timedelta(hours=2), status=ReservationStatus.CONFIRMED
        )
        clock.advance(hours=2)

        result = await MarkAsNoShowUseCase(reservation_repo=in_memory_repo, clock=clock).execute(
            MarkAsNoShowInput(id=reservation.data.id, marked_by="stylist")
        )

        assert get_reservation_status(result.value) is ReservationStatus.NO_SHOW

    @pytest.mark.asyncio
    async def test_no_show_requires_confirmed(self, in_memory_repo, clock, book):
        reservation = await book()
        clock.advance(days=2)

        result = await MarkAsNoShowUseCase(reservation_repo=in_memory_repo, clock=clock).execute(
            MarkAsNoShowInput(id=reservation.data.id, marked_by="stylist")
        )

        assert result.error.message == "Cannot mark as no-show for reservation in pending status"


class TestUpdateReservation:
    @pytest.mark.asyncio
    async def test_move_to_free_slot(self, in_memory_repo, clock, book):
        reservation = await book()
        new_start = reservation.data.start_time + timedelta(hours=3)
        use_case = UpdateReservationUseCase(reservation_repo=in_memory_repo, clock=clock)

        result = await use_case.execute(
            UpdateReservationInput(
                id=reservation.data.id,
                start_time=new_start,
                end_time=new_start + timedelta(hours=1),
                updated_by="manager",
            )
        )

        assert result.value.data.start_time == new_start
        assert result.value.data.updated_by == "manager"

    @pytest.mark.asyncio
    async def test_shift_overlapping_its_own_slot_is_allowed(self, in_memory_repo, clock, book):
        reservation = await book()
        new_start = reservation.data.start_time + timedelta(minutes=30)

        result = await UpdateReservationUseCase(reservation_repo=in_memory_repo, clock=clock).execute(
            UpdateReservationInput(
                id=reservation.data.id,
                start_time=new_start,
                end_time=new_start + timedelta(hours=1),
            )
        )

        assert isinstance(result, Ok)

    @pytest.mark.asyncio
    async def test_move_onto_another_booking(self, in_memory_repo, clock, book):
        first = await book(starts_in=timedelta(days=1))
        second = await book(starts_in=timedelta(days=1, hours=2))

        result = await UpdateReservationUseCase(reservation_repo=in_memory_repo, clock=clock).execute(
            UpdateReservationInput(
                id=second.data.id,
                start_time=first.data.start_time,
                end_time=first.data.end_time,
            )
        )

        assert isinstance(result.error, SlotConflict)

    @pytest.mark.asyncio
    async def test_move_into_the_past(self, in_memory_repo, clock, book):
        reservation = await book()

        result = await UpdateReservationUseCase(reservation_repo=in_memory_repo, clock=clock).execute(
            UpdateReservationInput(
                id=reservation.data.id,
                start_time=clock.now() - timedelta(hours=1),
            )
        )

        assert isinstance(result.error, PastTimeNotAllowed)

    @pytest.mark.asyncio
    async def test_terminal_reservation_cannot_be_modified(self, in_memory_repo, clock, book):
        reservation = await book()
        await CancelReservationUseCase(reservation_repo=in_memory_repo, clock=clock).execute(
            CancelReservationInput(id=reservation.data.id, reason="x", cancelled_by="customer")
        )

        result = await UpdateReservationUseCase(reservation_repo=in_memory_repo, clock=clock).execute(
            UpdateReservationInput(id=reservation.data.id, notes="bring photos")
        )

        assert isinstance(result.error, CannotModify)
        assert result.error.message == "Cannot modify reservation in cancelled status"

    @pytest.mark.asyncio
    async def test_notes_only_change_skips_conflict_check(self, make_reservation, clock):
        reservation = make_reservation()
        repo = AsyncMock(spec=ReservationRepo)
        repo.find_by_id.return_value = Ok(reservation)
        repo.update.return_value = Ok(reservation)

        await UpdateReservationUseCase(reservation_repo=repo, clock=clock).execute(
            UpdateReservationInput(id=reservation.data.id, notes="bring photos")
        )

        repo.check_time_slot_conflict.assert_not_awaited()
        repo.update.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_repository_rejects_update_after_concurrent_cancel(
        self, in_memory_repo, clock, book
    ):
        reservation = await book()
        await in_memory_repo.cancel(reservation.data.id, "sick", "customer")

        result = await in_memory_repo.update(
            ReservationUpdate(id=reservation.data.id, notes="edited after cancel")
        )
        stored = await in_memory_repo.find_by_id(reservation.data.id)

        assert isinstance(result.error, CannotModify)
        assert stored.value.data.notes is None

    @pytest.mark.asyncio
    async def test_update_without_actor_keeps_previous_one(self, in_memory_repo, clock, book):
        reservation = await book()

        result = await in_memory_repo.update(
            ReservationUpdate(id=reservation.data.id, notes="bring photos")
        )

        assert result.value.data.notes == "bring photos"
        assert result.value.data.updated_by == "front-desk"


class TestPaymentStatus:
    @pytest.mark.asyncio
    async def test_mark_paid_then_filter(self, in_memory_repo, clock, book):
        paid = await book()
        await book(starts_in=timedelta(days=1, hours=2))
        use_case = UpdatePaymentStatusUseCase(reservation_repo=in_memory_repo)

        result = await use_case.execute(
            UpdatePaymentStatusInput(id=paid.data.id, is_paid=True, updated_by="cashier")
        )
        page = await SearchReservationsUseCase(reservation_repo=in_memory_repo).execute(
            ReservationSearchCriteria(is_paid=True)
        )

        assert result.value.data.is_paid is True
        assert result.value.data.updated_by == "cashier"
        assert get_reservation_status(result.value) is ReservationStatus.PENDING
        assert [r.data.id for r in page.value.items] == [paid.data.id]

    @pytest.mark.asyncio
    async def test_missing_reservation(self, in_memory_repo):
        result = await UpdatePaymentStatusUseCase(reservation_repo=in_memory_repo).execute(
            UpdatePaymentStatusInput(id=MISSING_ID, is_paid=True, updated_by="cashier")
        )

        assert isinstance(result.error, NotFound)


class TestQueries:
    @pytest.mark.asyncio
    async def test_get_by_id(self, in_memory_repo, book):
        reservation = await book()

        result = await GetReservationUseCase(reservation_repo=in_memory_repo).execute(
            reservation.data.id
        )

        assert result == Ok(reservation)

    @pytest.mark.asyncio
    async def test_search_by_staff_with_pagination(self, in_memory_repo, book, ids):
        for hours in (1, 3, 5):
            await book(starts_in=timedelta(days=1, hours=hours))
        await book(staff_id=ids.other_staff)
        use_case = SearchReservationsUseCase(reservation_repo=in_memory_repo)

        result = await use_case.execute(
            ReservationSearchCriteria(staff_id=ids.staff), Pagination(limit=2, offset=0)
        )

        page = result.value
        assert page.total == 3
        assert len(page.items) == 2
        assert page.items[0].data.start_time < page.items[1].data.start_time

    @pytest.mark.asyncio
    async def test_page_size_is_clamped(self):
        repo = AsyncMock(spec=ReservationRepo)
        use_case = SearchReservationsUseCase(reservation_repo=repo)

        await use_case.execute(ReservationSearchCriteria(), Pagination(limit=500, offset=-3))

        pagination = repo.search.await_args.args[1]
        assert pagination.limit == 100
        assert pagination.offset == 0
