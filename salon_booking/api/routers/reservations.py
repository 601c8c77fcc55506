from datetime import datetime

from fastapi import APIRouter, Depends, Query, status

from salon_booking.api.dependencies import get_use_cases
from salon_booking.api.errors import unwrap
from salon_booking.api.schemas.reservations import (
    CancelReservationRequest,
    CompleteReservationRequest,
    ConfirmReservationRequest,
    CreateReservationRequest,
    ErrorResponse,
    MarkAsNoShowRequest,
    RefundResponse,
    ReservationPageResponse,
    ReservationResponse,
    UpdatePaymentStatusRequest,
    UpdateReservationRequest,
    as_utc,
)
from salon_booking.application.dtos.reservation_dto import (
    CancelReservationInput,
    CompleteReservationInput,
    ConfirmReservationInput,
    CreateReservationInput,
    MarkAsNoShowInput,
    RefundQueryInput,
    UpdatePaymentStatusInput,
    UpdateReservationInput,
)
from salon_booking.application.interfaces.reservation_repo import (
    Pagination,
    ReservationSearchCriteria,
)
from salon_booking.domain.entities.reservation import ReservationStatus
from salon_booking.domain.ids import (
    create_customer_id_safe,
    create_reservation_id_safe,
    create_salon_id_safe,
    create_service_id_safe,
    create_staff_id_safe,
)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


def _optional(value: str | None, factory):
    return None if value is None else unwrap(factory(value))


@router.post(
    "/reservations",
    response_model=ReservationResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
async def create_reservation(
    payload: CreateReservationRequest,
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    request = CreateReservationInput(
        salon_id=unwrap(create_salon_id_safe(payload.salon_id)),
        customer_id=unwrap(create_customer_id_safe(payload.customer_id)),
        staff_id=unwrap(create_staff_id_safe(payload.staff_id)),
        service_id=unwrap(create_service_id_safe(payload.service_id)),
        start_time=payload.start_time,
        end_time=payload.end_time,
        total_amount=payload.total_amount,
        deposit_amount=payload.deposit_amount,
        notes=payload.notes,
        created_by=payload.created_by,
        initial_status=(
            ReservationStatus.CONFIRMED if payload.auto_confirm else ReservationStatus.PENDING
        ),
    )
    reservation = unwrap(await use_cases["create_reservation"].execute(request))
    return ReservationResponse.from_domain(reservation)


@router.get(
    "/reservations",
    response_model=ReservationPageResponse,
    responses=ERROR_RESPONSES,
)
async def search_reservations(
    salon_id: str | None = None,
    customer_id: str | None = None,
    staff_id: str | None = None,
    service_id: str | None = None,
    status_filter: ReservationStatus | None = Query(default=None, alias="status"),
    is_paid: bool | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    use_cases=Depends(get_use_cases),
) -> ReservationPageResponse:
    criteria = ReservationSearchCriteria(
        salon_id=_optional(salon_id, create_salon_id_safe),
        customer_id=_optional(customer_id, create_customer_id_safe),
        staff_id=_optional(staff_id, create_staff_id_safe),
        service_id=_optional(service_id, create_service_id_safe),
        status=status_filter,
        is_paid=is_paid,
        start_date=as_utc(start_date),
        end_date=as_utc(end_date),
    )
    page = unwrap(
        await use_cases["search_reservations"].execute(
            criteria, Pagination(limit=limit, offset=offset)
        )
    )
    return ReservationPageResponse.from_page(page)


@router.get(
    "/reservations/{reservation_id}",
    response_model=ReservationResponse,
    responses=ERROR_RESPONSES,
)
async def get_reservation(
    reservation_id: str,
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    rid = unwrap(create_reservation_id_safe(reservation_id))
    reservation = unwrap(await use_cases["get_reservation"].execute(rid))
    return ReservationResponse.from_domain(reservation)


@router.patch(
    "/reservations/{reservation_id}",
    response_model=ReservationResponse,
    responses=ERROR_RESPONSES,
)
async def update_reservation(
    reservation_id: str,
    payload: UpdateReservationRequest,
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    request = UpdateReservationInput(
        id=unwrap(create_reservation_id_safe(reservation_id)),
        start_time=payload.start_time,
        end_time=payload.end_time,
        staff_id=_optional(payload.staff_id, create_staff_id_safe),
        notes=payload.notes,
        updated_by=payload.updated_by,
    )
    reservation = unwrap(await use_cases["update_reservation"].execute(request))
    return ReservationResponse.from_domain(reservation)


@router.post(
    "/reservations/{reservation_id}/cancel",
    response_model=ReservationResponse,
    responses=ERROR_RESPONSES,
)
async def cancel_reservation(
    reservation_id: str,
    payload: CancelReservationRequest,
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    request = CancelReservationInput(
        id=unwrap(create_reservation_id_safe(reservation_id)),
        reason=payload.reason,
        cancelled_by=payload.cancelled_by,
    )
    reservation = unwrap(await use_cases["cancel_reservation"].execute(request))
    return ReservationResponse.from_domain(reservation)


@router.post(
    "/reservations/{reservation_id}/confirm",
    response_model=ReservationResponse,
    responses=ERROR_RESPONSES,
)
async def confirm_reservation(
    reservation_id: str,
    payload: ConfirmReservationRequest,
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    request = ConfirmReservationInput(
        id=unwrap(create_reservation_id_safe(reservation_id)),
        confirmed_by=payload.confirmed_by,
    )
    reservation = unwrap(await use_cases["confirm_reservation"].execute(request))
    return ReservationResponse.from_domain(reservation)


@router.post(
    "/reservations/{reservation_id}/complete",
    response_model=ReservationResponse,
    responses=ERROR_RESPONSES,
)
async def complete_reservation(
    reservation_id: str,
    payload: CompleteReservationRequest,
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    request = CompleteReservationInput(
        id=unwrap(create_reservation_id_safe(reservation_id)),
        completed_by=payload.completed_by,
    )
    reservation = unwrap(await use_cases["complete_reservation"].execute(request))
    return ReservationResponse.from_domain(reservation)


@router.post(
    "/reservations/{reservation_id}/no-show",
    response_model=ReservationResponse,
    responses=ERROR_RESPONSES,
)
async def mark_as_no_show(
    reservation_id: str,
    payload: MarkAsNoShowRequest,
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    request = MarkAsNoShowInput(
        id=unwrap(create_reservation_id_safe(reservation_id)),
        marked_by=payload.marked_by,
    )
    reservation = unwrap(await use_cases["mark_as_no_show"].execute(request))
    return ReservationResponse.from_domain(reservation)


@router.get(
    "/reservations/{reservation_id}/refund",
    response_model=RefundResponse,
    responses=ERROR_RESPONSES,
)
async def get_refund(
    reservation_id: str,
    cancelled_at: datetime,
    use_cases=Depends(get_use_cases),
) -> RefundResponse:
    rid = unwrap(create_reservation_id_safe(reservation_id))
    cancelled_at = as_utc(cancelled_at)
    amount = unwrap(
        await use_cases["calculate_refund"].execute(
            RefundQueryInput(id=rid, cancellation_date=cancelled_at)
        )
    )
    return RefundResponse(reservation_id=rid, cancelled_at=cancelled_at, refund_amount=amount)


@router.post(
    "/reservations/{reservation_id}/payment",
    response_model=ReservationResponse,
    responses=ERROR_RESPONSES,
)
async def update_payment_status(
    reservation_id: str,
    payload: UpdatePaymentStatusRequest,
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    request = UpdatePaymentStatusInput(
        id=unwrap(create_reservation_id_safe(reservation_id)),
        is_paid=payload.is_paid,
        updated_by=payload.updated_by,
    )
    reservation = unwrap(await use_cases["update_payment_status"].execute(request))
    return ReservationResponse.from_domain(reservation)
