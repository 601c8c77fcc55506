from datetime import datetime, timezone
from decimal import Decimal
from typing import assert_never

from pydantic import BaseModel, ConfigDict, Field, constr, field_validator

from salon_booking.application.interfaces.reservation_repo import Page
from salon_booking.domain.entities.reservation import (
    CancelledReservation,
    CompletedReservation,
    ConfirmedReservation,
    NoShowReservation,
    PendingReservation,
    Reservation,
    ReservationStatus,
    get_reservation_status,
)

Actor = constr(strip_whitespace=True, min_length=1, max_length=255)


def as_utc(value: datetime | None) -> datetime | None:
    # Clients may omit the offset; such values are read as UTC.
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class CreateReservationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    salon_id: str
    customer_id: str
    staff_id: str
    service_id: str
    start_time: datetime
    end_time: datetime
    total_amount: Decimal
    deposit_amount: Decimal | None = None
    notes: str | None = None
    created_by: Actor | None = None
    auto_confirm: bool = False

    @field_validator("start_time", "end_time")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class UpdateReservationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    start_time: datetime | None = None
    end_time: datetime | None = None
    staff_id: str | None = None
    notes: str | None = None
    updated_by: Actor | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def assume_utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value)


class CancelReservationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    reason: constr(strip_whitespace=True, min_length=1)
    cancelled_by: Actor


class ConfirmReservationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    confirmed_by: Actor


class CompleteReservationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    completed_by: Actor


class MarkAsNoShowRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    marked_by: Actor


class UpdatePaymentStatusRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    is_paid: bool
    updated_by: Actor


class ReservationResponse(BaseModel):
    id: str
    salon_id: str
    customer_id: str
    staff_id: str
    service_id: str
    status: ReservationStatus
    start_time: datetime
    end_time: datetime
    total_amount: Decimal
    deposit_amount: Decimal | None = None
    is_paid: bool
    notes: str | None = None
    created_at: datetime
    updated_at: datetime
    created_by: str | None = None
    updated_by: str | None = None

    confirmed_at: datetime | None = None
    confirmed_by: str | None = None
    cancelled_at: datetime | None = None
    cancelled_by: str | None = None
    cancellation_reason: str | None = None
    completed_at: datetime | None = None
    completed_by: str | None = None
    marked_no_show_at: datetime | None = None
    marked_no_show_by: str | None = None

    @classmethod
    def from_domain(cls, reservation: Reservation) -> "ReservationResponse":
        data = reservation.data
        details: dict
        match reservation:
            case PendingReservation():
                details = {}
            case ConfirmedReservation():
                details = {
                    "confirmed_at": reservation.confirmed_at,
                    "confirmed_by": reservation.confirmed_by,
                }
            case CancelledReservation():
                details = {
                    "cancelled_at": reservation.cancelled_at,
                    "cancelled_by": reservation.cancelled_by,
                    "cancellation_reason": reservation.cancellation_reason,
                }
            case CompletedReservation():
                details = {
                    "completed_at": reservation.completed_at,
                    "completed_by": reservation.completed_by,
                }
            case NoShowReservation():
                details = {
                    "marked_no_show_at": reservation.marked_no_show_at,
                    "marked_no_show_by": reservation.marked_no_show_by,
                }
            case _:
                assert_never(reservation)
        return cls(
            id=data.id,
            salon_id=data.salon_id,
            customer_id=data.customer_id,
            staff_id=data.staff_id,
            service_id=data.service_id,
            status=get_reservation_status(reservation),
            start_time=data.start_time,
            end_time=data.end_time,
            total_amount=data.total_amount,
            deposit_amount=data.deposit_amount,
            is_paid=data.is_paid,
            notes=data.notes,
            created_at=data.created_at,
            updated_at=data.updated_at,
            created_by=data.created_by,
            updated_by=data.updated_by,
            **details,
        )


class ReservationPageResponse(BaseModel):
    items: list[ReservationResponse] = Field(default_factory=list)
    total: int
    limit: int
    offset: int

    @classmethod
    def from_page(cls, page: Page[Reservation]) -> "ReservationPageResponse":
        return cls(
            items=[ReservationResponse.from_domain(r) for r in page.items],
            total=page.total,
            limit=page.limit,
            offset=page.offset,
        )


class RefundResponse(BaseModel):
    reservation_id: str
    cancelled_at: datetime
    refund_amount: Decimal


class ErrorResponse(BaseModel):
    code: str
    message: str
