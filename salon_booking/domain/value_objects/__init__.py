"""Value Objects y validadores puros del dominio de reservas."""

from salon_booking.domain.value_objects.money import (
    MAX_AMOUNT,
    Amount,
    validate_amount,
    validate_deposit_amount,
)
from salon_booking.domain.value_objects.time_range import (
    MAX_ADVANCE_MONTHS,
    TimeRange,
    booking_horizon,
    validate_time_range,
)

__all__ = [
    "Amount",
    "MAX_AMOUNT",
    "MAX_ADVANCE_MONTHS",
    "TimeRange",
    "booking_horizon",
    "validate_amount",
    "validate_deposit_amount",
    "validate_time_range",
]
