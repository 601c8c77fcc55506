from decimal import Decimal

from salon_booking.domain.errors import InvalidAmount
from salon_booking.domain.result import Err, Ok
from salon_booking.domain.value_objects.money import (
    MAX_AMOUNT,
    validate_amount,
    validate_deposit_amount,
)


def test_zero_and_upper_bound_are_valid():
    assert validate_amount(0) == Ok(0)
    assert validate_amount(MAX_AMOUNT) == Ok(10_000_000)


def test_fractional_amount_is_kept_as_is():
    assert validate_amount(Decimal("150.75")) == Ok(Decimal("150.75"))


def test_negative_amount():
    result = validate_amount(-1)

    assert isinstance(result, Err)
    assert isinstance(result.error, InvalidAmount)
    assert result.error.message == "Amount cannot be negative"


def test_amount_over_limit():
    result = validate_amount(Decimal("10000000.01"))

    assert isinstance(result, Err)
    assert result.error.message == "Amount is too high"


def test_missing_deposit_passes_through():
    assert validate_deposit_amount(None, 100) == Ok(None)


def test_deposit_equal_to_total_is_valid():
    assert validate_deposit_amount(100, 100) == Ok(100)


def test_zero_deposit_on_zero_total_is_valid():
    assert validate_deposit_amount(0, 0) == Ok(0)


def test_deposit_greater_than_total():
    result = validate_deposit_amount(Decimal("100.01"), 100)

    assert isinstance(result, Err)
    assert result.error.code == "INVALID_AMOUNT"
    assert result.error.message == "Deposit amount cannot exceed total amount"


def test_negative_deposit():
    result = validate_deposit_amount(-5, 100)

    assert result.error.message == "Deposit amount cannot be negative"


def test_validation_is_repeatable():
    assert validate_amount(Decimal("42")) == validate_amount(Decimal("42"))
