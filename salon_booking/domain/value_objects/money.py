"""Validación de montos - total del servicio y depósito."""

from decimal import Decimal
from typing import Union

from salon_booking.domain.errors import InvalidAmount
from salon_booking.domain.result import Err, Ok, Result

Amount = Union[int, float, Decimal]

MAX_AMOUNT = 10_000_000


def validate_amount(amount: Amount) -> Result[Amount, InvalidAmount]:
    """
    Valida el monto total de una reserva.

    Los decimales se aceptan tal cual, sin redondeo. El límite superior
    es inclusivo.
    """
    if amount < 0:
        return Err(InvalidAmount(message="Amount cannot be negative"))
    if amount > MAX_AMOUNT:
        return Err(InvalidAmount(message="Amount is too high"))
    return Ok(amount)


def validate_deposit_amount(
    deposit: Amount | None,
    total: Amount,
) -> Result[Amount | None, InvalidAmount]:
    """Valida el depósito: opcional, no negativo y nunca mayor que el total."""
    if deposit is None:
        return Ok(None)
    if deposit < 0:
        return Err(InvalidAmount(message="Deposit amount cannot be negative"))
    if deposit > total:
        return Err(InvalidAmount(message="Deposit amount cannot exceed total amount"))
    return Ok(deposit)
