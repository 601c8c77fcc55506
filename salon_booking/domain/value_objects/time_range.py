"""Value Object TimeRange - franja horaria de una reserva."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from dateutil.relativedelta import relativedelta

from salon_booking.domain.errors import InvalidTimeRange, PastTimeNotAllowed
from salon_booking.domain.result import Err, Ok, Result

MAX_ADVANCE_MONTHS = 3


@dataclass(frozen=True)
class TimeRange:
    """
    Value Object inmutable que representa una franja [start, end).

    A diferencia de un rango de renta, se permite start == end para
    servicios instantáneos.

    Attributes:
        start: Inicio del servicio.
        end: Fin del servicio.
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(
                f"start debe ser anterior o igual a end: {self.start} > {self.end}"
            )

    @property
    def duration(self) -> timedelta:
        """Retorna la duración de la franja."""
        return self.end - self.start

    @property
    def duration_minutes(self) -> int:
        return int(self.duration.total_seconds() // 60)

    def overlaps_with(self, other: "TimeRange") -> bool:
        """Verifica si dos franjas semiabiertas se superponen."""
        return self.start < other.end and other.start < self.end

    def contains(self, dt: datetime) -> bool:
        return self.start <= dt < self.end

    def __str__(self) -> str:
        return f"{self.start.isoformat()} -> {self.end.isoformat()}"


def booking_horizon(now: datetime) -> datetime:
    """Último inicio aceptado: ``now`` + 3 meses calendario."""
    return now + relativedelta(months=MAX_ADVANCE_MONTHS)


def validate_time_range(
    start: datetime,
    end: datetime,
    *,
    now: datetime,
) -> Result[TimeRange, InvalidTimeRange | PastTimeNotAllowed]:
    """
    Valida la franja solicitada contra el instante ``now``.

    Reglas:
        - start > end -> InvalidTimeRange.
        - start < now -> PastTimeNotAllowed.
        - start > now + 3 meses -> InvalidTimeRange (exactamente 3 meses es válido).
    """
    if start > end:
        return Err(InvalidTimeRange(message="Start time must be before end time"))

    if start < now:
        return Err(PastTimeNotAllowed(message="Cannot create reservation for past time"))

    if start > booking_horizon(now):
        return Err(
            InvalidTimeRange(
                message=f"Cannot create reservation more than {MAX_ADVANCE_MONTHS} months in advance"
            )
        )

    return Ok(TimeRange(start=start, end=end))
