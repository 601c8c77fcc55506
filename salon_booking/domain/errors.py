"""Errores de dominio para el sistema de reservas de salones.

Cada error es un valor inmutable que se retorna dentro de ``Err``. El campo
``code`` es estable y es el que usa la capa HTTP para elegir el status.
"""

from dataclasses import dataclass
from typing import ClassVar, Union


@dataclass(frozen=True)
class DomainError:
    """Clase base para todos los errores de dominio."""

    message: str

    code: ClassVar[str] = "DOMAIN_ERROR"


# === Errores de identificadores ===


@dataclass(frozen=True)
class InvalidIdFormat(DomainError):
    """El identificador no tiene forma de UUID."""

    value: str = ""
    brand: str = ""

    code: ClassVar[str] = "INVALID_ID_FORMAT"


# === Errores de validación de reserva ===


@dataclass(frozen=True)
class InvalidTimeRange(DomainError):
    """Rango de horario inválido o demasiado lejano."""

    code: ClassVar[str] = "INVALID_TIME_RANGE"


@dataclass(frozen=True)
class PastTimeNotAllowed(DomainError):
    """La reserva empieza en el pasado."""

    code: ClassVar[str] = "PAST_TIME_NOT_ALLOWED"


@dataclass(frozen=True)
class InvalidAmount(DomainError):
    """Monto total o depósito fuera de rango."""

    code: ClassVar[str] = "INVALID_AMOUNT"


# === Rechazos de reglas de negocio ===


@dataclass(frozen=True)
class SlotConflict(DomainError):
    """El staff ya tiene una reserva que se superpone."""

    code: ClassVar[str] = "SLOT_CONFLICT"


@dataclass(frozen=True)
class CannotCancel(DomainError):
    """La reserva no puede cancelarse (estado o cercanía al inicio)."""

    code: ClassVar[str] = "CANNOT_CANCEL"


@dataclass(frozen=True)
class CannotModify(DomainError):
    """La reserva está en un estado terminal y no admite cambios."""

    code: ClassVar[str] = "CANNOT_MODIFY"


@dataclass(frozen=True)
class InvalidStatus(DomainError):
    """La transición de estado solicitada no está permitida."""

    current_status: str = ""
    target_status: str = ""

    code: ClassVar[str] = "INVALID_STATUS"


# === Errores de repositorio ===


@dataclass(frozen=True)
class NotFound(DomainError):
    """La entidad no existe."""

    entity: str = ""
    id: str = ""

    code: ClassVar[str] = "NOT_FOUND"


@dataclass(frozen=True)
class DatabaseError(DomainError):
    """Falla reportada por la capa de persistencia."""

    code: ClassVar[str] = "DATABASE_ERROR"


@dataclass(frozen=True)
class ConstraintViolation(DomainError):
    """Una restricción de la base rechazó la escritura (p.ej. carrera de reservas)."""

    constraint: str = ""

    code: ClassVar[str] = "CONSTRAINT_VIOLATION"


def not_found(entity: str, entity_id: str) -> NotFound:
    return NotFound(
        message=f"Entity {entity} not found with id {entity_id}",
        entity=entity,
        id=entity_id,
    )


ValidationError = Union[InvalidTimeRange, PastTimeNotAllowed, InvalidAmount]
# Transiciones y updates revalidan el estado sobre el que escriben, así que
# el repositorio también puede rechazarlos con errores de dominio.
RepositoryError = Union[
    NotFound,
    DatabaseError,
    ConstraintViolation,
    InvalidStatus,
    CannotCancel,
    CannotModify,
]
