"""Tipo Result - retorno explícito ok/err para operaciones de dominio y repositorio.

Los errores de negocio nunca se lanzan como excepciones: viajan dentro de
``Err`` y se propagan con retorno temprano. Las excepciones quedan reservadas
para fallas de infraestructura inesperadas.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Resultado exitoso."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False


@dataclass(frozen=True)
class Err(Generic[E]):
    """Resultado fallido con un error tipado."""

    error: E

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True


Result = Union[Ok[T], Err[E]]
