"""Typed outcomes for core operations.

Operations return ``Ok(value)`` or ``Err(error)`` instead of raising, so that
callers map failures to transport responses only at the boundary.
"""

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeAlias, TypeVar

from esg_risk_core.domain.errors import CoreError, ErrorKind

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err:
    error: CoreError

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    def unwrap(self) -> NoReturn:
        raise self.error


Result: TypeAlias = Ok[T] | Err
