"""Two-case result returned by every repository operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from agrohub.services.errors import AppError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def value_or(self, default: T) -> T:
        return self.value


@dataclass(frozen=True)
class Error:
    error: AppError

    @property
    def ok(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return self.error.message

    def unwrap(self):
        raise self.error

    def value_or(self, default: T) -> T:
        return default


Result = Union[Success[T], Error]
