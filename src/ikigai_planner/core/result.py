# src/ikigai_planner/core/result.py

"""
Explicit operation results.

Store operations never re-raise remote failures. They return Ok(value) or
Err(message, error); callers decide whether to also look at the store's
shared error slot.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(slots=True, frozen=True)
class Err:
    message: str
    error: BaseException

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self):
        raise self.error


Result = Ok[T] | Err
