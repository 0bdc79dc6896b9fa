"""Either values returned by the workflow layer.

``Left`` carries a :class:`DomainError`, ``Right`` carries the successful value.
Callers branch with :func:`is_left` / :func:`is_right` before reading the payload.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, Union

from .exceptions import DomainError

E = TypeVar("E")
A = TypeVar("A")


@dataclass(frozen=True)
class Left(Generic[E]):
    error: E

    @property
    def tag(self) -> str:
        return "Left"


@dataclass(frozen=True)
class Right(Generic[A]):
    value: A

    @property
    def tag(self) -> str:
        return "Right"


Either = Union[Left[E], Right[A]]


def left(error: E) -> Left[E]:
    return Left(error)


def right(value: A) -> Right[A]:
    return Right(value)


def is_left(either: Either) -> bool:
    return isinstance(either, Left)


def is_right(either: Either) -> bool:
    return isinstance(either, Right)


def unwrap(either: Either[DomainError, A]) -> A:
    """Return the Right value or raise the carried domain error unchanged."""
    if isinstance(either, Left):
        raise either.error
    return either.value


@dataclass(frozen=True)
class ServiceResult(Generic[A]):
    """Result-style view of a workflow outcome: ``{success, data | error}``."""

    success: bool
    data: Optional[A] = None
    error: Optional[DomainError] = None

    @classmethod
    def from_either(cls, either: Either[DomainError, A]) -> "ServiceResult[A]":
        if isinstance(either, Left):
            return cls(success=False, error=either.error)
        return cls(success=True, data=either.value)

    def to_dict(self) -> dict[str, Any]:
        if not self.success:
            return {"success": False, "error": self.error.to_dict() if self.error else None}
        data = self.data
        if hasattr(data, "to_dict"):
            data = data.to_dict()
        return {"success": True, "data": data}
