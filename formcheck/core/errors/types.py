"""Error Types for Collaborator Faults

Record stores and the MX resolver return Ok/Err instead of raising, so the
engine decides in one place what a fault means. Validation failures are not
errors in this sense: they are booleans plus messages on the engine.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, NoReturn, TypeVar, Union, final

T = TypeVar("T")
E = TypeVar("E", bound="AppError")


class ErrorCode(Enum):
    """Numbered fault codes.

    E1xxx: DNS and other network lookups
    E2xxx: Submitted values that cannot be coerced
    E4xxx: Record store (database) faults
    E9xxx: Programming errors
    """
    E1002_TIMEOUT = 1002
    E1003_DNS_FAILURE = 1003

    E2002_INVALID_FORMAT = 2002
    E2004_INVALID_TYPE = 2004

    E4001_CONNECTION_FAILED = 4001
    E4002_QUERY_FAILED = 4002
    E4011_DUPLICATE_KEY = 4011
    E4013_CHECK_CONSTRAINT = 4013

    E9000_INTERNAL_GENERIC = 9000


@dataclass(frozen=True, slots=True)
class AppError:
    """A fault with its code, where it happened and the exception behind it."""
    code: ErrorCode
    message: str
    origin: str = ""
    metadata: dict = field(default_factory=dict)
    cause: Exception | None = None

    def __str__(self) -> str:
        where = f" in {self.origin}" if self.origin else ""
        return f"[{self.code.name}] {self.message}{where}"


@final
@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@final
@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_err(self) -> E:
        return self.error


Result = Union[Ok[T], Err[E]]


class AppErrorException(Exception):
    """Carries an AppError out of the engine's boolean rule methods."""

    def __init__(self, error: AppError):
        self.error = error
        super().__init__(str(error))


def raise_error(error: AppError) -> NoReturn:
    raise AppErrorException(error)


def raise_result(result: Result[T, AppError]) -> T:
    """Ok value, or AppErrorException for an Err."""
    if result.is_err():
        raise_error(result.unwrap_err())
    return result.unwrap()
