"""Error Boundary Mappers

Each collaborator boundary (record store, DNS) has a single error type:
library exceptions are mapped to AppError where they cross into formcheck.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import wraps
from typing import Callable, TypeVar

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from .types import AppError, Err, Result
from .builders import (
    constraint_violation,
    db_connection_failed,
    dns_failure,
    duplicate_key,
    query_failed,
    timeout_error,
)

T = TypeVar("T")


class ErrorMapper(ABC):
    """Translates one library's exceptions into AppError."""

    # Exception types map_exception knows how to translate
    catches: tuple[type[BaseException], ...] = ()

    @abstractmethod
    def map_exception(self, exc: Exception) -> AppError:
        """Map a library exception to AppError."""


class DatabaseErrorMapper(ErrorMapper):
    """Maps SQLAlchemy exceptions to database AppErrors."""

    catches = (SQLAlchemyError,)

    def __init__(self, origin: str = "database"):
        self.origin = origin

    def map_exception(self, exc: Exception) -> AppError:
        message = str(getattr(exc, "orig", None) or exc)
        lowered = message.lower()

        if isinstance(exc, IntegrityError):
            if "duplicate key" in lowered or "unique constraint" in lowered:
                return duplicate_key(message, origin=self.origin, cause=exc).error
            return constraint_violation(message, origin=self.origin, cause=exc).error

        if isinstance(exc, OperationalError):
            if "timeout" in lowered:
                return timeout_error("database query", origin=self.origin, cause=exc).error
            if "connect" in lowered:
                return db_connection_failed(message, origin=self.origin).error

        return query_failed(message, origin=self.origin).error


class DnsErrorMapper(ErrorMapper):
    """Maps dnspython faults to network AppErrors.

    Only infrastructure faults come through here; NXDOMAIN and empty answers
    are handled by the resolver as "no MX record".
    """

    def __init__(self, domain: str, origin: str = "dns"):
        self.domain = domain
        self.origin = origin
        from dns.exception import DNSException
        self.catches = (DNSException,)

    def map_exception(self, exc: Exception) -> AppError:
        from dns.exception import Timeout
        from dns.resolver import NoNameservers

        if isinstance(exc, Timeout):
            reason = "timed out"
        elif isinstance(exc, NoNameservers):
            reason = "no nameserver answered"
        else:
            reason = str(exc)
        return dns_failure(self.domain, reason, origin=self.origin, cause=exc).error


def map_errors(mapper: ErrorMapper):
    """Decorator turning the mapper's exceptions into Err results.

    Usage:
        @map_errors(DatabaseErrorMapper("records"))
        def find(self, criteria: FindCriteria) -> Result[Sequence[Any], AppError]:
            ...
    """
    def decorator(fn: Callable[..., Result[T, AppError]]):
        @wraps(fn)
        def wrapper(*args, **kwargs) -> Result[T, AppError]:
            try:
                return fn(*args, **kwargs)
            except mapper.catches as e:
                return Err(mapper.map_exception(e))
        return wrapper
    return decorator


def map_db_errors(origin: str = "database"):
    """Convenience decorator for database error mapping."""
    return map_errors(DatabaseErrorMapper(origin))
