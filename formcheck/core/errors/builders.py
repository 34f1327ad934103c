"""Error Builders

One constructor per fault the record stores, resolver and coercion rules
report. Each returns the AppError already wrapped in Err.
"""
from .types import AppError, ErrorCode, Err


def _err(
    code: ErrorCode,
    message: str,
    *,
    origin: str = "",
    cause: Exception | None = None,
    **metadata,
) -> Err[AppError]:
    return Err(AppError(
        code=code,
        message=message,
        origin=origin,
        metadata={k: v for k, v in metadata.items() if v is not None},
        cause=cause,
    ))


def _with_reason(message: str, reason: str) -> str:
    return f"{message}: {reason}" if reason else message


# Network


def timeout_error(
    operation: str,
    timeout_seconds: float | None = None,
    origin: str = "",
    cause: Exception | None = None,
) -> Err[AppError]:
    limit = f" within {timeout_seconds}s" if timeout_seconds is not None else ""
    return _err(
        ErrorCode.E1002_TIMEOUT,
        f"'{operation}' gave no answer{limit}",
        origin=origin,
        cause=cause,
        timeout_seconds=timeout_seconds,
    )


def dns_failure(
    domain: str, reason: str = "", origin: str = "", cause: Exception | None = None
) -> Err[AppError]:
    return _err(
        ErrorCode.E1003_DNS_FAILURE,
        _with_reason(f"MX lookup failed for '{domain}'", reason),
        origin=origin,
        cause=cause,
        domain=domain,
    )


# Coercion


def invalid_format(field: str, expected: str, origin: str = "") -> Err[AppError]:
    return _err(
        ErrorCode.E2002_INVALID_FORMAT,
        f"'{field}' is not a {expected}",
        origin=origin,
        field=field,
    )


def invalid_type(field: str, expected: str, got: type, origin: str = "") -> Err[AppError]:
    return _err(
        ErrorCode.E2004_INVALID_TYPE,
        f"'{field}' holds a {got.__name__}, cannot read it as {expected}",
        origin=origin,
        field=field,
    )


# Record stores


def db_connection_failed(reason: str = "", origin: str = "") -> Err[AppError]:
    return _err(
        ErrorCode.E4001_CONNECTION_FAILED,
        _with_reason("Database connection failed", reason),
        origin=origin,
    )


def query_failed(reason: str = "", table: str | None = None, origin: str = "") -> Err[AppError]:
    return _err(
        ErrorCode.E4002_QUERY_FAILED,
        _with_reason("Database query failed", reason),
        origin=origin,
        table=table,
    )


def duplicate_key(reason: str, origin: str = "", cause: Exception | None = None) -> Err[AppError]:
    return _err(ErrorCode.E4011_DUPLICATE_KEY, f"Duplicate value: {reason}", origin=origin, cause=cause)


def constraint_violation(reason: str, origin: str = "", cause: Exception | None = None) -> Err[AppError]:
    return _err(ErrorCode.E4013_CHECK_CONSTRAINT, f"Constraint violation: {reason}", origin=origin, cause=cause)


def internal_error(message: str, *, origin: str = "", **metadata) -> Err[AppError]:
    return _err(ErrorCode.E9000_INTERNAL_GENERIC, message, origin=origin, **metadata)
