"""Error Handling for Collaborator Faults

Record stores and the MX resolver report faults as Err(AppError) values.
The engine turns an Err into AppErrorException; submitted values that fail a
rule never produce one.

Usage:
    from formcheck.core.errors import Ok, Result, AppError, query_failed

    def count_users(session) -> Result[int, AppError]:
        if not session.is_active:
            return query_failed("session closed", origin="user_store")
        return Ok(session.query(User).count())

    match count_users(session):
        case Ok(total):
            print(f"Users: {total}")
        case Err(error):
            log.error(error.message, code=error.code.name)
"""
from .types import (
    Result,
    Ok,
    Err,
    AppError,
    AppErrorException,
    ErrorCode,
    raise_error,
    raise_result,
)

from .builders import (
    timeout_error,
    dns_failure,
    invalid_format,
    invalid_type,
    db_connection_failed,
    query_failed,
    duplicate_key,
    constraint_violation,
    internal_error,
)

from .boundaries import (
    ErrorMapper,
    DatabaseErrorMapper,
    DnsErrorMapper,
    map_errors,
    map_db_errors,
)

__all__ = [
    "Result",
    "Ok",
    "Err",
    "AppError",
    "AppErrorException",
    "ErrorCode",
    "raise_error",
    "raise_result",
    "timeout_error",
    "dns_failure",
    "invalid_format",
    "invalid_type",
    "db_connection_failed",
    "query_failed",
    "duplicate_key",
    "constraint_violation",
    "internal_error",
    "ErrorMapper",
    "DatabaseErrorMapper",
    "DnsErrorMapper",
    "map_errors",
    "map_db_errors",
]
