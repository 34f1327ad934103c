"""formcheck - field-level validation for submitted forms.

Usage:
    from formcheck import ValidationEngine, SessionErrorStore

    engine = ValidationEngine(form_data, error_store=SessionErrorStore(request.session))
    engine.valid_string("username", required=True, min_size=3, max_size=30)
    engine.valid_email("email", required=True, confirmation="email_confirmation")
    engine.is_available("User", "username")
    if engine.error_count():
        return render_form_again()
"""
from formcheck.core.errors import AppError, AppErrorException, ErrorCode
from formcheck.core.stores import ErrorStore, MemoryErrorStore, SessionErrorStore, error_key
from formcheck.core.validation import DnsMxResolver, MxResolver, ValueMap
from formcheck.engines import StringRuleOptions, ValidationEngine
from formcheck.models import FindCriteria, RecordStore, SqlRecordStore, equals, register_store

__version__ = "0.1.0"

__all__ = [
    "AppError",
    "AppErrorException",
    "ErrorCode",
    "ErrorStore",
    "MemoryErrorStore",
    "SessionErrorStore",
    "error_key",
    "DnsMxResolver",
    "MxResolver",
    "ValueMap",
    "StringRuleOptions",
    "ValidationEngine",
    "FindCriteria",
    "RecordStore",
    "SqlRecordStore",
    "equals",
    "register_store",
]
