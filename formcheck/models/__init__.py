from formcheck.models.records import (
    Condition,
    FindCriteria,
    RecordStore,
    SqlRecordStore,
    equals,
)
from formcheck.models.registry import get_store, list_stores, register_store
from formcheck.models.user import User, UserStore

__all__ = [
    "Condition",
    "FindCriteria",
    "RecordStore",
    "SqlRecordStore",
    "equals",
    "get_store",
    "list_stores",
    "register_store",
    "User",
    "UserStore",
]
