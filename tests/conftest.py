"""Shared fakes for the engine's collaborators.

The engine talks to three things it does not own: the error store, the MX
resolver and the record stores. The fakes here record every call so tests
can assert on write/delete traffic as well as on return values.
"""
from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Sequence

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from formcheck.core.database import Base
from formcheck.core.errors import AppError, Ok, Result, query_failed
from formcheck.engines import ValidationEngine
from formcheck.models.records import FindCriteria, RecordStore


class RecordingErrorStore:
    def __init__(self):
        self.data: dict[str, str] = {}
        self.calls: list[tuple] = []

    def set(self, key: str, message: str) -> None:
        self.calls.append(("set", key, message))
        self.data[key] = message

    def delete(self, key: str) -> None:
        self.calls.append(("delete", key))
        self.data.pop(key, None)

    def sets(self) -> list[tuple]:
        return [c for c in self.calls if c[0] == "set"]

    def deletes(self) -> list[str]:
        return [c[1] for c in self.calls if c[0] == "delete"]


class StaticMxResolver:
    def __init__(self, *domains: str):
        self.domains = set(domains)
        self.queries: list[str] = []

    def has_mx(self, domain: str) -> bool:
        self.queries.append(domain)
        return domain in self.domains


class FakeRecordStore(RecordStore):
    """Records keyed by id; `taken` maps attribute -> values used by any record."""

    def __init__(self, records: dict[Any, dict[str, Any]] | None = None, fail: bool = False):
        self.records = records or {}
        self.fail = fail
        self.find_calls: list[FindCriteria] = []
        self.availability_calls: list[tuple[str, Any]] = []

    def find(self, criteria: FindCriteria) -> Result[Sequence[Any], AppError]:
        self.find_calls.append(criteria)
        if self.fail:
            return query_failed("connection reset", origin="fake")
        rows = []
        for record_id, record in self.records.items():
            if all((record_id if c.field == "id" else record.get(c.field)) == c.value for c in criteria.conditions):
                rows.append(SimpleNamespace(**{f: record.get(f) for f in criteria.fields}))
        return Ok(rows)

    def is_available(self, attribute: str, value: Any) -> Result[bool, AppError]:
        self.availability_calls.append((attribute, value))
        if self.fail:
            return query_failed("connection reset", origin="fake")
        return Ok(all(record.get(attribute) != value for record in self.records.values()))


@pytest.fixture
def error_store() -> RecordingErrorStore:
    return RecordingErrorStore()


@pytest.fixture
def mx_resolver() -> StaticMxResolver:
    return StaticMxResolver("formcheck.io", "mail.example.org")


@pytest.fixture
def user_store() -> FakeRecordStore:
    return FakeRecordStore({
        1: {"username": "alice", "email": "alice@formcheck.io"},
        2: {"username": "bob", "email": "bob@formcheck.io"},
    })


@pytest.fixture
def make_engine(error_store, mx_resolver, user_store):
    def _make(values: dict, **kwargs) -> ValidationEngine:
        kwargs.setdefault("error_store", error_store)
        kwargs.setdefault("mx_resolver", mx_resolver)
        kwargs.setdefault("stores", lambda name: user_store)
        return ValidationEngine(values, **kwargs)
    return _make


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(engine, expire_on_commit=False)
    engine.dispose()
