"""Error Stores

Where field error messages live between the POST that failed validation and
the page that re-renders the form. The engine only needs set/delete; the
concrete stores add reads for the rendering side.
"""
from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any, Protocol, runtime_checkable

from formcheck.core.config import settings
from formcheck.core.logging import store_logger

log = store_logger()


def error_key(field: str, prefix: str | None = None) -> str:
    """Namespaced store key for a field's error message."""
    return f"{settings.ERROR_KEY_PREFIX if prefix is None else prefix}{field}"


@runtime_checkable
class ErrorStore(Protocol):
    """Key-value sink for persisted error messages."""

    def set(self, key: str, message: str) -> None: ...

    def delete(self, key: str) -> None: ...


class SessionErrorStore:
    """ErrorStore over any mutable mapping, e.g. a web framework's session dict."""

    __slots__ = ("session",)

    def __init__(self, session: MutableMapping[str, Any]):
        self.session = session

    def set(self, key: str, message: str) -> None:
        self.session[key] = message
        log.debug("error_persisted", key=key)

    def delete(self, key: str) -> None:
        self.session.pop(key, None)

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.session.get(key, default)

    def error_for(self, field: str) -> str | None:
        """Persisted message for a field, as a form template would read it."""
        return self.get(error_key(field))


class MemoryErrorStore(SessionErrorStore):
    """Process-local store, one per engine unless one is injected."""

    __slots__ = ()

    def __init__(self):
        super().__init__({})

    def __len__(self) -> int:
        return len(self.session)

    def __contains__(self, key: object) -> bool:
        return key in self.session

    def clear(self) -> None:
        self.session.clear()
