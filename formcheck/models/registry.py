"""Record store registry - factory pattern for uniqueness checks by model name."""
from typing import Callable

from .records import RecordStore

StoreFactory = Callable[[], RecordStore]

_STORES: dict[str, StoreFactory] = {}


def register_store(name: str, factory: StoreFactory) -> None:
    """Register a record store factory under a model name."""
    _STORES[name] = factory


def get_store(name: str) -> RecordStore:
    """Instantiate the record store registered under `name`."""
    if name not in _STORES:
        available = ", ".join(_STORES.keys()) or "none"
        raise ValueError(f"Record store '{name}' not registered. Available: {available}")
    return _STORES[name]()


def list_stores() -> list[str]:
    """List registered model names."""
    return sorted(_STORES)


def _auto_register() -> None:
    """Auto-register the bundled stores on import."""
    from .user import UserStore
    register_store("User", UserStore)


_auto_register()
