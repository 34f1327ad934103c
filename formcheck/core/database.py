"""Database Module

Synchronous SQLAlchemy session management for the record stores. The
validation engine runs inside one request on one thread, so the stores use
plain Session objects rather than the asyncio extension.
"""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from formcheck.core.config import settings

Base = declarative_base()


def make_engine(url: str | None = None, **kwargs) -> Engine:
    """Create an engine with pool settings suited to the backend."""
    url = url or settings.DATABASE_URL
    engine_kwargs = {"echo": settings.LOG_SQL, **kwargs}
    if "sqlite" not in url:
        engine_kwargs.setdefault("pool_pre_ping", True)
        engine_kwargs.setdefault("pool_size", 5)
        engine_kwargs.setdefault("max_overflow", 10)
    return create_engine(url, **engine_kwargs)


engine = make_engine()

SessionLocal = sessionmaker(
    engine,
    class_=Session,
    expire_on_commit=False,
    autoflush=False,
)
