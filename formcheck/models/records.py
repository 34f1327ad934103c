"""Record Store Accessors

The engine's view of persisted entities: fetch selected attributes of the
records matching structured conditions, and ask whether a value is still free
for an attribute. Conditions are data, never SQL text, so submitted ids are
always bound as parameters.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import sessionmaker

from formcheck.core.database import SessionLocal
from formcheck.core.errors import (
    AppError,
    Ok,
    Result,
    internal_error,
    map_db_errors,
)
from formcheck.core.logging import db_logger

log = db_logger()


@dataclass(frozen=True, slots=True)
class Condition:
    """Equality between a record attribute and a bound value."""
    field: str
    value: Any


def equals(field: str, value: Any) -> Condition:
    return Condition(field=field, value=value)


@dataclass(frozen=True, slots=True)
class FindCriteria:
    """Attributes to fetch and conditions every returned record satisfies."""
    fields: tuple[str, ...] = ()
    conditions: tuple[Condition, ...] = field(default_factory=tuple)


class RecordStore(ABC):
    """Accessor for one entity type."""

    @abstractmethod
    def find(self, criteria: FindCriteria) -> Result[Sequence[Any], AppError]:
        """Records (or rows of the requested fields) matching all conditions."""

    @abstractmethod
    def is_available(self, attribute: str, value: Any) -> Result[bool, AppError]:
        """True when no record has `value` for `attribute`."""


class SqlRecordStore(RecordStore):
    """RecordStore over a declarative SQLAlchemy model.

    Subclasses set `model`; instances take the session factory so tests can
    point them at an in-memory database.
    """

    model: ClassVar[type]

    def __init__(self, session_factory: sessionmaker = SessionLocal):
        self.session_factory = session_factory

    @property
    def entity(self) -> str:
        return self.model.__name__

    def _columns(self, names: Sequence[str]) -> Result[list, AppError]:
        table_columns = self.model.__table__.columns
        unknown = [name for name in names if name not in table_columns]
        if unknown:
            return internal_error(
                f"{self.entity} has no attribute(s): {', '.join(unknown)}",
                origin=f"records.{self.entity}",
                attributes=unknown,
            )
        return Ok([getattr(self.model, name) for name in names])

    @map_db_errors("records")
    def find(self, criteria: FindCriteria) -> Result[Sequence[Any], AppError]:
        names = list(criteria.fields) or [c.name for c in self.model.__table__.columns]
        match_names = [c.field for c in criteria.conditions]
        columns = self._columns(names)
        if columns.is_err():
            return columns
        filters = self._columns(match_names)
        if filters.is_err():
            return filters

        query = select(*columns.unwrap())
        for column, condition in zip(filters.unwrap(), criteria.conditions):
            query = query.where(column == condition.value)

        with self.session_factory() as session:
            rows = session.execute(query).all()
        log.debug("records_found", entity=self.entity, fields=names, count=len(rows))
        return Ok(rows)

    @map_db_errors("records")
    def is_available(self, attribute: str, value: Any) -> Result[bool, AppError]:
        columns = self._columns([attribute])
        if columns.is_err():
            return columns
        (column,) = columns.unwrap()

        query = select(func.count()).select_from(self.model).where(column == value)
        with self.session_factory() as session:
            taken = session.execute(query).scalar_one()
        log.debug("availability_checked", entity=self.entity, attribute=attribute, taken=taken)
        return Ok(taken == 0)
