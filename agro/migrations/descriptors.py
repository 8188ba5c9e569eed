"""Declarative schema-change descriptors.

A descriptor is plain data: the tables and indexes one schema version adds,
each carrying a literal forward (create) and reverse (drop) statement.  The
ordered list of descriptors is the full schema history; ``MigrationRunner``
consumes it uniformly.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from agro.errors import MigrationError

_NAME_PATTERN = re.compile(r"^(?P<stamp>\d{13})_[a-z0-9_]+$")


@dataclass(frozen=True, slots=True)
class SchemaObject:
    """A table or index with its create/drop statements (opaque SQL)."""

    name: str
    create: str
    drop: str


@dataclass(frozen=True, slots=True)
class SchemaChange:
    """One schema version: ``<13-digit epoch ms>_<slug>`` plus its objects."""

    name: str
    tables: tuple[SchemaObject, ...] = field(default_factory=tuple)
    indexes: tuple[SchemaObject, ...] = field(default_factory=tuple)

    @property
    def stamp(self) -> int:
        match = _NAME_PATTERN.match(self.name)
        if match is None:
            raise MigrationError(
                f"Migration name {self.name!r} must look like '<13-digit timestamp>_<slug>'",
                migration=self.name,
            )
        return int(match.group("stamp"))

    def forward_statements(self) -> list[tuple[str, str]]:
        """(object name, statement) pairs: tables first, then indexes."""
        return [(obj.name, obj.create) for obj in (*self.tables, *self.indexes)]

    def reverse_statements(self) -> list[tuple[str, str]]:
        """(object name, statement) pairs: indexes then tables, each reversed."""
        return [
            (obj.name, obj.drop)
            for obj in (*reversed(self.indexes), *reversed(self.tables))
        ]


def validate_history(history: Sequence[SchemaChange]) -> tuple[SchemaChange, ...]:
    """Check names are well-formed, unique, and strictly increasing."""
    previous_stamp: int | None = None
    previous_name = ""
    seen: set[str] = set()
    for change in history:
        if change.name in seen:
            raise MigrationError(f"Duplicate migration name {change.name!r}", migration=change.name)
        seen.add(change.name)
        stamp = change.stamp
        if previous_stamp is not None and stamp <= previous_stamp:
            raise MigrationError(
                f"Migration {change.name!r} is not ordered after {previous_name!r}",
                migration=change.name,
            )
        if not change.tables and not change.indexes:
            raise MigrationError(f"Migration {change.name!r} defines no objects", migration=change.name)
        previous_stamp, previous_name = stamp, change.name
    return tuple(history)
