"""Declarative schema migrations: descriptors, history, and the runner."""

from agro.migrations.descriptors import SchemaChange, SchemaObject
from agro.migrations.runner import LEDGER_TABLE, MigrationRunner
from agro.migrations.versions import MIGRATIONS

__all__ = ["LEDGER_TABLE", "MIGRATIONS", "MigrationRunner", "SchemaChange", "SchemaObject"]
