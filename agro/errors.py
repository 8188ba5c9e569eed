"""Exception types raised by the data-provisioning subsystem."""

from __future__ import annotations


class AgroError(RuntimeError):
	"""Base class for agro admin failures."""


class MigrationError(AgroError):
	"""Raised when a schema change cannot be applied or reverted.

	Always fatal: the process must not serve traffic on a half-migrated store.
	"""

	def __init__(self, message: str, *, migration: str | None = None) -> None:
		super().__init__(message)
		self.migration = migration


class CatalogFetchError(AgroError):
	"""Raised when the municipality catalog cannot be fetched for a region."""

	def __init__(self, region_code: str, cause: BaseException | str) -> None:
		self.region_code = region_code
		self.cause = cause
		super().__init__(f"Catalog request failed for region {region_code}: {cause}")


class SeedingError(AgroError):
	"""Raised when a seeding stage cannot produce consistent data."""
