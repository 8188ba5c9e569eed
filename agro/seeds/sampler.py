"""Weighted region selection and constrained farm-area generation."""

from __future__ import annotations

import random
from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import TypeVar

from agro.errors import SeedingError
from agro.models.enums import CropType
from agro.seeds.constants import CROP_COMBINATIONS, DEFAULT_REGION, REGION_WEIGHTS

RegionT = TypeVar("RegionT", bound=str)

AREA_QUANTUM = Decimal("0.01")

# Hectares are drawn in cents; fractions in hundredths.
TOTAL_AREA_CENTS = (1_000, 500_000)
ARABLE_FRACTION_PCT = (30, 85)
VEGETATION_FRACTION_PCT = (15, 95)


@dataclass(frozen=True, slots=True)
class FarmAreas:
	total_area: Decimal
	arable_area: Decimal
	vegetation_area: Decimal


def walk_weights(weights: Mapping[RegionT, float], r: float, default: RegionT) -> RegionT:
	"""Return the first key whose cumulative weight reaches ``r``, else ``default``."""
	cumulative = 0.0
	for region, weight in weights.items():
		cumulative += weight
		if cumulative >= r:
			return region
	return default


class DistributionSampler:
	"""Random draws for the seeding pipeline.

	All randomness comes from ``rng``; pass a seeded ``random.Random`` (or the
	one behind a seeded Faker instance) for reproducible runs.
	"""

	def __init__(
		self,
		rng: random.Random | None = None,
		*,
		weights: Mapping[str, float] = REGION_WEIGHTS,
		default_region: str = DEFAULT_REGION,
		crop_combinations: Sequence[tuple[CropType, ...]] = CROP_COMBINATIONS,
	) -> None:
		if not weights:
			raise ValueError("Region weights must not be empty")
		if default_region not in weights:
			raise ValueError(f"Default region {default_region!r} is not a weighted region")
		if not crop_combinations or any(not combination for combination in crop_combinations):
			raise ValueError("Crop combinations must be non-empty")
		self.rng = rng or random.Random()
		self.weights = dict(weights)
		self.default_region = default_region
		self.crop_combinations = tuple(crop_combinations)

	def pick_region(self, r: float) -> str:
		return walk_weights(self.weights, r, self.default_region)

	def sample_region(self, exclude: Collection[str] = ()) -> str:
		"""Draw a region by weight, skipping any in ``exclude``.

		With exclusions the remaining weights are rescaled to their own total; if
		the default is excluded the last remaining region takes over as fallback.
		"""
		if not exclude:
			return self.pick_region(self.rng.random())

		remaining = {region: weight for region, weight in self.weights.items() if region not in exclude}
		if not remaining:
			raise SeedingError("Every region is excluded; nothing left to sample")
		fallback = self.default_region if self.default_region in remaining else list(remaining)[-1]
		return walk_weights(remaining, self.rng.random() * sum(remaining.values()), fallback)

	def generate_areas(self) -> FarmAreas:
		"""Areas with ``arable + vegetation <= total`` by construction.

		total ∈ [10, 5000] ha; arable is 30–85% of total; vegetation is 15–95%
		of what arable leaves over.
		"""
		total = (Decimal(self.rng.randint(*TOTAL_AREA_CENTS)) / 100).quantize(AREA_QUANTUM)
		arable_fraction = Decimal(self.rng.randint(*ARABLE_FRACTION_PCT)) / 100
		arable = (total * arable_fraction).quantize(AREA_QUANTUM, rounding=ROUND_HALF_UP)
		remaining = total - arable
		vegetation_fraction = Decimal(self.rng.randint(*VEGETATION_FRACTION_PCT)) / 100
		vegetation = (remaining * vegetation_fraction).quantize(AREA_QUANTUM, rounding=ROUND_HALF_UP)
		return FarmAreas(total_area=total, arable_area=arable, vegetation_area=vegetation)

	def pick_crop_combination(self) -> tuple[CropType, ...]:
		return self.rng.choice(self.crop_combinations)
