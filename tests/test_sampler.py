from __future__ import annotations

import random
from decimal import Decimal

import pytest

from agro.errors import SeedingError
from agro.models.enums import BrazilianState
from agro.seeds.constants import CROP_COMBINATIONS, DEFAULT_REGION, REGION_WEIGHTS
from agro.seeds.sampler import DistributionSampler, walk_weights


def _two_region_sampler(weights: dict[str, float] | None = None, seed: int = 7) -> DistributionSampler:
    return DistributionSampler(
        random.Random(seed),
        weights=weights or {"A": 0.6, "B": 0.4},
        default_region="A",
    )


def test_region_weights_cover_every_state() -> None:
    assert set(REGION_WEIGHTS) == set(BrazilianState)
    assert sum(REGION_WEIGHTS.values()) == pytest.approx(1.0, abs=0.05)
    assert DEFAULT_REGION in REGION_WEIGHTS


def test_pick_region_at_zero_returns_first_region() -> None:
    assert DistributionSampler().pick_region(0.0) == next(iter(REGION_WEIGHTS))


def test_pick_region_just_below_one_returns_a_weighted_region() -> None:
    assert DistributionSampler().pick_region(0.9999999) in REGION_WEIGHTS


def test_pick_region_two_region_boundaries() -> None:
    sampler = _two_region_sampler()

    assert sampler.pick_region(0.0) == "A"
    assert sampler.pick_region(0.5) == "A"
    assert sampler.pick_region(0.6) == "A"
    assert sampler.pick_region(0.65) == "B"
    assert sampler.pick_region(0.7) == "B"
    assert sampler.pick_region(0.95) == "B"


def test_pick_region_falls_back_to_default_past_the_last_bucket() -> None:
    # Weights that sum short of 1.0 leave a gap at the top of the range.
    sampler = _two_region_sampler({"A": 0.6, "B": 0.39})

    assert sampler.pick_region(0.995) == "A"
    assert walk_weights({"A": 0.6, "B": 0.39}, 0.995, "B") == "B"


def test_sample_region_distribution_follows_weights() -> None:
    sampler = _two_region_sampler(seed=42)
    draws = [sampler.sample_region() for _ in range(5000)]

    share_a = draws.count("A") / len(draws)
    assert share_a == pytest.approx(0.6, abs=0.03)
    assert set(draws) == {"A", "B"}


def test_sample_region_skips_excluded_regions() -> None:
    sampler = _two_region_sampler()

    assert {sampler.sample_region(exclude={"A"}) for _ in range(200)} == {"B"}


def test_sample_region_raises_when_everything_is_excluded() -> None:
    sampler = _two_region_sampler()

    with pytest.raises(SeedingError):
        sampler.sample_region(exclude={"A", "B"})


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"weights": {}}, "must not be empty"),
        ({"weights": {"A": 1.0}, "default_region": "Z"}, "not a weighted region"),
        ({"crop_combinations": [()]}, "non-empty"),
    ],
)
def test_constructor_rejects_bad_configuration(kwargs: dict, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        DistributionSampler(**kwargs)


def test_generate_areas_respects_bounds_and_invariant() -> None:
    sampler = DistributionSampler(random.Random(2024))

    for _ in range(2000):
        areas = sampler.generate_areas()
        assert Decimal("10.00") <= areas.total_area <= Decimal("5000.00")
        assert areas.arable_area >= 0
        assert areas.vegetation_area >= 0
        assert areas.arable_area + areas.vegetation_area <= areas.total_area
        for value in (areas.total_area, areas.arable_area, areas.vegetation_area):
            assert value.as_tuple().exponent == -2


def test_generate_areas_is_reproducible_with_the_same_seed() -> None:
    first = DistributionSampler(random.Random(99))
    second = DistributionSampler(random.Random(99))

    assert [first.generate_areas() for _ in range(10)] == [second.generate_areas() for _ in range(10)]


def test_pick_crop_combination_returns_a_catalog_entry() -> None:
    sampler = DistributionSampler(random.Random(1))

    picks = {sampler.pick_crop_combination() for _ in range(500)}
    assert picks <= set(CROP_COMBINATIONS)
    assert all(picks)
    assert len(picks) == len(CROP_COMBINATIONS)
