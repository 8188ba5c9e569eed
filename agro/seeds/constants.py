"""Static seeding configuration: region weights, crop combinations, volume presets."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from agro.config import SeedLocale, SeedScale
from agro.models.enums import BrazilianState, CropType


@dataclass(frozen=True, slots=True)
class SeedProfile:
    """How many rows of each kind a seeding run generates."""

    producers: int
    farms: int
    harvest_years: int


SEED_PROFILES: MappingProxyType[SeedScale, SeedProfile] = MappingProxyType(
    {
        SeedScale.small: SeedProfile(producers=30, farms=60, harvest_years=2),
        SeedScale.medium: SeedProfile(producers=500, farms=200, harvest_years=3),
        SeedScale.large: SeedProfile(producers=2000, farms=800, harvest_years=5),
    }
)

# Share of farms per state, by agricultural output.  Sums to roughly 1.0; the
# sampler falls back to DEFAULT_REGION when a draw lands past the last bucket.
REGION_WEIGHTS: MappingProxyType[BrazilianState, float] = MappingProxyType(
    {
        BrazilianState.MT: 0.15,
        BrazilianState.PR: 0.12,
        BrazilianState.RS: 0.12,
        BrazilianState.GO: 0.1,
        BrazilianState.MS: 0.08,
        BrazilianState.SP: 0.08,
        BrazilianState.MG: 0.07,
        BrazilianState.BA: 0.06,
        BrazilianState.SC: 0.05,
        BrazilianState.MA: 0.04,
        BrazilianState.TO: 0.03,
        BrazilianState.PI: 0.03,
        BrazilianState.PA: 0.02,
        BrazilianState.RO: 0.02,
        BrazilianState.CE: 0.01,
        BrazilianState.PE: 0.01,
        BrazilianState.SE: 0.005,
        BrazilianState.AL: 0.005,
        BrazilianState.RN: 0.005,
        BrazilianState.PB: 0.005,
        BrazilianState.ES: 0.005,
        BrazilianState.RJ: 0.005,
        BrazilianState.DF: 0.003,
        BrazilianState.AM: 0.002,
        BrazilianState.AC: 0.001,
        BrazilianState.RR: 0.001,
        BrazilianState.AP: 0.001,
    }
)

DEFAULT_REGION = BrazilianState.MT

# Monocultures, the soy/corn rotation, and multi-crop systems.
CROP_COMBINATIONS: tuple[tuple[CropType, ...], ...] = (
    (CropType.soy, CropType.corn),
    (CropType.soy,),
    (CropType.corn,),
    (CropType.cotton, CropType.soy),
    (CropType.coffee,),
    (CropType.sugarcane,),
    (CropType.soy, CropType.corn, CropType.cotton),
)

FARM_NAME_PREFIXES: MappingProxyType[SeedLocale, tuple[str, ...]] = MappingProxyType(
    {
        SeedLocale.portuguese: ("Fazenda", "Sítio", "Chácara", "Rancho", "Estância"),
        SeedLocale.english: ("Farm", "Ranch", "Estate", "Homestead", "Plantation"),
    }
)

COMPANY_PROBABILITY = 0.3
MUNICIPALITY_POOL_LIMIT = 100
