from agro.seeds.constants import SEED_PROFILES, SeedProfile
from agro.seeds.orchestrator import SeedConfig, SeedOrchestrator, SeedReport, build_faker, seed_database
from agro.seeds.sampler import DistributionSampler, FarmAreas

__all__ = [
	"SEED_PROFILES",
	"DistributionSampler",
	"FarmAreas",
	"SeedConfig",
	"SeedOrchestrator",
	"SeedProfile",
	"SeedReport",
	"build_faker",
	"seed_database",
]
