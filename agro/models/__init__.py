"""ORM model registry: importing this module registers every table on Base.metadata.

Application code can do::

    from agro.models import Farm, Producer, City, ...
"""

# ── Base & Mixins ───────────────────────────────────────────────────────────
from agro.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

# ── Reference data ──────────────────────────────────────────────────────────
from agro.models.city import City

# ── Enums ───────────────────────────────────────────────────────────────────
from agro.models.enums import BrazilianState, CropType, ProducerKind

# ── Farms & harvests ────────────────────────────────────────────────────────
from agro.models.farm import Farm, FarmHarvest, FarmHarvestCrop, Harvest

# ── Producers ───────────────────────────────────────────────────────────────
from agro.models.producer import Producer

__all__ = [
    # Base & mixins
    "Base",
    # Enums
    "BrazilianState",
    # Reference data
    "City",
    "CropType",
    # Farms & harvests
    "Farm",
    "FarmHarvest",
    "FarmHarvestCrop",
    "Harvest",
    # Producers
    "Producer",
    "ProducerKind",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
]
