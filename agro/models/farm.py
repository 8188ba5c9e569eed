"""Farm, Harvest, FarmHarvest, FarmHarvestCrop ORM models.

A farm takes part in many harvests through ``farm_harvests``; each
farm-harvest pair lists the crops planted that season in
``farm_harvest_crops``.  Child rows are removed by ``ON DELETE CASCADE`` in
the schema, so relationships use ``passive_deletes``.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from sqlalchemy import Enum, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from agro.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from agro.models.enums import BrazilianState, CropType

# ═══════════════════════════════════════════════════════════════════════════
# Farm
# ═══════════════════════════════════════════════════════════════════════════


class Farm(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """An agricultural property owned by a producer.

    Areas are hectares with two decimals.  ``arable_area + vegetation_area``
    never exceeds ``total_area``; the remainder is unused land.
    """

    __tablename__ = "farms"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(255), nullable=False)
    state: Mapped[BrazilianState] = mapped_column(
        Enum(
            BrazilianState,
            native_enum=False,
            create_constraint=False,
            length=2,
            values_callable=lambda members: [m.value for m in members],
        ),
        nullable=False,
    )
    total_area: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    arable_area: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    vegetation_area: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    producer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("producers.id", ondelete="CASCADE"),
        nullable=False,
    )

    # ── Relationships ────────────────────────────────────────────────────
    farm_harvests: Mapped[list[FarmHarvest]] = relationship(
        back_populates="farm",
        cascade="all",
        passive_deletes=True,
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Farm id={self.id} name={self.name!r} state={self.state}>"


# ═══════════════════════════════════════════════════════════════════════════
# Harvest
# ═══════════════════════════════════════════════════════════════════════════


class Harvest(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """One agricultural season, keyed by its starting calendar year."""

    __tablename__ = "harvests"

    year: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Harvest id={self.id} year={self.year!r}>"


# ═══════════════════════════════════════════════════════════════════════════
# FarmHarvest / FarmHarvestCrop
# ═══════════════════════════════════════════════════════════════════════════


class FarmHarvest(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Join row: a farm participating in a harvest."""

    __tablename__ = "farm_harvests"

    farm_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("farms.id", ondelete="CASCADE"),
        nullable=False,
    )
    harvest_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("harvests.id", ondelete="CASCADE"),
        nullable=False,
    )

    farm: Mapped[Farm] = relationship(back_populates="farm_harvests", lazy="raise")
    harvest: Mapped[Harvest] = relationship(lazy="selectin")
    crops: Mapped[list[FarmHarvestCrop]] = relationship(
        cascade="all",
        passive_deletes=True,
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<FarmHarvest farm={self.farm_id} harvest={self.harvest_id}>"


class FarmHarvestCrop(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A crop planted on a farm during one harvest."""

    __tablename__ = "farm_harvest_crops"

    farm_harvest_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("farm_harvests.id", ondelete="CASCADE"),
        nullable=False,
    )
    crop_type: Mapped[CropType] = mapped_column(
        Enum(
            CropType,
            native_enum=False,
            create_constraint=False,
            length=50,
            values_callable=lambda members: [m.value for m in members],
        ),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<FarmHarvestCrop farm_harvest={self.farm_harvest_id} crop={self.crop_type}>"
