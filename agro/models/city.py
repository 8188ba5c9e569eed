"""City ORM model: municipalities imported from the IBGE catalog."""

from __future__ import annotations

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from agro.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from agro.models.enums import BrazilianState


class City(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A municipality; ``ibge_code`` is the canonical 7-digit catalog id.

    Rows are written once by the seeding pipeline and read-only afterwards.
    """

    __tablename__ = "cities"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
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
    ibge_code: Mapped[str] = mapped_column(String(7), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<City id={self.id} name={self.name!r} state={self.state}>"
