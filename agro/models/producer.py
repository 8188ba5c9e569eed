"""Producer ORM model: rural producers identified by CPF or CNPJ."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from agro.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from agro.models.enums import ProducerKind

if TYPE_CHECKING:
    from agro.models.farm import Farm

CPF_LENGTH = 11
CNPJ_LENGTH = 14


class Producer(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A rural producer: an individual (11-digit CPF) or a company (14-digit CNPJ)."""

    __tablename__ = "producers"

    document: Mapped[str] = mapped_column(String(14), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    farms: Mapped[list[Farm]] = relationship(
        cascade="all",
        passive_deletes=True,
        lazy="raise",
    )

    @property
    def kind(self) -> ProducerKind:
        if len(self.document) == CNPJ_LENGTH:
            return ProducerKind.company
        return ProducerKind.individual

    def __repr__(self) -> str:
        return f"<Producer id={self.id} document={self.document!r}>"
