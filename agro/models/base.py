"""ORM base class and mixins: all models inherit from Base."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Declarative base: shared MetaData registry for all models.

    Tables are created by ``agro.migrations``, never by ``metadata.create_all``;
    the mappings here must agree with the statements in ``versions.py``.
    """

    pass


class TimestampMixin:
    """Adds created_at / updated_at audit columns.

    Values are assigned client-side so freshly flushed rows never need a
    refresh round-trip to read them back.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        server_default=func.now(),
        onupdate=_utcnow,
        nullable=False,
    )


class UUIDPrimaryKeyMixin:
    """Adds a UUID primary key generated in Python."""

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
