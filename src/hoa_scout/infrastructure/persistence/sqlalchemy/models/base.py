"""Declarative base and shared columns for the HOA Scout tables."""

from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from hoa_scout.domain.shared.time import utc_now


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    """`created_at` set on insert, `last_updated` refreshed on every update."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
    # Indexed for "recently updated" listings.
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
        index=True,
    )
