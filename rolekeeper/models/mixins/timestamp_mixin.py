"""
Timestamp mixin for created_at and updated_at fields.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declared_attr
from sqlalchemy.sql import func


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CreatedAtMixin:
    """Mixin for the creation timestamp only."""

    @declared_attr
    def created_at(cls):
        return Column(DateTime(timezone=True), server_default=func.now(), default=utcnow, nullable=False)


class TimestampMixin(CreatedAtMixin):
    """Mixin for timestamp fields."""

    @declared_attr
    def updated_at(cls):
        return Column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=utcnow,
            default=utcnow,
            nullable=False
        )
