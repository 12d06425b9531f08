"""
Model mixins for SQLAlchemy models.
"""

from .timestamp_mixin import CreatedAtMixin, TimestampMixin

__all__ = ["CreatedAtMixin", "TimestampMixin"]
