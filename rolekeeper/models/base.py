"""
Base SQLAlchemy models with common fields and utilities.
"""

import uuid

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import declared_attr

from rolekeeper.core.database import Base

# Width of every role and permission identifier column
ID_LENGTH = 36


def generate_uuid() -> str:
    """Generate a string UUID identifier."""
    return str(uuid.uuid4())


class BaseModel(Base):
    """Base model with dictionary helpers."""

    __abstract__ = True

    def update_from_dict(self, data: dict):
        """Update model from dictionary, ignoring unknown keys."""
        for key, value in data.items():
            if key in self.__table__.columns:
                setattr(self, key, value)
        return self


class UUIDBaseModel(BaseModel):
    """
    Base model with a UUID identifier.

    ``seq`` is an autoincrement surrogate key that records insertion order;
    ``id`` is the public identifier referenced by foreign keys.
    """

    __abstract__ = True

    @declared_attr
    def seq(cls):
        return Column(Integer, primary_key=True, autoincrement=True)

    @declared_attr
    def id(cls):
        return Column(String(ID_LENGTH), unique=True, nullable=False, default=generate_uuid)
