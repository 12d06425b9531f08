"""
Role model for RBAC (Role-Based Access Control).
"""

from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship

from rolekeeper.models.base import UUIDBaseModel
from rolekeeper.models.mixins import TimestampMixin


class Role(UUIDBaseModel, TimestampMixin):
    """Role model for RBAC."""

    __tablename__ = "roles"

    name = Column(String(100), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)

    # Association rows go away with the role (ON DELETE CASCADE)
    role_permissions = relationship(
        "RolePermission",
        back_populates="role",
        cascade="all, delete",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Role(id={self.id}, name='{self.name}')>"
