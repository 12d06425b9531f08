"""
Permission model for RBAC (Role-Based Access Control).
"""

from sqlalchemy import Column, String, Text, UniqueConstraint, Index
from sqlalchemy.orm import relationship

from rolekeeper.models.base import UUIDBaseModel
from rolekeeper.models.mixins import TimestampMixin


class Permission(UUIDBaseModel, TimestampMixin):
    """Permission model for RBAC."""

    __tablename__ = "permissions"

    __table_args__ = (
        UniqueConstraint('resource', 'action', name='unique_resource_action'),
        Index('idx_permission_resource_action', 'resource', 'action'),
    )

    resource = Column(String(100), index=True, nullable=False)
    action = Column(String(50), index=True, nullable=False)
    description = Column(Text, nullable=True)

    role_permissions = relationship(
        "RolePermission",
        back_populates="permission",
        cascade="all, delete",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Permission(id={self.id}, resource='{self.resource}', action='{self.action}')>"

    @property
    def permission_string(self):
        """Return permission as resource:action format."""
        return f"{self.resource}:{self.action}"
