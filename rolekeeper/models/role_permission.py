"""
RolePermission junction table for many-to-many role-permission relationships.
"""

from sqlalchemy import Column, String, ForeignKey, Index
from sqlalchemy.orm import relationship

from rolekeeper.models.base import ID_LENGTH, BaseModel
from rolekeeper.models.mixins import CreatedAtMixin


class RolePermission(BaseModel, CreatedAtMixin):
    """Junction table keyed by the (permission_id, role_id) pair."""

    __tablename__ = "role_permissions"

    __table_args__ = (
        # Role-based permission lookups; the primary key covers the permission side
        Index('idx_role_permission_role', 'role_id'),
    )

    permission_id = Column(
        String(ID_LENGTH),
        ForeignKey("permissions.id", ondelete="CASCADE"),
        primary_key=True,
    )
    role_id = Column(
        String(ID_LENGTH),
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    )

    permission = relationship("Permission", back_populates="role_permissions")
    role = relationship("Role", back_populates="role_permissions")

    def __repr__(self):
        return f"<RolePermission(role_id={self.role_id}, permission_id={self.permission_id})>"
