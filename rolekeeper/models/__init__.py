"""
SQLAlchemy database models.
"""

from rolekeeper.models.base import Base
from rolekeeper.models.role import Role
from rolekeeper.models.permission import Permission
from rolekeeper.models.role_permission import RolePermission

__all__ = ["Base", "Role", "Permission", "RolePermission"]
