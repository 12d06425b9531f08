"""
Pydantic schemas for repository input.
"""

from .base import BaseSchema
from .role import RoleCreate, RoleUpdate
from .permission import PermissionCreate, PermissionUpdate

__all__ = [
    "BaseSchema",
    "RoleCreate", "RoleUpdate",
    "PermissionCreate", "PermissionUpdate",
]
