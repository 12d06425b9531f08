"""
Repositories over the role, permission and role-permission tables.
"""

from .sys_role_repository import SysRoleRepository
from .permission_repository import PermissionRepository
from .role_permission_repository import RolePermissionRepository

__all__ = ["SysRoleRepository", "PermissionRepository", "RolePermissionRepository"]
