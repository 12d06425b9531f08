"""
Seed default roles, permissions and assignments.

Seeding goes through the repositories and is idempotent: rows that already
exist are reused and existing assignments are left alone.
"""

import logging
from typing import Dict, List, Tuple

from rolekeeper.main import Repositories
from rolekeeper.models.permission import Permission
from rolekeeper.models.role import Role

logger = logging.getLogger(__name__)

DEFAULT_ROLES = [
    {"name": "user", "description": "Regular user with basic permissions"},
    {"name": "admin", "description": "Administrator with full permissions"},
]

DEFAULT_PERMISSIONS = [
    {"resource": "users", "action": "read", "description": "View users"},
    {"resource": "users", "action": "create", "description": "Create users"},
    {"resource": "users", "action": "update", "description": "Edit users"},
    {"resource": "users", "action": "delete", "description": "Delete users"},
    {"resource": "roles", "action": "read", "description": "View roles"},
    {"resource": "roles", "action": "manage", "description": "Create, edit and delete roles"},
]

# role name -> permission strings
DEFAULT_ASSIGNMENTS = {
    "user": ["users:read", "roles:read"],
    "admin": [f"{p['resource']}:{p['action']}" for p in DEFAULT_PERMISSIONS],
}


def create_roles(repos: Repositories) -> Dict[str, Role]:
    """Create the default roles if they don't exist."""
    existing = {role.name: role for role in repos.roles.get_all()}
    roles = {}
    for role_data in DEFAULT_ROLES:
        role = existing.get(role_data["name"])
        if role is None:
            role = repos.roles.create_role(role_data)
            print(f"✅ Created role '{role.name}'")
        else:
            print(f"⚠️  Role '{role.name}' already exists, skipping")
        roles[role.name] = role
    return roles


def create_permissions(repos: Repositories) -> Dict[str, Permission]:
    """Create the default permissions if they don't exist."""
    existing = {p.permission_string: p for p in repos.permissions.get_all()}
    permissions = {}
    for permission_data in DEFAULT_PERMISSIONS:
        key = f"{permission_data['resource']}:{permission_data['action']}"
        permission = existing.get(key)
        if permission is None:
            permission = repos.permissions.create_permission(permission_data)
            print(f"✅ Created permission '{key}'")
        else:
            print(f"⚠️  Permission '{key}' already exists, skipping")
        permissions[key] = permission
    return permissions


def assign_permissions(
    repos: Repositories,
    roles: Dict[str, Role],
    permissions: Dict[str, Permission],
) -> List[Tuple[str, str]]:
    """Assign the default permissions to each role. Returns new (role, permission) pairs."""
    assigned = []
    for role_name, permission_strings in DEFAULT_ASSIGNMENTS.items():
        role = roles[role_name]
        for permission_string in permission_strings:
            permission = permissions[permission_string]
            if repos.role_permissions.is_permission_assigned_to_role(role.id, permission.id):
                continue
            repos.role_permissions.assign_permission_to_role(role.id, permission.id)
            assigned.append((role_name, permission_string))
            print(f"✅ Assigned '{permission_string}' to role '{role_name}'")
    return assigned


def seed(repos: Repositories) -> List[Tuple[str, str]]:
    """Create tables and seed the defaults."""
    repos.database.create_all()

    print("\n📝 Creating roles...")
    roles = create_roles(repos)

    print("\n🔑 Creating permissions...")
    permissions = create_permissions(repos)

    print("\n🔗 Assigning permissions...")
    return assign_permissions(repos, roles, permissions)
