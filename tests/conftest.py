"""
Pytest configuration and fixtures for testing.

This module provides common fixtures for:
- Database handle management (in-memory SQLite with foreign keys enforced)
- Repositories bound to the test database
- Seed rows (roles and permissions)
- A frozen clock for timestamp columns
- A clean process environment for configuration tests
"""

from datetime import datetime, timezone

import pytest

from rolekeeper.core.config import REQUIRED_DATABASE_VARIABLES, get_settings
from rolekeeper.core.database import Database
from rolekeeper.models.mixins import timestamp_mixin
from rolekeeper.repositories import (
    PermissionRepository,
    RolePermissionRepository,
    SysRoleRepository,
)


# ==================== DATABASE FIXTURES ====================

@pytest.fixture(scope="function")
def database():
    """Create a fresh in-memory database for each test."""
    db = Database("sqlite://")
    db.open()
    db.create_all()
    yield db
    db.close()


# ==================== REPOSITORY FIXTURES ====================

@pytest.fixture(scope="function")
def role_repository(database):
    return SysRoleRepository(database)


@pytest.fixture(scope="function")
def permission_repository(database):
    return PermissionRepository(database)


@pytest.fixture(scope="function")
def role_permission_repository(database):
    return RolePermissionRepository(database)


# ==================== CLOCK FIXTURES ====================

FROZEN_NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class FrozenDatetime(datetime):
    """datetime whose now() always returns FROZEN_NOW."""

    @classmethod
    def now(cls, tz=None):
        return FROZEN_NOW


@pytest.fixture(scope="function")
def frozen_clock(monkeypatch):
    """Give every row written during the test the same timestamp."""
    monkeypatch.setattr(timestamp_mixin, "datetime", FrozenDatetime)
    return FROZEN_NOW


# ==================== ROW FIXTURES ====================

@pytest.fixture(scope="function")
def test_role(role_repository):
    """Create a test role."""
    return role_repository.create_role({"id": "r1", "name": "editor", "description": "Editor role"})


@pytest.fixture(scope="function")
def test_permission(permission_repository):
    """Create a test permission."""
    return permission_repository.create_permission(
        {"id": "p1", "resource": "posts", "action": "update"}
    )


@pytest.fixture(scope="function")
def other_permission(permission_repository):
    """Create a second permission."""
    return permission_repository.create_permission(
        {"id": "p2", "resource": "posts", "action": "delete"}
    )


# ==================== ENVIRONMENT FIXTURES ====================

@pytest.fixture(scope="function")
def clean_env(monkeypatch, tmp_path):
    """
    Remove database variables from the environment and run in an empty directory.

    Each variable is set before being removed so monkeypatch restores the
    original state even if a test loads values from a .env file.
    """
    for key in REQUIRED_DATABASE_VARIABLES + ("DATABASE_PORT", "DATABASE_DRIVER", "LOG_LEVEL"):
        monkeypatch.setenv(key, "placeholder")
        monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


@pytest.fixture(scope="function")
def database_env(clean_env):
    """Bind every required database variable."""
    clean_env.setenv("DATABASE_HOST", "db.internal")
    clean_env.setenv("DATABASE_USER", "rolekeeper")
    clean_env.setenv("DATABASE_PASSWORD", "s3cret")
    clean_env.setenv("DATABASE_NAME", "rolekeeper")
    return clean_env
