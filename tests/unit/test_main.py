"""
Unit tests for application wiring and seeding.
"""

import pytest

from rolekeeper.core.database import Database
from rolekeeper.core.errors import ConfigurationError
from rolekeeper.main import Repositories, application
from rolekeeper.repositories import (
    PermissionRepository,
    RolePermissionRepository,
    SysRoleRepository,
)
from rolekeeper.seed import DEFAULT_ASSIGNMENTS, DEFAULT_PERMISSIONS, DEFAULT_ROLES, seed


@pytest.mark.unit
class TestApplication:
    """Test the application lifecycle."""

    def test_repositories_share_database(self):
        """Test every repository receives the same handle."""
        db = Database("sqlite://")

        repos = Repositories.build(db)

        assert isinstance(repos.roles, SysRoleRepository)
        assert isinstance(repos.permissions, PermissionRepository)
        assert isinstance(repos.role_permissions, RolePermissionRepository)
        assert repos.roles.database is db
        assert repos.permissions.database is db
        assert repos.role_permissions.database is db

    def test_opens_and_closes_database(self):
        """Test the database is open inside the block and closed after."""
        db = Database("sqlite://")

        with application(database=db) as repos:
            assert db.is_open is True
            db.create_all()
            repos.roles.create_role({"name": "admin"})
            assert len(repos.roles.get_all()) == 1

        assert db.is_open is False

    def test_closes_database_on_error(self):
        """Test shutdown still happens when the block raises."""
        db = Database("sqlite://")

        with pytest.raises(RuntimeError):
            with application(database=db):
                raise RuntimeError("boom")

        assert db.is_open is False

    def test_missing_configuration(self, clean_env):
        """Test missing variables fail before any connection is made."""
        with pytest.raises(ConfigurationError, match="DATABASE_HOST"):
            with application():
                pass


@pytest.mark.unit
@pytest.mark.database
class TestSeed:
    """Test the default data seeder."""

    def test_seed(self):
        """Test seeding creates the default roles, permissions and assignments."""
        with application(database=Database("sqlite://")) as repos:
            assigned = seed(repos)

            assert {r.name for r in repos.roles.get_all()} == {r["name"] for r in DEFAULT_ROLES}
            assert len(repos.permissions.get_all()) == len(DEFAULT_PERMISSIONS)
            assert len(assigned) == sum(len(p) for p in DEFAULT_ASSIGNMENTS.values())

            admin = next(r for r in repos.roles.get_all() if r.name == "admin")
            rows = repos.role_permissions.get_permissions_by_role(admin.id)
            assert len(rows) == len(DEFAULT_PERMISSIONS)

    def test_seed_is_idempotent(self):
        """Test a second run creates nothing new."""
        with application(database=Database("sqlite://")) as repos:
            seed(repos)

            assert seed(repos) == []
            assert len(repos.roles.get_all()) == len(DEFAULT_ROLES)
