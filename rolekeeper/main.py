"""
Application wiring: settings, logging, database lifecycle and repositories.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from rolekeeper.core.config import Settings, get_settings
from rolekeeper.core.database import Database
from rolekeeper.repositories import (
    PermissionRepository,
    RolePermissionRepository,
    SysRoleRepository,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Repositories:
    """Repositories sharing one database handle."""

    database: Database
    roles: SysRoleRepository
    permissions: PermissionRepository
    role_permissions: RolePermissionRepository

    @classmethod
    def build(cls, database: Database) -> "Repositories":
        return cls(
            database=database,
            roles=SysRoleRepository(database),
            permissions=PermissionRepository(database),
            role_permissions=RolePermissionRepository(database),
        )


def configure_logging(settings: Settings) -> None:
    """Configure root logging from settings."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format=settings.log_format,
    )


@contextmanager
def application(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> Iterator[Repositories]:
    """
    Open the database, yield the repositories, close the database on exit.

    Settings are loaded from the environment when not given; a missing
    variable raises ConfigurationError before any connection is attempted.
    """
    if database is None:
        settings = settings or get_settings()
        configure_logging(settings)
        database = Database.from_settings(settings)

    database.open()
    logger.info("Role-permission store started")
    try:
        yield Repositories.build(database)
    finally:
        database.close()
        logger.info("Role-permission store stopped")
