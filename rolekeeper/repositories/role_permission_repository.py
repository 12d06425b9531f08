"""
Role-permission assignment repository.

Association rows are written with a single constrained statement; the
foreign keys on ``role_permissions`` guarantee both sides exist. When the
storage layer rejects a write, point lookups decide which error the caller
sees, always checking the permission before the role.
"""

import logging
from typing import List

from sqlalchemy.orm import Session, joinedload

from rolekeeper.core.errors import (
    ErrorMessage,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from rolekeeper.models.base import ID_LENGTH
from rolekeeper.models.permission import Permission
from rolekeeper.models.role import Role
from rolekeeper.models.role_permission import RolePermission
from rolekeeper.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class RolePermissionRepository(BaseRepository):
    """Data access for the role/permission association."""

    def assign_permission_to_role(self, role_id: str, permission_id: str) -> RolePermission:
        """
        Assign a permission to a role.

        Args:
            role_id: ID of an existing role
            permission_id: ID of an existing permission

        Returns:
            The created association row

        Raises:
            ValidationError: If the permission or the role does not exist
            PersistenceError: If the permission is already assigned to the role
        """
        if len(permission_id) > ID_LENGTH or len(role_id) > ID_LENGTH:
            # Too long to name a stored row; report it without attempting the insert
            self._validate_references(role_id, permission_id)

        try:
            with self._session() as session:
                role_permission = RolePermission(permission_id=permission_id, role_id=role_id)
                session.add(role_permission)
                session.flush()
        except PersistenceError as e:
            if not (e.is_constraint_violation or e.is_invalid_data):
                raise
            self._validate_references(role_id, permission_id)
            if e.is_invalid_data:
                raise
            logger.warning(f"Permission {permission_id} already assigned to role {role_id}")
            raise PersistenceError.constraint_violation(
                ErrorMessage.ASSIGNMENT_EXISTS.format(role_id=role_id, permission_id=permission_id),
                details=e.details,
            ) from e.__cause__

        logger.info(f"Permission {permission_id} assigned to role {role_id}")
        return role_permission

    def remove_permission_from_role(self, role_id: str, permission_id: str) -> RolePermission:
        """
        Remove a permission from a role.

        Returns:
            The deleted association row

        Raises:
            ValidationError: If the permission or the role does not exist
            NotFoundError: If both exist but the permission is not assigned to the role
        """
        with self._session() as session:
            role_permission = session.get(
                RolePermission, {"permission_id": permission_id, "role_id": role_id}
            )
            if role_permission is not None:
                session.delete(role_permission)
                session.flush()

        if role_permission is None:
            self._validate_references(role_id, permission_id)
            logger.warning(f"Permission {permission_id} is not assigned to role {role_id}")
            raise NotFoundError.assignment(role_id, permission_id)

        logger.info(f"Permission {permission_id} removed from role {role_id}")
        return role_permission

    def get_permissions_by_role(self, role_id: str) -> List[RolePermission]:
        """
        Return the role's association rows, each with its permission loaded.

        Raises:
            ValidationError: If the role does not exist
        """
        with self._session() as session:
            role_permissions = (
                session.query(RolePermission)
                .options(joinedload(RolePermission.permission))
                .filter(RolePermission.role_id == role_id)
                .order_by(RolePermission.created_at, RolePermission.permission_id)
                .all()
            )
            if not role_permissions:
                self._validate_role_id(session, role_id)

        logger.debug(f"Role {role_id} has {len(role_permissions)} permissions")
        return role_permissions

    def get_roles_in_permission(self, permission_id: str) -> List[RolePermission]:
        """
        Return the permission's association rows, each with its role loaded.

        Raises:
            ValidationError: If the permission does not exist
        """
        with self._session() as session:
            role_permissions = (
                session.query(RolePermission)
                .options(joinedload(RolePermission.role))
                .filter(RolePermission.permission_id == permission_id)
                .order_by(RolePermission.created_at, RolePermission.role_id)
                .all()
            )
            if not role_permissions:
                self._validate_permission_id(session, permission_id)

        logger.debug(f"Permission {permission_id} is assigned to {len(role_permissions)} roles")
        return role_permissions

    def is_permission_assigned_to_role(self, role_id: str, permission_id: str) -> bool:
        """
        Check whether a permission is assigned to a role.

        Raises:
            ValidationError: If the permission or the role does not exist
        """
        with self._session() as session:
            role_permission = session.get(
                RolePermission, {"permission_id": permission_id, "role_id": role_id}
            )
            if role_permission is None:
                self._validate_permission_id(session, permission_id)
                self._validate_role_id(session, role_id)

        return role_permission is not None

    def _validate_references(self, role_id: str, permission_id: str) -> None:
        with self._session() as session:
            self._validate_permission_id(session, permission_id)
            self._validate_role_id(session, role_id)

    @staticmethod
    def _validate_permission_id(session: Session, permission_id: str) -> None:
        exists = session.query(Permission.id).filter(Permission.id == permission_id).first()
        if exists is None:
            logger.warning(f"Permission {permission_id} does not exist")
            raise ValidationError.permission_does_not_exist(permission_id)

    @staticmethod
    def _validate_role_id(session: Session, role_id: str) -> None:
        exists = session.query(Role.id).filter(Role.id == role_id).first()
        if exists is None:
            logger.warning(f"Role {role_id} does not exist")
            raise ValidationError.role_does_not_exist(role_id)
