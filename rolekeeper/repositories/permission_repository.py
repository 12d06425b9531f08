"""
Permission repository: create, read, update and delete Permission rows.
"""

import logging
from typing import Any, List, Mapping, Optional, Union

from rolekeeper.core.errors import ErrorMessage, NotFoundError, PersistenceError
from rolekeeper.models.permission import Permission
from rolekeeper.repositories.base import BaseRepository
from rolekeeper.schemas.permission import PermissionCreate, PermissionUpdate

logger = logging.getLogger(__name__)


class PermissionRepository(BaseRepository):
    """Data access for permissions."""

    def _constraint_error(self, e: PersistenceError) -> PersistenceError:
        return PersistenceError.constraint_violation(
            ErrorMessage.PERMISSION_CONSTRAINT_VIOLATION.format(details=e.details),
            details=e.details,
        )

    def create_permission(self, data: Union[PermissionCreate, Mapping[str, Any]]) -> Permission:
        """
        Insert a new permission.

        Raises:
            PersistenceError: If the resource:action pair already exists
        """
        values = self._values(data, PermissionCreate)
        try:
            with self._session() as session:
                permission = Permission(**values)
                session.add(permission)
                session.flush()
        except PersistenceError as e:
            if e.is_constraint_violation:
                logger.warning(
                    f"Permission '{values.get('resource')}:{values.get('action')}' rejected: {e.details}"
                )
                raise self._constraint_error(e) from e.__cause__
            raise

        logger.info(f"Permission '{permission.permission_string}' created with ID {permission.id}")
        return permission

    def update_permission(
        self, permission_id: str, data: Union[PermissionUpdate, Mapping[str, Any]]
    ) -> Permission:
        """
        Apply the supplied fields to an existing permission.

        Raises:
            NotFoundError: If no permission has this ID
            PersistenceError: If the update violates a constraint
        """
        values = self._values(data, PermissionUpdate, partial=True)
        try:
            with self._session() as session:
                permission = session.query(Permission).filter(Permission.id == permission_id).first()
                if permission is None:
                    raise NotFoundError.permission(permission_id)
                permission.update_from_dict(values)
                session.flush()
        except NotFoundError:
            logger.warning(f"Cannot update permission {permission_id}: not found")
            raise
        except PersistenceError as e:
            if e.is_constraint_violation:
                logger.warning(f"Update of permission {permission_id} rejected: {e.details}")
                raise self._constraint_error(e) from e.__cause__
            raise

        logger.info(f"Permission {permission.id} updated: {sorted(values)}")
        return permission

    def delete_permission(self, permission_id: str) -> Permission:
        """
        Delete a permission. Role assignments referencing it are removed with it.

        Raises:
            NotFoundError: If no permission has this ID
        """
        try:
            with self._session() as session:
                permission = session.query(Permission).filter(Permission.id == permission_id).first()
                if permission is None:
                    raise NotFoundError.permission(permission_id)
                session.delete(permission)
                session.flush()
        except NotFoundError:
            logger.warning(f"Cannot delete permission {permission_id}: not found")
            raise

        logger.warning(f"Permission '{permission.permission_string}' (ID: {permission.id}) deleted")
        return permission

    def get_all(self) -> List[Permission]:
        """Return every permission in insertion order."""
        with self._session() as session:
            permissions = session.query(Permission).order_by(Permission.seq).all()
        logger.debug(f"Fetched {len(permissions)} permissions")
        return permissions

    def get_permission_by_id(self, permission_id: str) -> Optional[Permission]:
        """Return the permission with this ID, or None."""
        with self._session() as session:
            return session.query(Permission).filter(Permission.id == permission_id).first()
