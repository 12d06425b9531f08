"""
Role repository: create, read, update and delete Role rows.
"""

import logging
from typing import Any, List, Mapping, Optional, Union

from rolekeeper.core.errors import ErrorMessage, NotFoundError, PersistenceError
from rolekeeper.models.role import Role
from rolekeeper.repositories.base import BaseRepository
from rolekeeper.schemas.role import RoleCreate, RoleUpdate

logger = logging.getLogger(__name__)


class SysRoleRepository(BaseRepository):
    """Data access for roles."""

    def create_role(self, data: Union[RoleCreate, Mapping[str, Any]]) -> Role:
        """
        Insert a new role.

        Raises:
            PersistenceError: If a unique field (e.g. the name) is already taken
        """
        values = self._values(data, RoleCreate)
        try:
            with self._session() as session:
                role = Role(**values)
                session.add(role)
                session.flush()
        except PersistenceError as e:
            if e.is_constraint_violation:
                logger.warning(f"Role '{values.get('name')}' rejected: {e.details}")
                raise PersistenceError.constraint_violation(
                    ErrorMessage.ROLE_CONSTRAINT_VIOLATION.format(details=e.details),
                    details=e.details,
                ) from e.__cause__
            raise

        logger.info(f"Role '{role.name}' created with ID {role.id}")
        return role

    def update_role(self, role_id: str, data: Union[RoleUpdate, Mapping[str, Any]]) -> Role:
        """
        Apply the supplied fields to an existing role.

        Raises:
            NotFoundError: If no role has this ID
            PersistenceError: If the update violates a constraint
        """
        values = self._values(data, RoleUpdate, partial=True)
        try:
            with self._session() as session:
                role = session.query(Role).filter(Role.id == role_id).first()
                if role is None:
                    raise NotFoundError.role(role_id)
                role.update_from_dict(values)
                session.flush()
        except NotFoundError:
            logger.warning(f"Cannot update role {role_id}: not found")
            raise
        except PersistenceError as e:
            if e.is_constraint_violation:
                logger.warning(f"Update of role {role_id} rejected: {e.details}")
                raise PersistenceError.constraint_violation(
                    ErrorMessage.ROLE_CONSTRAINT_VIOLATION.format(details=e.details),
                    details=e.details,
                ) from e.__cause__
            raise

        logger.info(f"Role {role.id} updated: {sorted(values)}")
        return role

    def delete_role(self, role_id: str) -> Role:
        """
        Delete a role. Its permission assignments are removed with it.

        Raises:
            NotFoundError: If no role has this ID
        """
        try:
            with self._session() as session:
                role = session.query(Role).filter(Role.id == role_id).first()
                if role is None:
                    raise NotFoundError.role(role_id)
                session.delete(role)
                session.flush()
        except NotFoundError:
            logger.warning(f"Cannot delete role {role_id}: not found")
            raise

        logger.warning(f"Role '{role.name}' (ID: {role.id}) deleted")
        return role

    def get_all(self) -> List[Role]:
        """Return every role in insertion order."""
        with self._session() as session:
            roles = session.query(Role).order_by(Role.seq).all()
        logger.debug(f"Fetched {len(roles)} roles")
        return roles

    def get_role_by_id(self, role_id: str) -> Optional[Role]:
        """Return the role with this ID, or None."""
        with self._session() as session:
            return session.query(Role).filter(Role.id == role_id).first()
