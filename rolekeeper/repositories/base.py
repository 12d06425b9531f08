"""
Shared plumbing for repositories built on a Database handle.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Type, Union

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rolekeeper.core.database import Database
from rolekeeper.core.errors import PersistenceError, RoleKeeperError

logger = logging.getLogger(__name__)


class BaseRepository:
    """Base class holding the injected database handle."""

    def __init__(self, database: Database):
        self.database = database

    @contextmanager
    def _session(self) -> Iterator[Session]:
        """
        Open a request-scoped session.

        SQLAlchemy failures leave as PersistenceError with the original
        exception chained; errors raised by this package pass through.
        """
        try:
            with self.database.session() as session:
                yield session
        except RoleKeeperError:
            raise
        except SQLAlchemyError as e:
            logger.error(f"{type(self).__name__}: database operation failed: {e}")
            raise PersistenceError.from_exception(e) from e

    @staticmethod
    def _values(
        data: Union[BaseModel, Mapping[str, Any]],
        schema: Type[BaseModel],
        partial: bool = False,
    ) -> dict:
        """
        Normalize input to a dict of column values.

        Mappings are validated against ``schema`` first. Partial updates keep
        only the fields the caller actually set.
        """
        if not isinstance(data, schema):
            data = schema.model_validate(dict(data))
        if partial:
            return data.model_dump(exclude_unset=True)
        return data.model_dump(exclude_none=True)
