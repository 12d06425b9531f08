"""
Centralized error catalog for the role-permission data-access layer.

This module provides the exception hierarchy raised by the configuration
layer, the database handle and the repositories, together with standardized
error codes and messages so callers can map failures consistently.
"""

from enum import Enum
from typing import Optional

from sqlalchemy.exc import DataError, IntegrityError


class ErrorCode(Enum):
    """Standardized error codes for role-permission operations."""

    # Configuration errors
    MISSING_CONFIGURATION = "CONFIG_001"
    INVALID_CONFIGURATION = "CONFIG_002"

    # Validation errors
    REFERENCE_NOT_FOUND = "VALID_001"

    # Persistence errors
    DATABASE_ERROR = "DB_001"
    RECORD_NOT_FOUND = "DB_002"
    CONSTRAINT_VIOLATION = "DB_003"
    DATABASE_NOT_OPEN = "DB_004"
    INVALID_DATA = "DB_005"


class ErrorMessage:
    """Standardized error messages, formatted with the offending value."""

    # Configuration error messages
    MISSING_ENV_VAR = "Missing environment variable: {key}"
    INVALID_CONFIGURATION = "Invalid configuration: {details}"

    # Validation error messages
    PERMISSION_DOES_NOT_EXIST = "permission {id} does not exist"
    ROLE_DOES_NOT_EXIST = "Role {id} does not exist"

    # Persistence error messages
    ROLE_NOT_FOUND = "Role {id} not found"
    PERMISSION_NOT_FOUND = "Permission {id} not found"
    ASSIGNMENT_NOT_FOUND = "Permission {permission_id} is not assigned to role {role_id}"
    ASSIGNMENT_EXISTS = "Permission {permission_id} is already assigned to role {role_id}"
    ROLE_CONSTRAINT_VIOLATION = "Role violates a database constraint: {details}"
    PERMISSION_CONSTRAINT_VIOLATION = "Permission violates a database constraint: {details}"
    DATABASE_ERROR = "Database operation failed: {details}"
    DATABASE_NOT_OPEN = "Database is not open"


class RoleKeeperError(Exception):
    """Base class for every error raised by this package."""

    error_code: ErrorCode = ErrorCode.DATABASE_ERROR

    def __init__(
        self,
        message: str,
        error_code: Optional[ErrorCode] = None,
        details: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        if error_code is not None:
            self.error_code = error_code
        self.details = details


class ConfigurationError(RoleKeeperError):
    """A required configuration value is missing or invalid."""

    error_code = ErrorCode.MISSING_CONFIGURATION

    @classmethod
    def missing(cls, key: Optional[str]) -> "ConfigurationError":
        return cls(ErrorMessage.MISSING_ENV_VAR.format(key=key))

    @classmethod
    def invalid(cls, details: str) -> "ConfigurationError":
        return cls(
            ErrorMessage.INVALID_CONFIGURATION.format(details=details),
            error_code=ErrorCode.INVALID_CONFIGURATION,
            details=details,
        )


class ValidationError(RoleKeeperError):
    """A referenced role or permission does not exist."""

    error_code = ErrorCode.REFERENCE_NOT_FOUND

    @classmethod
    def permission_does_not_exist(cls, permission_id: str) -> "ValidationError":
        return cls(ErrorMessage.PERMISSION_DOES_NOT_EXIST.format(id=permission_id))

    @classmethod
    def role_does_not_exist(cls, role_id: str) -> "ValidationError":
        return cls(ErrorMessage.ROLE_DOES_NOT_EXIST.format(id=role_id))


class PersistenceError(RoleKeeperError):
    """The storage layer rejected or failed an operation."""

    error_code = ErrorCode.DATABASE_ERROR

    @classmethod
    def from_exception(cls, exc: Exception, message: Optional[str] = None) -> "PersistenceError":
        details = str(getattr(exc, "orig", None) or exc)
        error_code = None
        if isinstance(exc, IntegrityError):
            error_code = ErrorCode.CONSTRAINT_VIOLATION
        elif isinstance(exc, DataError):
            error_code = ErrorCode.INVALID_DATA
        return cls(
            message or ErrorMessage.DATABASE_ERROR.format(details=details),
            error_code=error_code,
            details=details,
        )

    @classmethod
    def constraint_violation(cls, message: str, details: Optional[str] = None) -> "PersistenceError":
        return cls(message, error_code=ErrorCode.CONSTRAINT_VIOLATION, details=details)

    @classmethod
    def not_open(cls) -> "PersistenceError":
        return cls(ErrorMessage.DATABASE_NOT_OPEN, error_code=ErrorCode.DATABASE_NOT_OPEN)

    @property
    def is_constraint_violation(self) -> bool:
        return self.error_code is ErrorCode.CONSTRAINT_VIOLATION

    @property
    def is_invalid_data(self) -> bool:
        return self.error_code is ErrorCode.INVALID_DATA


class NotFoundError(PersistenceError):
    """The target row of an update or delete does not exist."""

    error_code = ErrorCode.RECORD_NOT_FOUND

    @classmethod
    def role(cls, role_id: str) -> "NotFoundError":
        return cls(ErrorMessage.ROLE_NOT_FOUND.format(id=role_id))

    @classmethod
    def permission(cls, permission_id: str) -> "NotFoundError":
        return cls(ErrorMessage.PERMISSION_NOT_FOUND.format(id=permission_id))

    @classmethod
    def assignment(cls, role_id: str, permission_id: str) -> "NotFoundError":
        return cls(
            ErrorMessage.ASSIGNMENT_NOT_FOUND.format(
                role_id=role_id, permission_id=permission_id
            )
        )
