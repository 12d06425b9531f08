"""
Permission input schemas.
"""

from typing import Optional
from pydantic import Field

from rolekeeper.models.base import ID_LENGTH
from rolekeeper.schemas.base import BaseSchema


class PermissionCreate(BaseSchema):
    """Attributes for a new permission."""
    id: Optional[str] = Field(None, max_length=ID_LENGTH, description="Permission ID; generated when omitted")
    resource: str = Field(..., min_length=1, max_length=100, description="Resource name (e.g. 'users')")
    action: str = Field(..., min_length=1, max_length=50, description="Action name (e.g. 'read')")
    description: Optional[str] = Field(None, description="Permission description")


class PermissionUpdate(BaseSchema):
    """Partial permission update; only fields that are set are written."""
    resource: Optional[str] = Field(None, min_length=1, max_length=100, description="Resource name")
    action: Optional[str] = Field(None, min_length=1, max_length=50, description="Action name")
    description: Optional[str] = Field(None, description="Permission description")
