"""
Role input schemas.
"""

from typing import Optional
from pydantic import Field

from rolekeeper.models.base import ID_LENGTH
from rolekeeper.schemas.base import BaseSchema


class RoleCreate(BaseSchema):
    """Attributes for a new role."""
    id: Optional[str] = Field(None, max_length=ID_LENGTH, description="Role ID; generated when omitted")
    name: str = Field(..., min_length=1, max_length=100, description="Unique role name")
    description: Optional[str] = Field(None, description="Role description")


class RoleUpdate(BaseSchema):
    """Partial role update; only fields that are set are written."""
    name: Optional[str] = Field(None, min_length=1, max_length=100, description="Unique role name")
    description: Optional[str] = Field(None, description="Role description")
