"""
Pydantic schemas for the permission catalog.
"""
from pydantic import BaseModel, ConfigDict, Field


class PermissionEntry(BaseModel):
    """A permission key together with its display label."""
    key: str = Field(..., min_length=1, description="Stable permission identifier, e.g. 'users:read'")
    label: str = Field(..., description="Display text")

    model_config = ConfigDict(frozen=True)


class PermissionLabelResponse(BaseModel):
    """Schema for a single label lookup."""
    key: str
    label: str
    known: bool
