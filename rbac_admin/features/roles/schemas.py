"""
Pydantic schemas for roles.
"""
from typing import Any, List, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator

from rbac_admin.features.permissions.schemas import PermissionEntry


def _dedupe_permissions(v: Any) -> Any:
    """Keep the first occurrence of each key, in the order given."""
    if isinstance(v, (list, tuple, set, frozenset)):
        return tuple(dict.fromkeys(v))
    return v


class RoleDraft(BaseModel):
    """Schema for creating a new role. The store assigns the id."""
    name: str = Field("", max_length=50)
    description: str = Field("", max_length=1000)
    permissions: Tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)

    @field_validator("permissions", mode="before")
    @classmethod
    def unique_permissions(cls, v: Any) -> Any:
        return _dedupe_permissions(v)


class RoleUpdate(BaseModel):
    """Schema for a full-record overwrite; the id comes from the path."""
    name: str = Field(..., max_length=50)
    description: str = Field("", max_length=1000)
    permissions: List[str] = []


class Role(BaseModel):
    """
    A role record as held by the role store.

    ``permissions`` is a set of permission keys; it is stored as a
    de-duplicated tuple so display order stays stable.
    """
    id: int = Field(..., gt=0)
    name: str
    description: str = ""
    permissions: Tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True, from_attributes=True)

    @field_validator("permissions", mode="before")
    @classmethod
    def unique_permissions(cls, v: Any) -> Any:
        return _dedupe_permissions(v)

    def has_permission(self, key: str) -> bool:
        return key in self.permissions

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name={self.name!r})>"


class RoleResponse(BaseModel):
    """Schema for role responses, with every permission labelled."""
    id: int
    name: str
    description: str
    permissions: List[PermissionEntry] = []
