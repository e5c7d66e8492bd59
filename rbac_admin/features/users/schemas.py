"""
Pydantic schemas for users and user-list query state.

Records are frozen: an edit replaces the whole record, nothing is patched in place.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive timestamps are taken to be UTC; aware ones are converted to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UserDraft(BaseModel):
    """Schema for creating a new user. The store assigns id and last_login."""
    name: str = Field("", max_length=255)
    email: str = Field("", max_length=255)
    role: str = Field("", max_length=50)
    status: UserStatus = UserStatus.ACTIVE

    model_config = ConfigDict(frozen=True)


class UserUpdate(BaseModel):
    """Schema for a full-record overwrite; the id comes from the path."""
    name: str = Field(..., max_length=255)
    email: str = Field(..., max_length=255)
    role: str = Field(..., max_length=50)
    status: UserStatus
    last_login: Optional[datetime] = None


class User(BaseModel):
    """A user record as held by the user store."""
    id: int = Field(..., gt=0)
    name: str
    email: str
    role: str = ""
    status: UserStatus = UserStatus.ACTIVE
    last_login: Optional[datetime] = None

    model_config = ConfigDict(frozen=True, from_attributes=True)

    @field_validator("last_login")
    @classmethod
    def last_login_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(v)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email!r})>"


class UserListResponse(BaseModel):
    """Visible, ordered user list. ``message`` is set when nothing matched."""
    items: List[User]
    total: int
    search: str
    sort_key: str
    direction: str
    message: Optional[str] = None


# ============================================================================
# Query state
# ============================================================================

class SortKey(str, Enum):
    ID = "id"
    NAME = "name"
    EMAIL = "email"
    ROLE = "role"
    STATUS = "status"
    LAST_LOGIN = "last_login"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


_SORT_KEY_ALIASES = {"lastLogin": SortKey.LAST_LOGIN.value}


class SortConfig(BaseModel):
    """Which field the user list is ordered by, and in which direction."""
    key: SortKey = SortKey.NAME
    direction: SortDirection = SortDirection.ASC

    model_config = ConfigDict(frozen=True)

    @field_validator("key", mode="before")
    @classmethod
    def key_alias(cls, v: Any) -> Any:
        """Accept the camelCase field name used by the dashboard."""
        if isinstance(v, str):
            return _SORT_KEY_ALIASES.get(v, v)
        return v

    @field_validator("direction", mode="before")
    @classmethod
    def direction_lowercase(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.lower()
        return v

    @property
    def descending(self) -> bool:
        return self.direction == SortDirection.DESC

    def toggled(self) -> "SortConfig":
        """Same key, opposite direction."""
        direction = SortDirection.ASC if self.descending else SortDirection.DESC
        return SortConfig(key=self.key, direction=direction)
