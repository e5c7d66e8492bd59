"""
User persistence model.
"""
from datetime import datetime
from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from rbac_admin.core.database.base import Base
from rbac_admin.features.users.schemas import User


class UserRecord(Base):
    """
    Row form of a ``User``.

    Ids are assigned by the in-memory store, never by the database.
    """
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    # Role name (not a foreign key: the reference is checked by the core)
    role: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    status: Mapped[str] = mapped_column(String(20), nullable=False)

    # Stored as UTC
    last_login: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    @classmethod
    def from_user(cls, user: User) -> "UserRecord":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            status=user.status.value,
            last_login=user.last_login,
        )

    def to_user(self) -> User:
        return User.model_validate(self)

    def __repr__(self) -> str:
        return f"<UserRecord(id={self.id}, email={self.email!r})>"
