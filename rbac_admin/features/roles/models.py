"""
Role persistence model.
"""
from typing import List
from sqlalchemy import Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from rbac_admin.core.database.base import Base
from rbac_admin.features.roles.schemas import Role


class RoleRecord(Base):
    """
    Row form of a ``Role``.

    Permission keys are stored as a JSON list, unknown keys included.
    """
    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)

    name: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Example: ["users:read", "content:edit"]
    permissions: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    @classmethod
    def from_role(cls, role: Role) -> "RoleRecord":
        return cls(
            id=role.id,
            name=role.name,
            description=role.description,
            permissions=list(role.permissions),
        )

    def to_role(self) -> Role:
        return Role.model_validate(self)

    def __repr__(self) -> str:
        return f"<RoleRecord(id={self.id}, name={self.name!r})>"
