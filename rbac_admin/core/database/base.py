"""
SQLAlchemy declarative base.

All persistence models should inherit from Base.
"""
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Usage:
        from rbac_admin.core.database.base import Base

        class UserRecord(Base):
            __tablename__ = "users"

            id: Mapped[int] = mapped_column(primary_key=True)
            name: Mapped[str] = mapped_column(String(255))
    """
    pass
