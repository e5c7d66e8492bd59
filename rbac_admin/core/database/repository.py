"""
Load/save persistence contract for the RBAC core.

The core never talks to storage itself. A caller loads the seed collections
through a ``Repository``, builds an ``RBACAdmin`` from them and saves the
admin's snapshot after mutations.
"""
from typing import Iterable, List, Optional, Protocol, Tuple

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from rbac_admin.core.database import engine as db_engine
from rbac_admin.features.roles.models import RoleRecord
from rbac_admin.features.roles.schemas import Role
from rbac_admin.features.users.models import UserRecord
from rbac_admin.features.users.schemas import User
from rbac_admin.utils import get_logger


log = get_logger(__name__)

Snapshot = Tuple[List[User], List[Role]]


class Repository(Protocol):
    async def init(self) -> None:
        ...

    async def load(self) -> Snapshot:
        ...

    async def save(self, users: Iterable[User], roles: Iterable[Role]) -> bool:
        ...


class InMemoryRepository:
    """Keeps the last saved snapshot in memory. Used by tests and ephemeral runs."""

    def __init__(self, users: Iterable[User] = (), roles: Iterable[Role] = ()):
        self.users: List[User] = list(users)
        self.roles: List[Role] = list(roles)
        self.saves = 0

    async def init(self) -> None:
        return None

    async def load(self) -> Snapshot:
        return list(self.users), list(self.roles)

    async def save(self, users: Iterable[User], roles: Iterable[Role]) -> bool:
        self.users = list(users)
        self.roles = list(roles)
        self.saves += 1
        return True


class SqlAlchemyRepository:
    """
    Persists users and roles in two tables.

    ``save`` replaces the full contents of both tables in one transaction,
    mirroring the whole-collection swap the stores do in memory.
    """

    def __init__(
        self,
        engine: Optional[AsyncEngine] = None,
        session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
    ):
        self.engine = engine or db_engine.engine
        if session_factory is None:
            if engine is None:
                session_factory = db_engine.AsyncSessionLocal
            else:
                session_factory = db_engine.build_session_factory(engine)
        self.session_factory = session_factory

    @classmethod
    def from_url(cls, url: str) -> "SqlAlchemyRepository":
        return cls(engine=db_engine.build_engine(url))

    async def init(self) -> None:
        log.info("Initializing database...")
        await db_engine.init_db(self.engine)
        log.info("Database initialized successfully")

    async def load(self) -> Snapshot:
        async with self.session_factory() as session:
            user_rows = (await session.execute(select(UserRecord).order_by(UserRecord.id))).scalars().all()
            role_rows = (await session.execute(select(RoleRecord).order_by(RoleRecord.id))).scalars().all()

        users = [row.to_user() for row in user_rows]
        roles = [row.to_role() for row in role_rows]
        log.info("Loaded %d users and %d roles", len(users), len(roles))
        return users, roles

    async def save(self, users: Iterable[User], roles: Iterable[Role]) -> bool:
        """
        Replace the stored collections with ``users`` and ``roles``.

        Returns:
            True on success, False if the database rejected the write
            (the previous contents are kept).
        """
        async with self.session_factory() as session:
            try:
                await session.execute(delete(UserRecord))
                await session.execute(delete(RoleRecord))
                session.add_all([UserRecord.from_user(u) for u in users])
                session.add_all([RoleRecord.from_role(r) for r in roles])
                await session.commit()
            except SQLAlchemyError:
                await session.rollback()
                log.exception("Failed to save RBAC snapshot")
                return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()
