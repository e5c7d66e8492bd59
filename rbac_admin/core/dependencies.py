"""
FastAPI dependencies shared by the feature routers.
"""
import asyncio
from typing import Annotated
from fastapi import BackgroundTasks, Depends, Request

from rbac_admin.core.admin import RBACAdmin
from rbac_admin.core.database.repository import Repository
from rbac_admin.utils import get_logger


log = get_logger(__name__)


def get_admin(request: Request) -> RBACAdmin:
    """The RBAC core owned by the running application."""
    return request.app.state.admin


def get_repository(request: Request) -> Repository:
    return request.app.state.repository


def get_save_lock(request: Request) -> asyncio.Lock:
    return request.app.state.save_lock


async def save_snapshot(admin: RBACAdmin, repository: Repository, lock: asyncio.Lock) -> None:
    """
    Persist the current users and roles.

    Saves run one at a time and each reads the snapshot only once it holds the
    lock, so the last save to finish always writes the newest state.
    """
    async with lock:
        users, roles = admin.snapshot()
        if not await repository.save(users, roles):
            log.error("Snapshot was not persisted; in-memory state is ahead of storage")


class SnapshotSaver:
    """
    Schedules a save of the users and roles after the response is sent.

    Usage in routes:
        @router.post("/")
        async def create(..., saver: Annotated[SnapshotSaver, Depends(SnapshotSaver)]):
            ...
            saver.schedule()
    """

    def __init__(
        self,
        background_tasks: BackgroundTasks,
        admin: Annotated[RBACAdmin, Depends(get_admin)],
        repository: Annotated[Repository, Depends(get_repository)],
        lock: Annotated[asyncio.Lock, Depends(get_save_lock)],
    ):
        self.background_tasks = background_tasks
        self.admin = admin
        self.repository = repository
        self.lock = lock

    def schedule(self) -> None:
        self.background_tasks.add_task(save_snapshot, self.admin, self.repository, self.lock)


def get_authorization_header(request) -> str:
    """
    Rate-limit key: the Authorization header when present, else the client address.
    Used with slowapi Limiter.
    """
    auth = request.headers.get("Authorization", "")
    if auth:
        return auth
    return request.client.host if request.client else "anonymous"
