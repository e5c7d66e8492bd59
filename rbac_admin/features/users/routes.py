"""
User feature routes.
"""
from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException, Path, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as SchemaValidationError

from rbac_admin.core.admin import RBACAdmin
from rbac_admin.core.dependencies import SnapshotSaver, get_admin
from rbac_admin.core.exceptions import ConfirmationRequiredError, NotFoundError, ValidationError
from rbac_admin.features.users.schemas import (
    SortConfig,
    SortDirection,
    SortKey,
    User,
    UserDraft,
    UserListResponse,
    UserUpdate,
)
from rbac_admin.utils import get_logger


log = get_logger(__name__)
router = APIRouter(tags=["users"])

EMPTY_RESULT_MESSAGE = "No users found. Try a different search term."

# SortConfig field -> query parameter
_SORT_PARAMS = {"key": "sort_key", "direction": "direction"}


@router.get("/", response_model=UserListResponse)
async def list_users(
    admin: Annotated[RBACAdmin, Depends(get_admin)],
    search: str = "",
    sort_key: str = SortKey.NAME.value,
    direction: str = SortDirection.ASC.value,
):
    """
    List users matching ``search``, ordered by ``sort_key``/``direction``.

    ``sort_key`` also accepts the dashboard's camelCase ``lastLogin``.
    """
    try:
        sort_config = SortConfig(key=sort_key, direction=direction)
    except SchemaValidationError as e:
        raise RequestValidationError(
            [{**error, "loc": ("query", _SORT_PARAMS[error["loc"][0]])} for error in e.errors()]
        )
    users = admin.list_users(search, sort_config)
    return UserListResponse(
        items=list(users),
        total=len(users),
        search=search,
        sort_key=sort_config.key.value,
        direction=sort_config.direction.value,
        message=None if users else EMPTY_RESULT_MESSAGE,
    )


@router.get("/{user_id}", response_model=User)
async def get_user(
    user_id: Annotated[int, Path(gt=0)],
    admin: Annotated[RBACAdmin, Depends(get_admin)],
):
    """Get user by ID."""
    try:
        return admin.get_user(user_id)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )


@router.post("/", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(
    draft: UserDraft,
    admin: Annotated[RBACAdmin, Depends(get_admin)],
    saver: Annotated[SnapshotSaver, Depends(SnapshotSaver)],
):
    """Create a new user."""
    try:
        user = admin.add_user(draft)
    except ValidationError as e:
        log.info("Rejected new user: %s", e.message)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.to_dict())

    saver.schedule()
    return user


@router.put("/{user_id}", response_model=User)
async def update_user(
    user_id: Annotated[int, Path(gt=0)],
    update_data: UserUpdate,
    admin: Annotated[RBACAdmin, Depends(get_admin)],
    saver: Annotated[SnapshotSaver, Depends(SnapshotSaver)],
):
    """Replace a user record (every field is overwritten)."""
    try:
        user = admin.edit_user(User(id=user_id, **update_data.model_dump()))
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    except ValidationError as e:
        log.info("Rejected edit of user %s: %s", user_id, e.message)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.to_dict())

    saver.schedule()
    return user


@router.delete("/{user_id}")
async def delete_user(
    user_id: Annotated[int, Path(gt=0)],
    admin: Annotated[RBACAdmin, Depends(get_admin)],
    saver: Annotated[SnapshotSaver, Depends(SnapshotSaver)],
    confirm: bool = False,
):
    """
    Delete a user.

    Without ``confirm=true`` nothing is deleted: the response is a 409
    carrying the confirmation prompt and the record that would be removed.
    Deleting an id that does not exist succeeds with ``deleted: false``.
    """
    try:
        deleted = admin.delete_user(user_id, confirmed=confirm)
    except ConfirmationRequiredError as e:
        pending = admin.request_user_deletion(user_id)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "error": e.message,
                "user": pending.model_dump(mode="json") if pending else None,
            },
        )

    if deleted:
        saver.schedule()
    return {"deleted": deleted, "user_id": user_id}
