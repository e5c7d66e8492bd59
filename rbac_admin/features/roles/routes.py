"""
Role feature routes.
"""
from typing import Annotated, List
from fastapi import APIRouter, Depends, HTTPException, Path, status

from rbac_admin.core.admin import RBACAdmin
from rbac_admin.core.dependencies import SnapshotSaver, get_admin
from rbac_admin.core.exceptions import NotFoundError, ValidationError
from rbac_admin.features.roles.schemas import Role, RoleDraft, RoleResponse, RoleUpdate
from rbac_admin.utils import get_logger


log = get_logger(__name__)
router = APIRouter(tags=["roles"])


def to_response(admin: RBACAdmin, role: Role) -> RoleResponse:
    return RoleResponse(
        id=role.id,
        name=role.name,
        description=role.description,
        permissions=admin.role_permission_entries(role),
    )


@router.get("/", response_model=List[RoleResponse])
async def list_roles(admin: Annotated[RBACAdmin, Depends(get_admin)]):
    """List all roles with labelled permissions."""
    return [to_response(admin, role) for role in admin.list_roles()]


@router.get("/{role_id}", response_model=RoleResponse)
async def get_role(
    role_id: Annotated[int, Path(gt=0)],
    admin: Annotated[RBACAdmin, Depends(get_admin)],
):
    """Get role by ID."""
    try:
        return to_response(admin, admin.get_role(role_id))
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Role not found")


@router.post("/", response_model=RoleResponse, status_code=status.HTTP_201_CREATED)
async def create_role(
    draft: RoleDraft,
    admin: Annotated[RBACAdmin, Depends(get_admin)],
    saver: Annotated[SnapshotSaver, Depends(SnapshotSaver)],
):
    """Create a new role."""
    try:
        role = admin.add_role(draft)
    except ValidationError as e:
        log.info("Rejected new role: %s", e.message)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.to_dict())

    saver.schedule()
    return to_response(admin, role)


@router.put("/{role_id}", response_model=RoleResponse)
async def update_role(
    role_id: Annotated[int, Path(gt=0)],
    role_update: RoleUpdate,
    admin: Annotated[RBACAdmin, Depends(get_admin)],
    saver: Annotated[SnapshotSaver, Depends(SnapshotSaver)],
):
    """Replace a role record (name, description and permission set)."""
    try:
        role = admin.edit_role(Role(id=role_id, **role_update.model_dump()))
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Role not found")
    except ValidationError as e:
        log.info("Rejected edit of role %s: %s", role_id, e.message)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.to_dict())

    saver.schedule()
    return to_response(admin, role)
