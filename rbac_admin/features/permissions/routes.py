"""
Permission catalog routes (read-only).
"""
from typing import List
from fastapi import APIRouter

from rbac_admin.features.permissions.catalog import catalog_entries, is_known_permission, label_for
from rbac_admin.features.permissions.schemas import PermissionEntry, PermissionLabelResponse


router = APIRouter(tags=["permissions"])


@router.get("/", response_model=List[PermissionEntry])
async def list_permissions():
    """List every permission in the catalog."""
    return catalog_entries()


@router.get("/{key}/label", response_model=PermissionLabelResponse)
async def get_permission_label(key: str):
    """Label for a permission key; unknown keys are echoed back unchanged."""
    return PermissionLabelResponse(key=key, label=label_for(key), known=is_known_permission(key))
