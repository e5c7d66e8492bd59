"""
Static permission catalog: permission key -> human label.

The catalog is a process-wide constant. Roles may carry keys that are not
listed here; those are kept and displayed as the raw key.
"""
from types import MappingProxyType
from typing import List, Mapping

from rbac_admin.features.permissions.schemas import PermissionEntry


PERMISSION_LABELS: Mapping[str, str] = MappingProxyType({
    # User management
    "users:read": "View Users",
    "users:write": "Edit Users",
    "users:delete": "Delete Users",

    # Role management
    "roles:manage": "Manage Roles",

    # System
    "system:config": "System Configuration",

    # Content
    "content:create": "Create Content",
    "content:edit": "Edit Content",
})


def label_for(key: str) -> str:
    """Return the label for a permission key, or the key itself if it is unknown."""
    return PERMISSION_LABELS.get(key, key)


def is_known_permission(key: str) -> bool:
    return key in PERMISSION_LABELS


def catalog_entries() -> List[PermissionEntry]:
    """All catalog entries in declaration order."""
    return [PermissionEntry(key=key, label=label) for key, label in PERMISSION_LABELS.items()]
