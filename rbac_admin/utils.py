"""
Shared helpers.
"""
import logging
import sys

from rbac_admin.core import config

_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _configure_root() -> logging.Logger:
    root = logging.getLogger("rbac_admin")
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(config.LOG_LEVEL)
    return root


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger namespaced under the ``rbac_admin`` root logger.

    Modules outside the package (``server``, ``scripts.*``) are attached
    below the root as well so they share its handler and level.

    Usage:
        log = get_logger(__name__)
        log.info("Role %s created", role.name)
    """
    _configure_root()
    if name != "rbac_admin" and not name.startswith("rbac_admin."):
        name = f"rbac_admin.{name}"
    return logging.getLogger(name)
