"""
Permission catalog feature module.

Read-only mapping of permission keys to display labels.
"""
