"""
Role management feature module.

Roles carry a set of permission keys drawn from the permission catalog.
"""
