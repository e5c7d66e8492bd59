"""
RBAC admin: users, roles and permission sets.
"""
