"""
User management feature module.

In-memory user store, validation-backed mutations and the search/sort
query over the user list.
"""
