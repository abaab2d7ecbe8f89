"""
todolist-service: multi-tenant to-do list API

In-memory to-do store protected by bearer-token
claims-based authorization (scopes, roles, ownership).
"""

__version__ = "0.1.0"
