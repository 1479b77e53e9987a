"""Security: RBAC and caller identity. No FastAPI."""

from freight_amendments.security.identity import Actor, resolve_actor, resolve_role
from freight_amendments.security.rbac import RBACService, Role

__all__ = [
    "Actor",
    "RBACService",
    "Role",
    "resolve_actor",
    "resolve_role",
]
