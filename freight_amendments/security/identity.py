"""Caller identity as handed over by the upstream session layer. No FastAPI."""

from dataclasses import dataclass
from typing import Optional

from freight_amendments.security.exceptions import AuthenticationError
from freight_amendments.security.rbac import Role

# Portal role strings folded onto the three actor roles.
_PORTAL_ROLES: dict[str, Role] = {
    "client": Role.CLIENT,
    "client_admin": Role.CLIENT,
    "vendor": Role.VENDOR,
    "vendor_admin": Role.VENDOR,
    "pricing_agent": Role.VENDOR,
    "bl_manager_vendor": Role.VENDOR,
    "accounts_vendor": Role.VENDOR,
    "admin": Role.ADMIN,
    "system_admin": Role.ADMIN,
    "amendment_reviewer": Role.ADMIN,
    "quote_control": Role.ADMIN,
    "finance_admin": Role.ADMIN,
    "analytics_officer": Role.ADMIN,
    "vendor_manager": Role.ADMIN,
}


@dataclass(frozen=True)
class Actor:
    """Resolved caller. Threaded explicitly into every amendment operation."""

    actor_id: str
    role: Role


def resolve_role(role_name: Optional[str]) -> Role:
    """Map a session role string onto Role. Raises AuthenticationError for unknown roles."""
    if not role_name or not role_name.strip():
        raise AuthenticationError("Caller role is missing")
    key = role_name.strip().lower()
    if key not in _PORTAL_ROLES:
        raise AuthenticationError(f"Unrecognised role '{role_name.strip()}'")
    return _PORTAL_ROLES[key]


def resolve_actor(actor_id: Optional[str], role_name: Optional[str]) -> Actor:
    """Build an Actor from session-provided id and role. Raises AuthenticationError if either is unusable."""
    if not actor_id or not actor_id.strip():
        raise AuthenticationError("Caller identity is missing")
    return Actor(actor_id=actor_id.strip(), role=resolve_role(role_name))
