"""Role-based access control for amendment operations. No FastAPI."""

from enum import Enum

from freight_amendments.security.exceptions import AuthorizationError


class Role(Enum):
    CLIENT = "CLIENT"
    VENDOR = "VENDOR"
    ADMIN = "ADMIN"


CREATE = "amendment.create"
DECIDE = "amendment.decide"
RESPOND = "amendment.respond"
VIEW_ALL = "amendment.view_all"
VIEW_CLIENT = "amendment.view_client"
VIEW_VENDOR = "amendment.view_vendor"

# Permission matrix:
# Role     Create  Decide  Respond  ViewAll  ViewClient  ViewVendor
# CLIENT   ✓       ✗       ✗        ✗        ✓           ✗
# ADMIN    ✗       ✓       ✗        ✓        ✗           ✗
# VENDOR   ✗       ✗       ✓        ✗        ✗           ✓

_ACTION_PERMISSIONS: dict[tuple[Role, str], bool] = {
    (Role.CLIENT, CREATE): True,
    (Role.CLIENT, DECIDE): False,
    (Role.CLIENT, RESPOND): False,
    (Role.CLIENT, VIEW_ALL): False,
    (Role.CLIENT, VIEW_CLIENT): True,
    (Role.CLIENT, VIEW_VENDOR): False,
    (Role.ADMIN, CREATE): False,
    (Role.ADMIN, DECIDE): True,
    (Role.ADMIN, RESPOND): False,
    (Role.ADMIN, VIEW_ALL): True,
    (Role.ADMIN, VIEW_CLIENT): False,
    (Role.ADMIN, VIEW_VENDOR): False,
    (Role.VENDOR, CREATE): False,
    (Role.VENDOR, DECIDE): False,
    (Role.VENDOR, RESPOND): True,
    (Role.VENDOR, VIEW_ALL): False,
    (Role.VENDOR, VIEW_CLIENT): False,
    (Role.VENDOR, VIEW_VENDOR): True,
}


class RBACService:
    """Check permission for role and action. Raise AuthorizationError if invalid."""

    def check_permission(self, role: Role, action: str) -> None:
        """Raises AuthorizationError if role does not have permission for action."""
        key = (role, action)
        if key not in _ACTION_PERMISSIONS or not _ACTION_PERMISSIONS[key]:
            raise AuthorizationError(
                f"Role {role.value} does not have permission for action '{action}'"
            )
