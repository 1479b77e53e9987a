"""
Single place that decides amendment status changes.

Every code path that moves an amendment goes through TransitionAuthority.authorize:
first the role's capability for the operation (AuthorizationError), then the
(current status, role, action) table (InvalidStatusTransitionError). No FastAPI.
"""

from typing import Dict, Optional, Tuple

from freight_amendments.domain.exceptions import InvalidStatusTransitionError
from freight_amendments.domain.models.amendment import AmendmentAction, AmendmentStatus
from freight_amendments.security.rbac import RBACService, Role

_TransitionKey = Tuple[Optional[AmendmentStatus], Role, AmendmentAction]

_TRANSITIONS: Dict[_TransitionKey, AmendmentStatus] = {
    (None, Role.CLIENT, AmendmentAction.CREATE): AmendmentStatus.REQUESTED,
    (AmendmentStatus.REQUESTED, Role.ADMIN, AmendmentAction.APPROVE): AmendmentStatus.ADMIN_REVIEW,
    (AmendmentStatus.REQUESTED, Role.ADMIN, AmendmentAction.REJECT): AmendmentStatus.REJECTED,
    (AmendmentStatus.ADMIN_REVIEW, Role.ADMIN, AmendmentAction.PUSH): AmendmentStatus.CLIENT_REVIEW,
    (AmendmentStatus.CLIENT_REVIEW, Role.VENDOR, AmendmentAction.APPROVE): AmendmentStatus.ACCEPTED,
    (AmendmentStatus.CLIENT_REVIEW, Role.VENDOR, AmendmentAction.REJECT): AmendmentStatus.REJECTED,
}


def next_status(
    current: Optional[AmendmentStatus],
    role: Role,
    action: AmendmentAction,
) -> AmendmentStatus:
    """Look up the resulting status. Raises InvalidStatusTransitionError if no row matches."""
    key = (current, role, action)
    if key not in _TRANSITIONS:
        source = current.value if current is not None else "(none)"
        raise InvalidStatusTransitionError(
            f"Invalid transition: {role.value} cannot {action.value} an amendment in status {source}"
        )
    return _TRANSITIONS[key]


def legal_actions(current: Optional[AmendmentStatus], role: Role) -> frozenset:
    """Actions the role may take from current. Empty for terminal states."""
    return frozenset(
        action for (status, r, action) in _TRANSITIONS if status == current and r == role
    )


class TransitionAuthority:
    """Capability check plus state table. Pure decision; callers persist the result."""

    def __init__(self, rbac: RBACService) -> None:
        self._rbac = rbac

    def require(self, role: Role, operation: str) -> None:
        """Capability check alone, for callers that must fail fast before loading the record."""
        self._rbac.check_permission(role, operation)

    def authorize(
        self,
        *,
        operation: str,
        role: Role,
        current: Optional[AmendmentStatus],
        action: AmendmentAction,
    ) -> AmendmentStatus:
        """Return the next status or raise AuthorizationError / InvalidStatusTransitionError."""
        self._rbac.check_permission(role, operation)
        return next_status(current, role, action)
