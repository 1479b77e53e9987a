"""Domain model for shipment amendments. Pure business semantics, no ORM or infrastructure."""

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class AmendmentStatus(str, Enum):
    """Lifecycle status. Only the transition authority decides the next value."""

    REQUESTED = "requested"
    ADMIN_REVIEW = "admin_review"
    CLIENT_REVIEW = "client_review"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({AmendmentStatus.ACCEPTED, AmendmentStatus.REJECTED})


class AmendmentAction(str, Enum):
    """Actions an actor can request against an amendment."""

    CREATE = "create"
    APPROVE = "approve"
    REJECT = "reject"
    PUSH = "push"


@dataclass(frozen=True)
class Amendment:
    """
    A requested change to an in-progress shipment.
    Immutable; every transition produces a new instance via `evolve`.
    """

    id: str
    shipment_id: str
    requested_by: str
    reason: str
    status: AmendmentStatus
    created_at: datetime
    attachment_ref: Optional[str] = None
    extra_cost: Optional[Decimal] = None
    delay_days: Optional[int] = None
    vendor_note: Optional[str] = None
    vendor_id: Optional[str] = None
    vendor_reply_at: Optional[datetime] = None
    admin_reviewed_by: Optional[str] = None
    admin_reviewed_at: Optional[datetime] = None

    def evolve(self, **changes) -> "Amendment":
        return replace(self, **changes)
