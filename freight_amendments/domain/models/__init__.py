"""Domain models. Pure business entities."""

from freight_amendments.domain.models.amendment import (
    TERMINAL_STATUSES,
    Amendment,
    AmendmentAction,
    AmendmentStatus,
)

__all__ = [
    "TERMINAL_STATUSES",
    "Amendment",
    "AmendmentAction",
    "AmendmentStatus",
]
