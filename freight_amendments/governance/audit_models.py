"""Immutable audit record model. Domain-level immutability."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class AuditRecord:
    """
    Immutable audit record for one amendment transition: who, what, when (UTC), why, correlation_id.
    """

    actor: str
    actor_role: str
    action: str
    amendment_id: str
    shipment_id: str
    from_status: Optional[str]
    to_status: str
    reason: Optional[str]
    correlation_id: str
    metadata: Optional[Dict[str, Any]]
    timestamp_utc: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Structured representation for JSON logging."""
        return {
            "actor": self.actor,
            "actor_role": self.actor_role,
            "action": self.action,
            "amendment_id": self.amendment_id,
            "shipment_id": self.shipment_id,
            "from_status": self.from_status,
            "to_status": self.to_status,
            "reason": self.reason,
            "correlation_id": self.correlation_id,
            "metadata": self.metadata,
            "timestamp_utc": self.timestamp_utc.isoformat(),
        }
