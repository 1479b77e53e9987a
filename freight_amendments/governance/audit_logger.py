"""Immutable audit logging for amendment transitions. No FastAPI."""

from datetime import datetime, timezone

from freight_amendments.domain.models.amendment import Amendment, AmendmentAction, AmendmentStatus
from freight_amendments.governance.audit_models import AuditRecord
from freight_amendments.governance.audit_repository import AuditRepository
from freight_amendments.security.identity import Actor


class AuditLogger:
    """
    Writes immutable audit records via repository.
    Must include: who, what, when (UTC), why, correlation_id.
    """

    def __init__(self, repository: AuditRepository) -> None:
        self._repository = repository

    async def log_transition(
        self,
        *,
        actor: Actor,
        action: AmendmentAction,
        amendment: Amendment,
        from_status: AmendmentStatus | None,
        reason: str | None,
        correlation_id: str,
        metadata: dict | None = None,
    ) -> AuditRecord:
        """Write immutable audit record for a committed transition. Timestamp is UTC."""
        record = AuditRecord(
            actor=actor.actor_id,
            actor_role=actor.role.value,
            action=action.value,
            amendment_id=amendment.id,
            shipment_id=amendment.shipment_id,
            from_status=from_status.value if from_status is not None else None,
            to_status=amendment.status.value,
            reason=reason,
            correlation_id=correlation_id,
            metadata=metadata,
            timestamp_utc=datetime.now(timezone.utc),
        )
        await self._repository.save(record)
        return record
