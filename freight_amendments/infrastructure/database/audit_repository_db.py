"""DB-backed audit repository. Append-only inserts into amendment_audit_log."""

from sqlalchemy.ext.asyncio import AsyncSession

from freight_amendments.governance.audit_models import AuditRecord
from freight_amendments.infrastructure.database.models import AmendmentAuditLog


class DbAuditRepository:
    """Implements AuditRepository. Rows are inserted, never updated, and commit with the transition."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def save(self, record: AuditRecord) -> None:
        self._session.add(
            AmendmentAuditLog(
                amendment_id=record.amendment_id,
                shipment_id=record.shipment_id,
                actor=record.actor,
                actor_role=record.actor_role,
                action=record.action,
                from_status=record.from_status,
                to_status=record.to_status,
                reason=record.reason,
                correlation_id=record.correlation_id,
                metadata_=record.metadata,
                timestamp_utc=record.timestamp_utc,
            )
        )
        await self._session.flush()
