"""DB-backed amendment repository. Persists amendments to PostgreSQL (amendments table)."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from freight_amendments.domain.models.amendment import Amendment, AmendmentStatus
from freight_amendments.infrastructure.database.models import AmendmentRecord

# Columns a transition may write. Identity, ownership and the client's reason are immutable.
_MUTABLE_COLUMNS = frozenset(
    {
        "status",
        "extra_cost",
        "delay_days",
        "vendor_note",
        "vendor_id",
        "vendor_reply_at",
        "admin_reviewed_by",
        "admin_reviewed_at",
    }
)


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_domain(orm: AmendmentRecord) -> Amendment:
    return Amendment(
        id=orm.id,
        shipment_id=orm.shipment_id,
        requested_by=orm.requested_by,
        reason=orm.reason,
        status=AmendmentStatus(orm.status),
        created_at=_aware(orm.created_at),
        attachment_ref=orm.attachment_ref,
        extra_cost=orm.extra_cost,
        delay_days=orm.delay_days,
        vendor_note=orm.vendor_note,
        vendor_id=orm.vendor_id,
        vendor_reply_at=_aware(orm.vendor_reply_at),
        admin_reviewed_by=orm.admin_reviewed_by,
        admin_reviewed_at=_aware(orm.admin_reviewed_at),
    )


def _column_values(fields: Dict[str, Any]) -> Dict[str, Any]:
    unknown = set(fields) - _MUTABLE_COLUMNS
    if unknown:
        raise ValueError(f"Amendment columns are not updatable: {sorted(unknown)}")
    return {k: (v.value if isinstance(v, Enum) else v) for k, v in fields.items()}


class DbAmendmentRepository:
    """
    Implements AmendmentRepository on an AsyncSession. Transitions use a status-guarded UPDATE.
    Writes are flushed, never committed: DbUnitOfWork commits them together with the audit row.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, amendment_id: str) -> Optional[Amendment]:
        stmt = (
            select(AmendmentRecord)
            .where(AmendmentRecord.id == amendment_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        orm = result.scalar_one_or_none()
        if orm is None:
            return None
        return _to_domain(orm)

    async def insert(self, amendment: Amendment) -> Amendment:
        orm = AmendmentRecord(
            id=amendment.id,
            shipment_id=amendment.shipment_id,
            requested_by=amendment.requested_by,
            reason=amendment.reason,
            attachment_ref=amendment.attachment_ref,
            status=amendment.status.value,
            extra_cost=amendment.extra_cost,
            delay_days=amendment.delay_days,
            created_at=amendment.created_at,
        )
        self._session.add(orm)
        await self._session.flush()
        await self._session.refresh(orm)
        return _to_domain(orm)

    async def update_where(
        self,
        amendment_id: str,
        expected_status: AmendmentStatus,
        fields: Dict[str, Any],
    ) -> Optional[Amendment]:
        """UPDATE ... WHERE id = :id AND status = :expected. Zero rows -> None. The caller commits."""
        stmt = (
            update(AmendmentRecord)
            .where(
                AmendmentRecord.id == amendment_id,
                AmendmentRecord.status == expected_status.value,
            )
            .values(**_column_values(fields))
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            return None
        return await self.get(amendment_id)

    async def list_by_status(self, status: Optional[AmendmentStatus]) -> List[Amendment]:
        stmt = select(AmendmentRecord)
        if status is not None:
            stmt = stmt.where(AmendmentRecord.status == status.value)
        stmt = stmt.order_by(AmendmentRecord.created_at)
        result = await self._session.execute(stmt)
        return [_to_domain(orm) for orm in result.scalars().all()]

    async def list_for_shipments(
        self,
        shipment_ids: Sequence[str],
        status: Optional[AmendmentStatus] = None,
    ) -> List[Amendment]:
        if not shipment_ids:
            return []
        stmt = select(AmendmentRecord).where(AmendmentRecord.shipment_id.in_(list(shipment_ids)))
        if status is not None:
            stmt = stmt.where(AmendmentRecord.status == status.value)
        stmt = stmt.order_by(AmendmentRecord.created_at)
        result = await self._session.execute(stmt)
        return [_to_domain(orm) for orm in result.scalars().all()]
