"""Shipment ownership lookups against the portal's shipments and quotes tables."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from freight_amendments.infrastructure.database.models import Quote, Shipment


class DbShipmentDirectory:
    """Implements ShipmentDirectory. Read-only."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def client_owns(self, shipment_id: str, client_id: str) -> bool:
        stmt = select(Shipment.id).where(
            Shipment.id == shipment_id,
            Shipment.client_id == client_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def winning_vendor(self, shipment_id: str) -> Optional[str]:
        stmt = (
            select(Quote.vendor_id)
            .where(Quote.shipment_id == shipment_id, Quote.is_winner.is_(True))
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def shipments_for_client(self, client_id: str) -> List[str]:
        result = await self._session.execute(
            select(Shipment.id).where(Shipment.client_id == client_id)
        )
        return list(result.scalars().all())

    async def shipments_won_by(self, vendor_id: str) -> List[str]:
        result = await self._session.execute(
            select(Quote.shipment_id).where(
                Quote.vendor_id == vendor_id,
                Quote.is_winner.is_(True),
            )
        )
        return list(result.scalars().all())
