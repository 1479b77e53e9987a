"""Shipment ownership lookups. Owned by the wider portal; this service only reads them."""

from typing import List, Optional, Protocol


class ShipmentDirectory(Protocol):
    """Answers who owns a shipment and which vendor won its quote."""

    async def client_owns(self, shipment_id: str, client_id: str) -> bool:
        """True if the shipment exists and belongs to client_id."""
        ...

    async def winning_vendor(self, shipment_id: str) -> Optional[str]:
        """Vendor whose quote won the shipment, or None."""
        ...

    async def shipments_for_client(self, client_id: str) -> List[str]:
        ...

    async def shipments_won_by(self, vendor_id: str) -> List[str]:
        ...
