"""Amendment repository protocol. Application layer depends on this; infrastructure implements it."""

from typing import Any, Dict, List, Optional, Protocol, Sequence

from freight_amendments.domain.models.amendment import Amendment, AmendmentStatus


class AmendmentRepository(Protocol):
    """Persistence for amendment records. Rows are never deleted."""

    async def get(self, amendment_id: str) -> Optional[Amendment]:
        """Return the amendment or None if not found."""
        ...

    async def insert(self, amendment: Amendment) -> Amendment:
        """Stage a new amendment and return it as stored. Visible to others after UnitOfWork.commit."""
        ...

    async def update_where(
        self,
        amendment_id: str,
        expected_status: AmendmentStatus,
        fields: Dict[str, Any],
    ) -> Optional[Amendment]:
        """
        Atomically apply fields only if the stored status still equals expected_status.
        Returns the updated amendment, or None when nothing matched (status moved on, or row absent).
        The write is part of the current unit of work and is not committed here.
        """
        ...

    async def list_by_status(self, status: Optional[AmendmentStatus]) -> List[Amendment]:
        """All amendments, optionally filtered by status, oldest first."""
        ...

    async def list_for_shipments(
        self,
        shipment_ids: Sequence[str],
        status: Optional[AmendmentStatus] = None,
    ) -> List[Amendment]:
        """Amendments on the given shipments, optionally filtered by status, oldest first."""
        ...
