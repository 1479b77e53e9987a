"""Amendment lifecycle notifier interface. Application layer depends on this protocol."""

from typing import Protocol

from freight_amendments.domain.models.amendment import Amendment


class AmendmentNotifier(Protocol):
    """Tells the other portal parties that an amendment moved. Best-effort."""

    async def notify(self, amendment: Amendment, correlation_id: str) -> None:
        ...
