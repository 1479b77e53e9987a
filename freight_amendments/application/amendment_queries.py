"""Role-scoped read views over amendments. Pure reads, no state changes."""

from typing import List, Optional

from freight_amendments.application.amendment_repository import AmendmentRepository
from freight_amendments.application.shipment_directory import ShipmentDirectory
from freight_amendments.domain.exceptions import AmendmentNotFoundError, DomainValidationError
from freight_amendments.domain.models.amendment import Amendment, AmendmentStatus
from freight_amendments.domain.schemas.amendment import AmendmentResponse
from freight_amendments.security import rbac
from freight_amendments.security.identity import Actor
from freight_amendments.security.rbac import RBACService, Role


def _to_responses(amendments: List[Amendment]) -> List[AmendmentResponse]:
    return [AmendmentResponse.from_domain(a) for a in amendments]


class AmendmentQueries:
    """Admin, client and vendor views. Every view is filtered by an ownership predicate."""

    def __init__(
        self,
        repository: AmendmentRepository,
        shipments: ShipmentDirectory,
        rbac_service: RBACService,
    ) -> None:
        self._repository = repository
        self._shipments = shipments
        self._rbac = rbac_service

    async def admin_view(
        self,
        actor: Actor,
        status: Optional[AmendmentStatus] = AmendmentStatus.REQUESTED,
    ) -> List[AmendmentResponse]:
        """All amendments; status=None returns every status."""
        self._rbac.check_permission(actor.role, rbac.VIEW_ALL)
        return _to_responses(await self._repository.list_by_status(status))

    async def client_view(
        self,
        actor: Actor,
        status: Optional[AmendmentStatus] = None,
        pending_only: bool = False,
    ) -> List[AmendmentResponse]:
        """Amendments on the client's own shipments. pending_only narrows to `client_review`."""
        self._rbac.check_permission(actor.role, rbac.VIEW_CLIENT)
        if pending_only:
            if status is not None and status != AmendmentStatus.CLIENT_REVIEW:
                raise DomainValidationError(
                    f"pending_only conflicts with status filter '{status.value}'"
                )
            status = AmendmentStatus.CLIENT_REVIEW
        shipment_ids = await self._shipments.shipments_for_client(actor.actor_id)
        if not shipment_ids:
            return []
        return _to_responses(await self._repository.list_for_shipments(shipment_ids, status))

    async def vendor_view(
        self,
        actor: Actor,
        status: Optional[AmendmentStatus] = None,
    ) -> List[AmendmentResponse]:
        """Amendments on shipments whose quote this vendor won."""
        self._rbac.check_permission(actor.role, rbac.VIEW_VENDOR)
        shipment_ids = await self._shipments.shipments_won_by(actor.actor_id)
        if not shipment_ids:
            return []
        return _to_responses(await self._repository.list_for_shipments(shipment_ids, status))

    async def get(self, actor: Actor, amendment_id: str) -> AmendmentResponse:
        """Single amendment. Records the caller may not see are reported as not found."""
        amendment = await self._repository.get(amendment_id)
        if amendment is None or not await self._is_visible(actor, amendment):
            raise AmendmentNotFoundError(f"Amendment not found: {amendment_id}")
        return AmendmentResponse.from_domain(amendment)

    async def _is_visible(self, actor: Actor, amendment: Amendment) -> bool:
        if actor.role == Role.ADMIN:
            return True
        if actor.role == Role.CLIENT:
            return await self._shipments.client_owns(amendment.shipment_id, actor.actor_id)
        if actor.role == Role.VENDOR:
            return await self._shipments.winning_vendor(amendment.shipment_id) == actor.actor_id
        return False
