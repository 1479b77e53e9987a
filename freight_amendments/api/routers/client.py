"""Client amendments API: raise amendments on owned shipments and list them."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Header, Query

from freight_amendments.api.dependencies import (
    get_actor,
    get_amendment_queries,
    get_amendment_service,
    get_correlation_id,
)
from freight_amendments.application.amendment_queries import AmendmentQueries
from freight_amendments.application.amendment_service import AmendmentService
from freight_amendments.domain.schemas.amendment import (
    AmendmentCreateRequest,
    AmendmentListResponse,
    AmendmentResponse,
)
from freight_amendments.domain.validators.amendment_validator import parse_status_filter
from freight_amendments.security.identity import Actor

router = APIRouter()


@router.post("", response_model=AmendmentResponse, status_code=201)
async def request_amendment(
    body: AmendmentCreateRequest,
    actor: Annotated[Actor, Depends(get_actor)],
    correlation_id: Annotated[str, Depends(get_correlation_id)],
    service: Annotated[AmendmentService, Depends(get_amendment_service)],
    x_idempotency_key: Annotated[Optional[str], Header(alias="X-Idempotency-Key")] = None,
):
    """Create an amendment in `requested`. Idempotent when X-Idempotency-Key is sent."""
    return await service.create(
        actor=actor,
        shipment_id=body.shipment_id,
        reason=body.reason,
        attachment_ref=body.attachment_ref,
        correlation_id=correlation_id,
        idempotency_key=(x_idempotency_key or "").strip() or None,
    )


@router.get("", response_model=AmendmentListResponse)
async def list_client_amendments(
    actor: Annotated[Actor, Depends(get_actor)],
    queries: Annotated[AmendmentQueries, Depends(get_amendment_queries)],
    status: Optional[str] = Query(None),
    pending_only: bool = Query(False),
):
    amendments = await queries.client_view(
        actor,
        status=parse_status_filter(status),
        pending_only=pending_only,
    )
    return AmendmentListResponse(amendments=amendments)


@router.get("/pending", response_model=AmendmentListResponse)
async def list_pending_client_amendments(
    actor: Annotated[Actor, Depends(get_actor)],
    queries: Annotated[AmendmentQueries, Depends(get_amendment_queries)],
):
    """Amendments waiting in `client_review` on the caller's shipments."""
    amendments = await queries.client_view(actor, pending_only=True)
    return AmendmentListResponse(amendments=amendments)
