"""Vendor amendments API: amendments on won shipments and the vendor's response."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from freight_amendments.api.dependencies import (
    get_actor,
    get_amendment_queries,
    get_amendment_service,
    get_correlation_id,
)
from freight_amendments.application.amendment_queries import AmendmentQueries
from freight_amendments.application.amendment_service import AmendmentService
from freight_amendments.domain.models.amendment import AmendmentAction
from freight_amendments.domain.schemas.amendment import (
    AmendmentListResponse,
    AmendmentResponse,
    VendorResponseRequest,
)
from freight_amendments.domain.validators.amendment_validator import parse_status_filter
from freight_amendments.security.identity import Actor

router = APIRouter()


@router.get("", response_model=AmendmentListResponse)
async def list_vendor_amendments(
    actor: Annotated[Actor, Depends(get_actor)],
    queries: Annotated[AmendmentQueries, Depends(get_amendment_queries)],
    status: Optional[str] = Query(None),
):
    amendments = await queries.vendor_view(actor, status=parse_status_filter(status))
    return AmendmentListResponse(amendments=amendments)


@router.post("/{amendment_id}/respond", response_model=AmendmentResponse)
async def respond_to_amendment(
    amendment_id: str,
    body: VendorResponseRequest,
    actor: Annotated[Actor, Depends(get_actor)],
    correlation_id: Annotated[str, Depends(get_correlation_id)],
    service: Annotated[AmendmentService, Depends(get_amendment_service)],
):
    """Accept with cost/delay impact, or reject. Only the quote winner may respond."""
    return await service.vendor_respond(
        actor=actor,
        amendment_id=amendment_id,
        response=AmendmentAction(body.response),
        extra_cost=body.extra_cost,
        delay_days=body.delay_days,
        note=body.reason,
        correlation_id=correlation_id,
    )
