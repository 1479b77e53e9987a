"""Admin amendments API: review queue and decisions."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from freight_amendments.api.dependencies import (
    get_actor,
    get_amendment_queries,
    get_amendment_service,
    get_correlation_id,
)
from freight_amendments.application.amendment_queries import AmendmentQueries
from freight_amendments.application.amendment_service import AmendmentService
from freight_amendments.domain.models.amendment import AmendmentAction, AmendmentStatus
from freight_amendments.domain.schemas.amendment import (
    AdminDecisionRequest,
    AmendmentListResponse,
    AmendmentResponse,
)
from freight_amendments.domain.validators.amendment_validator import parse_status_filter
from freight_amendments.security.identity import Actor

router = APIRouter()


@router.get("", response_model=AmendmentListResponse)
async def list_amendments(
    actor: Annotated[Actor, Depends(get_actor)],
    queries: Annotated[AmendmentQueries, Depends(get_amendment_queries)],
    status: str = Query(AmendmentStatus.REQUESTED.value),
):
    """All amendments in one status (default `requested`); `status=all` lists everything."""
    amendments = await queries.admin_view(
        actor,
        status=parse_status_filter(status, default=AmendmentStatus.REQUESTED),
    )
    return AmendmentListResponse(amendments=amendments)


@router.put("/{amendment_id}", response_model=AmendmentResponse)
async def decide_amendment(
    amendment_id: str,
    body: AdminDecisionRequest,
    actor: Annotated[Actor, Depends(get_actor)],
    correlation_id: Annotated[str, Depends(get_correlation_id)],
    service: Annotated[AmendmentService, Depends(get_amendment_service)],
):
    return await service.admin_decide(
        actor=actor,
        amendment_id=amendment_id,
        action=AmendmentAction(body.action),
        correlation_id=correlation_id,
    )
