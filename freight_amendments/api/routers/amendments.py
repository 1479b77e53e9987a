# freight_amendments/api/routers/amendments.py

from typing import Annotated

from fastapi import APIRouter, Depends

from freight_amendments.api.dependencies import get_actor, get_amendment_queries
from freight_amendments.application.amendment_queries import AmendmentQueries
from freight_amendments.domain.schemas.amendment import AmendmentResponse
from freight_amendments.security.identity import Actor

router = APIRouter()


@router.get("/{amendment_id}", response_model=AmendmentResponse)
async def get_amendment(
    amendment_id: str,
    actor: Annotated[Actor, Depends(get_actor)],
    queries: Annotated[AmendmentQueries, Depends(get_amendment_queries)],
):
    """Amendment detail, visible to admins, the owning client and the winning vendor."""
    return await queries.get(actor, amendment_id)
