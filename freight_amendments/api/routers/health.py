# freight_amendments/api/routers/health.py

from fastapi import APIRouter, Request

from freight_amendments.config.settings import get_settings

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    """Liveness check. No caller identity required."""
    settings = get_settings()
    return {
        "status": "ok",
        "correlation_id": request.state.correlation_id,
        "environment": settings.environment,
        "version": settings.version,
    }
