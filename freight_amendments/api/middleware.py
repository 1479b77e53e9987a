"""API middleware: correlation ID, actor context, request audit."""

import json
import logging
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from freight_amendments.core.context import actor_id_ctx, correlation_id_ctx

logger = logging.getLogger(__name__)

USER_ID_HEADER = "X-User-ID"
USER_ROLE_HEADER = "X-User-Role"
CORRELATION_HEADER = "X-Correlation-ID"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Generate or preserve correlation ID; attach to request.state, response header, and logging context."""

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id
        correlation_id_ctx.set(correlation_id)

        response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


class ActorContextMiddleware(BaseHTTPMiddleware):
    """
    Copy the session layer's X-User-ID / X-User-Role onto request.state and the logging context.
    Resolution (and the 401) happens in the get_actor dependency so errors share one format.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        user_id = (request.headers.get(USER_ID_HEADER) or "").strip() or None
        request.state.user_id = user_id
        request.state.user_role = (request.headers.get(USER_ROLE_HEADER) or "").strip() or None
        actor_id_ctx.set(user_id)
        return await call_next(request)


class AuditTriggerMiddleware(BaseHTTPMiddleware):
    """After response: log structured audit event (correlation_id, actor, path, method, status_code)."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        audit_event = {
            "event": "request_audit",
            "correlation_id": getattr(request.state, "correlation_id", None),
            "actor_id": getattr(request.state, "user_id", None),
            "actor_role": getattr(request.state, "user_role", None),
            "path": request.url.path,
            "method": request.method,
            "status_code": response.status_code,
        }
        logger.info(json.dumps(audit_event))
        return response
