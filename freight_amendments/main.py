# freight_amendments/main.py

import logging

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from freight_amendments.api.middleware import (
    ActorContextMiddleware,
    AuditTriggerMiddleware,
    CorrelationIdMiddleware,
)
from freight_amendments.api.routers import admin, amendments, client, health, vendor
from freight_amendments.application.exceptions import ApplicationError, ConcurrentModificationError
from freight_amendments.config.logging import configure_logging
from freight_amendments.config.settings import get_settings
from freight_amendments.domain.exceptions import (
    AmendmentNotFoundError,
    DomainError,
    DomainValidationError,
    InvalidStatusTransitionError,
)
from freight_amendments.security.exceptions import (
    AuthenticationError,
    AuthorizationError,
    SecurityError,
)

logger = logging.getLogger(__name__)

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    debug=settings.debug,
)

# Middleware order: last added runs first (outermost). Request flow: CorrelationId -> ActorContext -> AuditTrigger.
app.add_middleware(AuditTriggerMiddleware)
app.add_middleware(ActorContextMiddleware)
app.add_middleware(CorrelationIdMiddleware)


def _tagged(status_code: int, code: str, detail) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": code, "detail": detail})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request, exc: RequestValidationError):
    return _tagged(422, DomainValidationError.code, jsonable_encoder(exc.errors()))


@app.exception_handler(DomainValidationError)
async def domain_validation_error_handler(request, exc: DomainValidationError):
    return _tagged(422, exc.code, exc.message)


@app.exception_handler(AmendmentNotFoundError)
async def not_found_error_handler(request, exc: AmendmentNotFoundError):
    return _tagged(404, exc.code, exc.message)


@app.exception_handler(InvalidStatusTransitionError)
async def invalid_transition_error_handler(request, exc: InvalidStatusTransitionError):
    return _tagged(409, exc.code, exc.message)


@app.exception_handler(DomainError)
async def domain_error_handler(request, exc: DomainError):
    return _tagged(400, exc.code, exc.message)


@app.exception_handler(AuthenticationError)
async def authentication_error_handler(request, exc: AuthenticationError):
    return _tagged(401, exc.code, exc.message)


@app.exception_handler(AuthorizationError)
async def authorization_error_handler(request, exc: AuthorizationError):
    return _tagged(403, exc.code, exc.message)


@app.exception_handler(SecurityError)
async def security_error_handler(request, exc: SecurityError):
    return _tagged(403, exc.code, exc.message)


@app.exception_handler(ConcurrentModificationError)
async def conflict_error_handler(request, exc: ConcurrentModificationError):
    return _tagged(409, exc.code, exc.message)


@app.exception_handler(ApplicationError)
async def application_error_handler(request, exc: ApplicationError):
    return _tagged(500, exc.code, exc.message)


@app.exception_handler(Exception)
async def unexpected_error_handler(request, exc: Exception):
    logger.error("unhandled_error", exc_info=exc)
    return _tagged(500, "internal_error", "Internal server error")


# Routers: /health, /client/amendments, /admin/amendments, /vendor/amendments, /amendments
app.include_router(health.router)
app.include_router(client.router, prefix="/client/amendments")
app.include_router(admin.router, prefix="/admin/amendments")
app.include_router(vendor.router, prefix="/vendor/amendments")
app.include_router(amendments.router, prefix="/amendments")
