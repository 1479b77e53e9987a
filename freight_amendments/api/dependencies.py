"""FastAPI dependency injection: DB session, Redis, publisher, services, actor, correlation_id."""

import logging
from typing import Annotated, AsyncIterator, Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from freight_amendments.application.amendment_queries import AmendmentQueries
from freight_amendments.application.amendment_repository import AmendmentRepository
from freight_amendments.application.amendment_service import AmendmentService
from freight_amendments.application.notifier import AmendmentNotifier
from freight_amendments.application.shipment_directory import ShipmentDirectory
from freight_amendments.application.unit_of_work import UnitOfWork
from freight_amendments.config.settings import get_settings
from freight_amendments.governance.audit_logger import AuditLogger
from freight_amendments.governance.audit_repository import AuditRepository
from freight_amendments.governance.transition_authority import TransitionAuthority
from freight_amendments.infrastructure.cache.redis_client import RedisClient
from freight_amendments.infrastructure.database.amendment_repository_db import DbAmendmentRepository
from freight_amendments.infrastructure.database.audit_repository_db import DbAuditRepository
from freight_amendments.infrastructure.database.session import AsyncSessionLocal
from freight_amendments.infrastructure.database.shipment_directory_db import DbShipmentDirectory
from freight_amendments.infrastructure.database.unit_of_work_db import DbUnitOfWork
from freight_amendments.infrastructure.messaging.amendment_notifier import (
    LoggingAmendmentNotifier,
    RabbitMQAmendmentNotifier,
)
from freight_amendments.infrastructure.messaging.rabbitmq_publisher import RabbitMQPublisher
from freight_amendments.security.identity import Actor, resolve_actor
from freight_amendments.security.rbac import RBACService

_redis_client: RedisClient | None = None
_publisher: RabbitMQPublisher | None = None
_rbac = RBACService()


def get_redis_client() -> RedisClient:
    """Return singleton Redis client."""
    global _redis_client
    if _redis_client is None:
        _redis_client = RedisClient()
    return _redis_client


def get_publisher() -> RabbitMQPublisher:
    """Return singleton RabbitMQ publisher."""
    global _publisher
    if _publisher is None:
        _publisher = RabbitMQPublisher()
    return _publisher


async def get_session() -> AsyncIterator[AsyncSession]:
    """One session per request."""
    async with AsyncSessionLocal() as session:
        yield session


def get_amendment_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> AmendmentRepository:
    return DbAmendmentRepository(session)


def get_shipment_directory(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ShipmentDirectory:
    return DbShipmentDirectory(session)


def get_audit_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> AuditRepository:
    return DbAuditRepository(session)


def get_unit_of_work(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> UnitOfWork:
    """Commits the request session; shared with the repositories above."""
    return DbUnitOfWork(session)


def get_notifier(
    publisher: Annotated[RabbitMQPublisher, Depends(get_publisher)],
) -> AmendmentNotifier:
    if not get_settings().enable_notifications:
        return LoggingAmendmentNotifier()
    return RabbitMQAmendmentNotifier(publisher)


def get_amendment_service(
    repository: Annotated[AmendmentRepository, Depends(get_amendment_repository)],
    shipments: Annotated[ShipmentDirectory, Depends(get_shipment_directory)],
    audit_repository: Annotated[AuditRepository, Depends(get_audit_repository)],
    unit_of_work: Annotated[UnitOfWork, Depends(get_unit_of_work)],
    notifier: Annotated[AmendmentNotifier, Depends(get_notifier)],
    redis: Annotated[Optional[RedisClient], Depends(get_redis_client)],
) -> AmendmentService:
    """Build AmendmentService with injected repository, directory, authority, audit, unit of work, notifier, cache, logger."""
    return AmendmentService(
        repository=repository,
        shipments=shipments,
        authority=TransitionAuthority(_rbac),
        audit_logger=AuditLogger(audit_repository),
        unit_of_work=unit_of_work,
        notifier=notifier,
        logger=logging.getLogger("freight_amendments.application.amendment_service"),
        idempotency_cache=redis,
        idempotency_ttl=get_settings().idempotency_ttl_seconds,
    )


def get_amendment_queries(
    repository: Annotated[AmendmentRepository, Depends(get_amendment_repository)],
    shipments: Annotated[ShipmentDirectory, Depends(get_shipment_directory)],
) -> AmendmentQueries:
    return AmendmentQueries(repository=repository, shipments=shipments, rbac_service=_rbac)


def get_actor(request: Request) -> Actor:
    """Resolve the caller from request.state (set by middleware). Raises AuthenticationError."""
    return resolve_actor(
        getattr(request.state, "user_id", None),
        getattr(request.state, "user_role", None),
    )


def get_correlation_id(request: Request) -> str:
    """Extract correlation_id from request.state (set by middleware)."""
    return getattr(request.state, "correlation_id", "") or ""
