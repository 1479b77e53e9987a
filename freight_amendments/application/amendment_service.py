"""Amendment application service: transaction boundary for every status change."""

import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, AsyncIterator, Dict, Optional, Protocol

from freight_amendments.application.amendment_repository import AmendmentRepository
from freight_amendments.application.exceptions import ConcurrentModificationError
from freight_amendments.application.notifier import AmendmentNotifier
from freight_amendments.application.shipment_directory import ShipmentDirectory
from freight_amendments.application.unit_of_work import UnitOfWork
from freight_amendments.domain.exceptions import AmendmentNotFoundError
from freight_amendments.domain.models.amendment import Amendment, AmendmentAction, AmendmentStatus
from freight_amendments.domain.schemas.amendment import AmendmentResponse
from freight_amendments.domain.validators.amendment_validator import (
    validate_amendment,
    validate_reason,
    validate_vendor_response,
)
from freight_amendments.governance.audit_logger import AuditLogger
from freight_amendments.governance.transition_authority import TransitionAuthority
from freight_amendments.security import rbac
from freight_amendments.security.exceptions import AuthorizationError
from freight_amendments.security.identity import Actor

IDEMPOTENCY_PREFIX = "idempotency:amendment:"
IDEMPOTENCY_TTL = 300  # 5 minutes


class IdempotencyCache(Protocol):
    async def get_cache(self, key: str) -> Optional[str]: ...
    async def set_cache(self, key: str, value: str, ttl: int = 300) -> None: ...


def _idempotency_key(client_id: str, idempotency_key: str) -> str:
    return f"{IDEMPOTENCY_PREFIX}{client_id}:{idempotency_key}"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class AmendmentService:
    """
    Create, admin_decide, vendor_respond. No HTTP, no FastAPI.
    Each transition is read -> authorize -> conditional write guarded by the status that was read.
    The write and its audit record commit together; notification follows the commit and its
    failure never fails the call.
    """

    def __init__(
        self,
        repository: AmendmentRepository,
        shipments: ShipmentDirectory,
        authority: TransitionAuthority,
        audit_logger: AuditLogger,
        unit_of_work: UnitOfWork,
        notifier: AmendmentNotifier,
        logger: logging.Logger,
        idempotency_cache: Optional[IdempotencyCache] = None,
        idempotency_ttl: int = IDEMPOTENCY_TTL,
    ) -> None:
        self._repository = repository
        self._shipments = shipments
        self._authority = authority
        self._audit = audit_logger
        self._uow = unit_of_work
        self._notifier = notifier
        self._logger = logger
        self._cache = idempotency_cache
        self._idempotency_ttl = idempotency_ttl

    async def create(
        self,
        *,
        actor: Actor,
        shipment_id: str,
        reason: str,
        correlation_id: str,
        attachment_ref: Optional[str] = None,
        idempotency_key: Optional[str] = None,
    ) -> AmendmentResponse:
        """Client raises an amendment on a shipment it owns. New record starts in `requested`."""
        status = self._authority.authorize(
            operation=rbac.CREATE,
            role=actor.role,
            current=None,
            action=AmendmentAction.CREATE,
        )

        cache_key = None
        if self._cache is not None and idempotency_key:
            cache_key = _idempotency_key(actor.actor_id, idempotency_key)
            cached = await self._cache.get_cache(cache_key)
            if cached:
                self._logger.info(
                    "idempotent_replay",
                    extra={"actor_id": actor.actor_id, "correlation_id": correlation_id},
                )
                return AmendmentResponse.model_validate_json(cached)

        if not await self._shipments.client_owns(shipment_id, actor.actor_id):
            raise AmendmentNotFoundError(f"Shipment not found: {shipment_id}")
        reason = validate_reason(reason)

        amendment = Amendment(
            id=str(uuid.uuid4()),
            shipment_id=shipment_id,
            requested_by=actor.actor_id,
            reason=reason,
            status=status,
            created_at=_now(),
            attachment_ref=attachment_ref,
        )
        async with self._transaction():
            stored = await self._repository.insert(amendment)
            await self._audit.log_transition(
                actor=actor,
                action=AmendmentAction.CREATE,
                amendment=stored,
                from_status=None,
                reason=reason,
                correlation_id=correlation_id,
            )
        self._logger.info(
            "amendment_created",
            extra={
                "amendment_id": stored.id,
                "shipment_id": stored.shipment_id,
                "actor_id": actor.actor_id,
                "correlation_id": correlation_id,
            },
        )
        await self._after_commit(
            actor=actor,
            action=AmendmentAction.CREATE,
            amendment=stored,
            from_status=None,
            correlation_id=correlation_id,
        )

        response = AmendmentResponse.from_domain(stored)
        if cache_key is not None:
            await self._cache.set_cache(
                cache_key,
                response.model_dump_json(),
                ttl=self._idempotency_ttl,
            )
        return response

    async def admin_decide(
        self,
        *,
        actor: Actor,
        amendment_id: str,
        action: AmendmentAction,
        correlation_id: str,
    ) -> AmendmentResponse:
        """Admin approve/reject from `requested`, or push from `admin_review`. Status and review stamp only."""
        self._authority.require(actor.role, rbac.DECIDE)
        current = await self._load(amendment_id)
        new_status = self._authority.authorize(
            operation=rbac.DECIDE,
            role=actor.role,
            current=current.status,
            action=action,
        )
        updated = await self._transition(
            actor=actor,
            action=action,
            current=current,
            fields={
                "status": new_status,
                "admin_reviewed_by": actor.actor_id,
                "admin_reviewed_at": _now(),
            },
            reason=None,
            correlation_id=correlation_id,
        )
        return AmendmentResponse.from_domain(updated)

    async def vendor_respond(
        self,
        *,
        actor: Actor,
        amendment_id: str,
        response: AmendmentAction,
        note: str,
        correlation_id: str,
        extra_cost: Optional[Decimal] = None,
        delay_days: Optional[int] = None,
    ) -> AmendmentResponse:
        """
        Winning vendor accepts (with cost/delay impact) or rejects an amendment in `client_review`.
        Missing impact values on approve default to zero so accepted records always carry both.
        """
        self._authority.require(actor.role, rbac.RESPOND)
        note = validate_vendor_response(extra_cost, delay_days, note)
        current = await self._load(amendment_id)

        winner = await self._shipments.winning_vendor(current.shipment_id)
        if winner is None or winner != actor.actor_id:
            raise AuthorizationError(
                f"Vendor {actor.actor_id} is not the assigned vendor for shipment {current.shipment_id}"
            )

        new_status = self._authority.authorize(
            operation=rbac.RESPOND,
            role=actor.role,
            current=current.status,
            action=response,
        )
        if new_status == AmendmentStatus.ACCEPTED:
            impact = {
                "extra_cost": extra_cost if extra_cost is not None else Decimal("0"),
                "delay_days": delay_days if delay_days is not None else 0,
            }
        else:
            impact = {"extra_cost": None, "delay_days": None}

        updated = await self._transition(
            actor=actor,
            action=response,
            current=current,
            fields={
                "status": new_status,
                "vendor_note": note,
                "vendor_id": actor.actor_id,
                "vendor_reply_at": _now(),
                **impact,
            },
            reason=note,
            correlation_id=correlation_id,
            metadata={
                "extra_cost": str(impact["extra_cost"]) if impact["extra_cost"] is not None else None,
                "delay_days": impact["delay_days"],
            },
        )
        return AmendmentResponse.from_domain(updated)

    async def _load(self, amendment_id: str) -> Amendment:
        amendment = await self._repository.get(amendment_id)
        if amendment is None:
            raise AmendmentNotFoundError(f"Amendment not found: {amendment_id}")
        return amendment

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[None]:
        """Commit on success; any failure inside discards the amendment write and its audit row."""
        try:
            yield
            await self._uow.commit()
        except Exception:
            await self._uow.rollback()
            raise

    async def _transition(
        self,
        *,
        actor: Actor,
        action: AmendmentAction,
        current: Amendment,
        fields: Dict[str, Any],
        reason: Optional[str],
        correlation_id: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Amendment:
        async with self._transaction():
            updated = await self._apply(current, fields, correlation_id=correlation_id)
            await self._audit.log_transition(
                actor=actor,
                action=action,
                amendment=updated,
                from_status=current.status,
                reason=reason,
                correlation_id=correlation_id,
                metadata=metadata,
            )
        await self._after_commit(
            actor=actor,
            action=action,
            amendment=updated,
            from_status=current.status,
            correlation_id=correlation_id,
        )
        return updated

    async def _apply(
        self,
        current: Amendment,
        fields: Dict[str, Any],
        *,
        correlation_id: str,
    ) -> Amendment:
        """Conditional write guarded by the status we decided on. Zero rows means somebody else won."""
        validate_amendment(current.evolve(**fields))
        updated = await self._repository.update_where(current.id, current.status, fields)
        if updated is not None:
            return updated
        latest = await self._repository.get(current.id)
        if latest is None:
            raise AmendmentNotFoundError(f"Amendment not found: {current.id}")
        self._logger.warning(
            "amendment_update_conflict",
            extra={
                "amendment_id": current.id,
                "expected_status": current.status.value,
                "stored_status": latest.status.value,
                "correlation_id": correlation_id,
            },
        )
        raise ConcurrentModificationError(
            f"Amendment {current.id} changed concurrently "
            f"(expected {current.status.value}, found {latest.status.value}); re-read and retry"
        )

    async def _after_commit(
        self,
        *,
        actor: Actor,
        action: AmendmentAction,
        amendment: Amendment,
        from_status: Optional[AmendmentStatus],
        correlation_id: str,
    ) -> None:
        self._logger.info(
            "amendment_transitioned",
            extra={
                "amendment_id": amendment.id,
                "action": action.value,
                "from_status": from_status.value if from_status is not None else None,
                "to_status": amendment.status.value,
                "actor_id": actor.actor_id,
                "correlation_id": correlation_id,
            },
        )

        # Best-effort: the transition is already committed.
        try:
            await self._notifier.notify(amendment, correlation_id)
        except Exception as e:
            self._logger.error(
                "amendment_notification_failed",
                extra={
                    "amendment_id": amendment.id,
                    "status": amendment.status.value,
                    "correlation_id": correlation_id,
                    "error": str(e),
                },
            )
