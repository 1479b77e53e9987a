"""Shared fixtures: in-memory amendment store, shipment directory, audit store, actors."""

import asyncio
from typing import Any, Dict, List, Optional, Sequence
from unittest.mock import AsyncMock, MagicMock

import pytest

from freight_amendments.application.amendment_queries import AmendmentQueries
from freight_amendments.application.amendment_service import AmendmentService
from freight_amendments.domain.models.amendment import Amendment, AmendmentStatus
from freight_amendments.governance.audit_logger import AuditLogger
from freight_amendments.governance.audit_models import AuditRecord
from freight_amendments.governance.transition_authority import TransitionAuthority
from freight_amendments.security.identity import Actor
from freight_amendments.security.rbac import RBACService, Role

CLIENT_ID = "client-1"
OTHER_CLIENT_ID = "client-2"
VENDOR_ID = "vendor-1"
OTHER_VENDOR_ID = "vendor-2"
ADMIN_ID = "admin-1"
SHIPMENT_ID = "S1"
OTHER_SHIPMENT_ID = "S2"


class InMemoryAmendmentRepository:
    """
    Dict-backed AmendmentRepository. Writes are staged until InMemoryUnitOfWork commits them.
    update_where checks and writes without yielding, like a row lock.
    """

    def __init__(self):
        self.rows: Dict[str, Amendment] = {}
        self._staged: Dict[str, Amendment] = {}

    def _visible(self) -> Dict[str, Amendment]:
        return {**self.rows, **self._staged}

    def commit(self) -> None:
        self.rows.update(self._staged)
        self._staged.clear()

    def rollback(self) -> None:
        self._staged.clear()

    async def get(self, amendment_id: str) -> Optional[Amendment]:
        row = self._visible().get(amendment_id)
        # Yield after reading so concurrent callers can act on the same stale snapshot.
        await asyncio.sleep(0)
        return row

    async def insert(self, amendment: Amendment) -> Amendment:
        self._staged[amendment.id] = amendment
        return amendment

    async def update_where(
        self,
        amendment_id: str,
        expected_status: AmendmentStatus,
        fields: Dict[str, Any],
    ) -> Optional[Amendment]:
        row = self._visible().get(amendment_id)
        if row is None or row.status != expected_status:
            return None
        updated = row.evolve(**fields)
        self._staged[amendment_id] = updated
        return updated

    async def list_by_status(self, status: Optional[AmendmentStatus]) -> List[Amendment]:
        rows = [a for a in self._visible().values() if status is None or a.status == status]
        return sorted(rows, key=lambda a: a.created_at)

    async def list_for_shipments(
        self,
        shipment_ids: Sequence[str],
        status: Optional[AmendmentStatus] = None,
    ) -> List[Amendment]:
        rows = [
            a
            for a in self._visible().values()
            if a.shipment_id in shipment_ids and (status is None or a.status == status)
        ]
        return sorted(rows, key=lambda a: a.created_at)


class InMemoryShipmentDirectory:
    """Shipments keyed by id, each with an owning client and an optional winning vendor."""

    def __init__(self):
        self.owners: Dict[str, str] = {}
        self.winners: Dict[str, str] = {}

    def add(self, shipment_id: str, client_id: str, winning_vendor: Optional[str] = None) -> None:
        self.owners[shipment_id] = client_id
        if winning_vendor is not None:
            self.winners[shipment_id] = winning_vendor

    async def client_owns(self, shipment_id: str, client_id: str) -> bool:
        return self.owners.get(shipment_id) == client_id

    async def winning_vendor(self, shipment_id: str) -> Optional[str]:
        return self.winners.get(shipment_id)

    async def shipments_for_client(self, client_id: str) -> List[str]:
        return [s for s, owner in self.owners.items() if owner == client_id]

    async def shipments_won_by(self, vendor_id: str) -> List[str]:
        return [s for s, vendor in self.winners.items() if vendor == vendor_id]


class InMemoryAuditRepository:
    def __init__(self):
        self.records: List[AuditRecord] = []
        self._staged: List[AuditRecord] = []

    def commit(self) -> None:
        self.records.extend(self._staged)
        self._staged.clear()

    def rollback(self) -> None:
        self._staged.clear()

    async def save(self, record: AuditRecord) -> None:
        self._staged.append(record)


class InMemoryUnitOfWork:
    """Commits the staged amendment and audit writes together."""

    def __init__(self, repository: InMemoryAmendmentRepository, audit_repository: InMemoryAuditRepository):
        self._repository = repository
        self._audit_repository = audit_repository
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self._repository.commit()
        self._audit_repository.commit()
        self.commits += 1

    async def rollback(self) -> None:
        self._repository.rollback()
        self._audit_repository.rollback()
        self.rollbacks += 1


class FakeRedis:
    """In-memory Redis for unit tests."""

    def __init__(self):
        self._store: dict[str, str] = {}

    async def get_cache(self, key: str):
        return self._store.get(key)

    async def set_cache(self, key: str, value: str, ttl: int = 300):
        self._store[key] = value


@pytest.fixture
def repository():
    return InMemoryAmendmentRepository()


@pytest.fixture
def shipments():
    directory = InMemoryShipmentDirectory()
    directory.add(SHIPMENT_ID, CLIENT_ID, winning_vendor=VENDOR_ID)
    directory.add(OTHER_SHIPMENT_ID, OTHER_CLIENT_ID, winning_vendor=OTHER_VENDOR_ID)
    return directory


@pytest.fixture
def audit_repository():
    return InMemoryAuditRepository()


@pytest.fixture
def unit_of_work(repository, audit_repository):
    return InMemoryUnitOfWork(repository, audit_repository)


@pytest.fixture
def notifier():
    n = AsyncMock()
    n.notify = AsyncMock(return_value=None)
    return n


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def logger():
    return MagicMock()


@pytest.fixture
def rbac():
    return RBACService()


@pytest.fixture
def service(repository, shipments, audit_repository, unit_of_work, notifier, fake_redis, logger, rbac):
    return AmendmentService(
        repository=repository,
        shipments=shipments,
        authority=TransitionAuthority(rbac),
        audit_logger=AuditLogger(audit_repository),
        unit_of_work=unit_of_work,
        notifier=notifier,
        logger=logger,
        idempotency_cache=fake_redis,
    )


@pytest.fixture
def queries(repository, shipments, rbac):
    return AmendmentQueries(repository=repository, shipments=shipments, rbac_service=rbac)


@pytest.fixture
def client_actor():
    return Actor(actor_id=CLIENT_ID, role=Role.CLIENT)


@pytest.fixture
def other_client_actor():
    return Actor(actor_id=OTHER_CLIENT_ID, role=Role.CLIENT)


@pytest.fixture
def vendor_actor():
    return Actor(actor_id=VENDOR_ID, role=Role.VENDOR)


@pytest.fixture
def other_vendor_actor():
    return Actor(actor_id=OTHER_VENDOR_ID, role=Role.VENDOR)


@pytest.fixture
def admin_actor():
    return Actor(actor_id=ADMIN_ID, role=Role.ADMIN)
