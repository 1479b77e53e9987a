# Application layer: services that orchestrate domain, governance and infrastructure.

from freight_amendments.application.amendment_queries import AmendmentQueries
from freight_amendments.application.amendment_repository import AmendmentRepository
from freight_amendments.application.amendment_service import AmendmentService
from freight_amendments.application.exceptions import (
    ApplicationError,
    ConcurrentModificationError,
    NotificationFailureError,
)
from freight_amendments.application.notifier import AmendmentNotifier
from freight_amendments.application.shipment_directory import ShipmentDirectory
from freight_amendments.application.unit_of_work import UnitOfWork

__all__ = [
    "AmendmentNotifier",
    "AmendmentQueries",
    "AmendmentRepository",
    "AmendmentService",
    "ApplicationError",
    "ConcurrentModificationError",
    "NotificationFailureError",
    "ShipmentDirectory",
    "UnitOfWork",
]
