"""Amendment lifecycle notifications over RabbitMQ, plus a log-only stand-in."""

import logging
from typing import Any, Dict, Protocol

from freight_amendments.application.exceptions import NotificationFailureError
from freight_amendments.domain.models.amendment import Amendment

EXCHANGE_AMENDMENT_EVENTS = "amendment_events"

logger = logging.getLogger(__name__)


class MessagePublisher(Protocol):
    async def publish(
        self,
        exchange_name: str,
        routing_key: str,
        message: dict,
        message_id: str,
    ) -> None: ...


def routing_key(amendment: Amendment) -> str:
    return f"amendment.{amendment.status.value}"


def amendment_message(amendment: Amendment, correlation_id: str) -> Dict[str, Any]:
    return {
        "amendment_id": amendment.id,
        "shipment_id": amendment.shipment_id,
        "status": amendment.status.value,
        "requested_by": amendment.requested_by,
        "vendor_id": amendment.vendor_id,
        "extra_cost": str(amendment.extra_cost) if amendment.extra_cost is not None else None,
        "delay_days": amendment.delay_days,
        "correlation_id": correlation_id,
    }


class RabbitMQAmendmentNotifier:
    """Publishes one message per committed transition to the amendment_events topic exchange."""

    def __init__(self, publisher: MessagePublisher) -> None:
        self._publisher = publisher

    async def notify(self, amendment: Amendment, correlation_id: str) -> None:
        try:
            await self._publisher.publish(
                EXCHANGE_AMENDMENT_EVENTS,
                routing_key(amendment),
                amendment_message(amendment, correlation_id),
                f"{amendment.id}:{amendment.status.value}",
            )
        except Exception as e:
            raise NotificationFailureError(f"Publish failed: {e}") from e


class LoggingAmendmentNotifier:
    """Used when notifications are disabled: logs the transition only."""

    async def notify(self, amendment: Amendment, correlation_id: str) -> None:
        logger.info(
            "amendment_notification_skipped",
            extra={
                "amendment_id": amendment.id,
                "status": amendment.status.value,
                "correlation_id": correlation_id,
            },
        )
