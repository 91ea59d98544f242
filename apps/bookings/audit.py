"""Audit trail of booking events, written to the log."""

import logging

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)


def log_booking_event(event: DomainEvent) -> None:
    payload = event.to_dict()
    payload.update({
        key: str(value)
        for key, value in vars(event).items()
        if key not in ('event_id', 'occurred_at', 'aggregate_id')
    })
    logger.info(f"booking event {payload['event_type']}: {payload}")
