from __future__ import annotations

import logging

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


def execute(uow: UnitOfWork, event_id: str) -> None:
    """Remove an event from the log."""
    if not uow.events.delete(event_id):
        raise NotFound(f"Medication event {event_id} not found")
    logger.info("Medication event deleted: id=%s", event_id)
