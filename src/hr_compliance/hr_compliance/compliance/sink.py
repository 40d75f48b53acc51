from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class EscalationSink(Protocol):
    """Fire-and-forget destination for escalation events.

    Delivery and retry are the sink's business.
    """

    def emit(self, employee_id: int, kind: str, details: dict) -> None:
        raise NotImplementedError


class LoggingEscalationSink:
    def emit(self, employee_id: int, kind: str, details: dict) -> None:
        logger.warning("Escalation %s for employee %s: %s", kind, employee_id, details)
