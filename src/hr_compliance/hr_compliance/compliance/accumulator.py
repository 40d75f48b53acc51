from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from .model import EscalationEvent
from .policies import EscalationPolicy
from .sink import EscalationSink, LoggingEscalationSink

logger = logging.getLogger(__name__)


class ComplianceAccumulator:
    """Evaluates escalation policies against stored attendance.

    Each evaluation re-reads the policy window from the store; nothing is
    cached or counted between calls.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        sink: Optional[EscalationSink] = None,
        *,
        policies: Sequence[EscalationPolicy] = (),
    ):
        self._attendance = attendance
        self._sink = sink or LoggingEscalationSink()
        self._policies = tuple(policies)

    @property
    def policies(self) -> tuple[EscalationPolicy, ...]:
        return self._policies

    def policy(self, name: str) -> Optional[EscalationPolicy]:
        for p in self._policies:
            if p.name == name:
                return p
        return None

    def evaluate(self, policy: EscalationPolicy, employee_id: int, on_date: date) -> Optional[EscalationEvent]:
        start, end = policy.window(on_date)
        records = self._attendance.get_by_employee_in_range(employee_id, start, end)
        event = policy.evaluate(employee_id, on_date, records)
        if event is not None:
            self._emit(event)
        return event

    def evaluate_all(self, employee_id: int, on_date: date) -> list[EscalationEvent]:
        events = []
        for policy in self._policies:
            event = self.evaluate(policy, employee_id, on_date)
            if event is not None:
                events.append(event)
        return events

    def _emit(self, event: EscalationEvent) -> None:
        try:
            self._sink.emit(event.employee_id, event.kind, event.details())
        except Exception:
            # The punch that triggered the event is already stored.
            logger.exception("Escalation sink failed for employee %s (%s)", event.employee_id, event.policy)
