from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class EscalationEvent:
    """Outbound fact: an employee crossed an escalation threshold.

    Never persisted here; the same condition fires again on every
    re-evaluation of the window.
    """

    employee_id: int
    kind: str
    trigger_value: int
    threshold: int
    period: str
    policy: str
    evaluated_on: date

    def details(self) -> dict:
        return {
            "trigger_value": self.trigger_value,
            "threshold": self.threshold,
            "period": self.period,
            "policy": self.policy,
            "evaluated_on": self.evaluated_on.isoformat(),
        }
