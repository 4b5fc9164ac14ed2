"""Audit trail models for calculation transparency.

Every calculator records each step it takes (inputs, output, the rule or
table it applied and the form line it feeds) so a preparer can trace a
published figure back to its sources.
"""

from datetime import datetime, timezone
from typing import Optional

import structlog
from pydantic import BaseModel, Field


def _utc_now() -> datetime:
    """Return current UTC datetime with timezone info."""
    return datetime.now(timezone.utc)


class AuditEntry(BaseModel):
    """Single audit event recording a calculation step.

    Attributes:
        timestamp: When this entry was created (UTC)
        step: Name of the calculation step (e.g., "business_use_percent")
        input_value: Values the step consumed
        output_value: Value the step produced
        source: Rule, table or document the step applied
        notes: Additional context
        line_number: Form line the step feeds (e.g., "Line 7")
    """

    timestamp: datetime = Field(default_factory=_utc_now)
    step: str
    input_value: str
    output_value: str
    source: str
    notes: Optional[str] = None
    line_number: Optional[str] = None


class AuditTrail:
    """Collects audit entries for one calculation call.

    A fresh trail is created per call so calculators hold no state between
    invocations.
    """

    def __init__(self, event: str, **context: object) -> None:
        self.event = event
        self.entries: list[AuditEntry] = []
        self._logger = structlog.get_logger().bind(**context)

    def log_step(
        self,
        step: str,
        input_value: str,
        output_value: str,
        source: str,
        notes: Optional[str] = None,
        line_number: Optional[str] = None,
    ) -> None:
        """Add an entry to the audit log."""
        entry = AuditEntry(
            step=step,
            input_value=input_value,
            output_value=output_value,
            source=source,
            notes=notes,
            line_number=line_number,
        )
        self.entries.append(entry)
        self._logger.info(
            self.event,
            step=step,
            input=input_value,
            output=output_value,
            source=source,
        )

    def steps(self) -> list[str]:
        return [entry.step for entry in self.entries]


__all__ = [
    "AuditEntry",
    "AuditTrail",
]
