"""
Data Transfer Objects for reminder and adherence operations.
"""

from dataclasses import dataclass, field
from typing import Any

from medreminder.core.domain import StatusEnum
from medreminder.domains.medications.domain.services.adherence_calculator import AdherenceStats


@dataclass
class ReminderPassResult:
    """Counters reported by one reminder pass."""

    checked: int = 0
    sent: int = 0
    skipped: int = 0
    already_handled: int = 0
    failed: int = 0
    missed_logged: int = 0
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "checked": self.checked,
            "sent": self.sent,
            "skipped": self.skipped,
            "already_handled": self.already_handled,
            "failed": self.failed,
            "missed_logged": self.missed_logged,
            "errors": list(self.errors),
        }


class ReminderFireOutcome(StatusEnum):
    """Result of one per-medication trigger firing."""

    SENT = "sent"
    FAILED = "failed"
    ALREADY_HANDLED = "already_handled"
    NO_CHANNEL = "no_channel"
    NOT_STARTED = "not_started"
    STALE = "stale"
    INACTIVE = "inactive"


@dataclass
class AdherenceReportEntry:
    patient_id: int
    medication_id: int
    medication_name: str
    stats: AdherenceStats

    def to_dict(self) -> dict[str, Any]:
        return {
            "patient_id": self.patient_id,
            "medication_id": self.medication_id,
            "medication_name": self.medication_name,
            **self.stats.to_dict(),
        }


@dataclass
class AdherenceReport:
    """Adherence of every active medication over the report window."""

    window_days: int
    threshold: int
    entries: list[AdherenceReportEntry] = field(default_factory=list)

    @property
    def low_adherence(self) -> list[AdherenceReportEntry]:
        return [e for e in self.entries if e.stats.rate < self.threshold]

    def to_dict(self) -> dict[str, Any]:
        return {
            "window_days": self.window_days,
            "threshold": self.threshold,
            "entries": [e.to_dict() for e in self.entries],
            "low_adherence": [e.to_dict() for e in self.low_adherence],
        }
