"""
Reminder dedup ledger.

Answers "was this reminder already sent today?" from the markers persisted
on the medication. Calendar days are evaluated in the reference timezone.
"""

from datetime import datetime

from pytz.tzinfo import BaseTzInfo

from medreminder.core.clock import to_local
from medreminder.core.domain import StatusEnum
from medreminder.domains.medications.domain.entities.medication import Medication


class DedupScope(StatusEnum):
    """
    Granularity of the dedup key.

    DOSE keys on (medication, scheduled time, day). MEDICATION keys on
    (medication, day), so once any time of a medication has been reminded the
    remaining times of that day are suppressed.
    """

    DOSE = "dose"
    MEDICATION = "medication"


def is_same_local_day(marker: datetime | None, now: datetime, tz: BaseTzInfo) -> bool:
    """True when `marker` falls on the same calendar day as `now` in `tz`."""
    if marker is None:
        return False
    return to_local(marker, tz).date() == to_local(now, tz).date()


class ReminderDedupLedger:
    """Reads and writes reminder markers on a medication."""

    def __init__(self, tz: BaseTzInfo, scope: DedupScope | str = DedupScope.DOSE):
        self.tz = tz
        self.scope = DedupScope.from_string(scope) if isinstance(scope, str) else scope

    def slot_key(self, scheduled_time: str) -> str:
        """Key claimed for one reminder on a day: the time, or "*" for the whole medication."""
        if self.scope == DedupScope.MEDICATION:
            return "*"
        return scheduled_time

    def marker_for(self, medication: Medication, scheduled_time: str) -> datetime | None:
        if self.scope == DedupScope.MEDICATION:
            return medication.last_reminded_at
        return medication.reminder_marks.get(scheduled_time)

    def is_handled(self, medication: Medication, scheduled_time: str, now: datetime) -> bool:
        return is_same_local_day(self.marker_for(medication, scheduled_time), now, self.tz)

    def mark_handled(self, medication: Medication, scheduled_time: str, now: datetime) -> None:
        """Record a successful dispatch. The caller persists the medication."""
        medication.reminder_marks[scheduled_time] = now
        medication.last_reminded_at = now
