"""
Dose Record Entity

Immutable history entry describing what happened to one scheduled dose.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from pytz.tzinfo import BaseTzInfo

from medreminder.core.clock import to_local
from medreminder.core.domain import Entity
from medreminder.domains.medications.domain.value_objects.dose_status import DoseStatus
from medreminder.domains.shared.domain.value_objects.time_of_day import TimeOfDay


@dataclass(eq=False)
class DoseRecord(Entity[int]):
    """
    One dose outcome.

    `taken_at` is the instant the outcome was recorded (for a missed dose, the
    instant the detector noticed it). `scheduled_time` is the HH:MM slot the
    record belongs to, when known.
    """

    medication_id: int = 0
    patient_id: int = 0
    status: DoseStatus = DoseStatus.TAKEN
    taken_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    scheduled_time: str | None = None
    notes: str = ""

    @classmethod
    def missed(cls, medication_id: int, patient_id: int, scheduled_time: str, detected_at: datetime) -> "DoseRecord":
        return cls(
            medication_id=medication_id,
            patient_id=patient_id,
            status=DoseStatus.MISSED,
            taken_at=detected_at,
            scheduled_time=scheduled_time,
            notes="Automatically marked as missed",
        )

    def delay_minutes(self, tz: BaseTzInfo) -> int:
        """Minutes between the scheduled slot and the recorded instant (delayed doses only)."""
        if self.status != DoseStatus.DELAYED or not self.scheduled_time:
            return 0
        local = to_local(self.taken_at, tz)
        actual = local.hour * 60 + local.minute
        return max(0, actual - TimeOfDay.parse(self.scheduled_time).minutes)

    def weekday_index(self, tz: BaseTzInfo) -> int:
        """Day of week of `taken_at` in the reference timezone, 0 = Sunday."""
        return (to_local(self.taken_at, tz).weekday() + 1) % 7
