"""
Medication Entity

A prescribed medication with its daily schedule and the markers used to
avoid sending the same reminder twice in one day.
"""

from dataclasses import dataclass, field
from datetime import date, datetime

from medreminder.core.domain import Entity, ValidationException
from medreminder.domains.shared.domain.value_objects.time_of_day import TimeOfDay


def normalize_times(times: list[str]) -> list[str]:
    """
    Validate, zero-pad, de-duplicate and sort a list of HH:MM times.

    Raises:
        ValidationException: If any time is malformed
    """
    parsed = {TimeOfDay.parse(t) for t in times}
    return [t.label for t in sorted(parsed)]


@dataclass(eq=False)
class Medication(Entity[int]):
    """
    Medication aggregate.

    Attributes:
        times: Distinct daily HH:MM times, kept sorted
        last_reminded_at: Per-medication reminder marker (legacy dedup scope)
        reminder_marks: Per-time reminder markers, HH:MM -> instant of the last
            successful dispatch for that time
    """

    patient_id: int = 0
    doctor_id: int | None = None
    name: str = ""
    dosage: str = ""
    instructions: str = ""
    times: list[str] = field(default_factory=list)
    start_date: date = field(default_factory=date.today)
    end_date: date = field(default_factory=date.today)
    is_active: bool = True
    last_reminded_at: datetime | None = None
    reminder_marks: dict[str, datetime] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.times = normalize_times(self.times)

    @classmethod
    def create(
        cls,
        patient_id: int,
        name: str,
        dosage: str,
        times: list[str],
        start_date: date,
        end_date: date,
        doctor_id: int | None = None,
        instructions: str = "",
    ) -> "Medication":
        """
        Create a validated medication.

        Raises:
            ValidationException: Missing name, empty or malformed times, or an
                end date not after the start date
        """
        medication = cls(
            patient_id=patient_id,
            doctor_id=doctor_id,
            name=name.strip(),
            dosage=dosage.strip(),
            instructions=instructions.strip(),
            times=times,
            start_date=start_date,
            end_date=end_date,
        )
        medication.validate()
        return medication

    def validate(self) -> None:
        if not self.name:
            raise ValidationException("Medication name is required", field="name")
        if not self.dosage:
            raise ValidationException("Dosage is required", field="dosage")
        if not self.times:
            raise ValidationException("At least one daily time is required", field="times")
        if self.end_date <= self.start_date:
            raise ValidationException("End date must be after start date", field="end_date")

    def update_schedule(
        self,
        times: list[str] | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> None:
        """Replace schedule fields; markers for removed times are dropped."""
        if times is not None:
            self.times = normalize_times(times)
            self.reminder_marks = {t: m for t, m in self.reminder_marks.items() if t in self.times}
        if start_date is not None:
            self.start_date = start_date
        if end_date is not None:
            self.end_date = end_date
        self.validate()
        self.touch()

    def deactivate(self) -> None:
        self.is_active = False
        self.touch()

    def activate(self) -> None:
        self.is_active = True
        self.touch()

    def is_currently_active(self, on: date) -> bool:
        """Active flag set and `on` within [start_date, end_date]."""
        return self.is_active and self.start_date <= on <= self.end_date

    def next_dose_time(self, now: datetime) -> str | None:
        """First scheduled time after `now`, wrapping to tomorrow's first dose."""
        if not self.times:
            return None
        current = now.hour * 60 + now.minute
        for label in self.times:
            if TimeOfDay.parse(label).minutes > current:
                return label
        return self.times[0]

    def days_remaining(self, on: date) -> int:
        return max(0, (self.end_date - on).days)

    @property
    def total_days(self) -> int:
        return (self.end_date - self.start_date).days
