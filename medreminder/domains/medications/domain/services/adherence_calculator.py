"""
Adherence calculator.

rate = taken / total * 100 over a set of dose records, zero when there are
no records. The reported rate is rounded half-up to a whole percentage
(5 of 7 -> 71, 1 of 8 -> 13); the unrounded value stays available.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from pytz.tzinfo import BaseTzInfo

from medreminder.domains.medications.domain.entities.dose_record import DoseRecord
from medreminder.domains.medications.domain.value_objects.dose_status import DoseStatus

WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


def percentage(part: int, whole: int) -> Decimal:
    if whole <= 0:
        return Decimal(0)
    return Decimal(part) * 100 / Decimal(whole)


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


@dataclass
class AdherenceStats:
    """Counts of dose outcomes and the derived adherence rate."""

    total: int = 0
    taken: int = 0
    missed: int = 0
    skipped: int = 0
    delayed: int = 0

    def add(self, status: DoseStatus) -> None:
        self.total += 1
        if status == DoseStatus.TAKEN:
            self.taken += 1
        elif status == DoseStatus.MISSED:
            self.missed += 1
        elif status == DoseStatus.SKIPPED:
            self.skipped += 1
        elif status == DoseStatus.DELAYED:
            self.delayed += 1

    @property
    def exact_rate(self) -> float:
        return float(percentage(self.taken, self.total))

    @property
    def rate(self) -> int:
        return round_half_up(percentage(self.taken, self.total))

    def to_dict(self) -> dict[str, Any]:
        return {
            "adherence_rate": self.rate,
            "exact_rate": round(self.exact_rate, 2),
            "total_doses": self.total,
            "taken_doses": self.taken,
            "missed_doses": self.missed,
            "skipped_doses": self.skipped,
            "delayed_doses": self.delayed,
        }


@dataclass
class WeekdayAdherence:
    weekday: str
    stats: AdherenceStats = field(default_factory=AdherenceStats)

    @property
    def rate(self) -> int:
        return self.stats.rate

    def to_dict(self) -> dict[str, Any]:
        return {
            "weekday": self.weekday,
            "adherence_rate": self.stats.rate,
            "total_doses": self.stats.total,
            "taken_doses": self.stats.taken,
        }


class AdherenceCalculator:
    """Pure aggregation over dose records."""

    @staticmethod
    def summarize(records: Iterable[DoseRecord]) -> AdherenceStats:
        stats = AdherenceStats()
        for record in records:
            stats.add(record.status)
        return stats

    @staticmethod
    def weekly_pattern(records: Iterable[DoseRecord], tz: BaseTzInfo) -> list[WeekdayAdherence]:
        """
        Adherence per weekday, Sunday first. Weekdays without records report 0.
        """
        pattern = [WeekdayAdherence(weekday=name) for name in WEEKDAY_NAMES]
        for record in records:
            pattern[record.weekday_index(tz)].stats.add(record.status)
        return pattern
