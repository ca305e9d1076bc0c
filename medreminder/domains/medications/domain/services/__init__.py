from medreminder.domains.medications.domain.services.adherence_calculator import (
    WEEKDAY_NAMES,
    AdherenceCalculator,
    AdherenceStats,
    WeekdayAdherence,
)
from medreminder.domains.medications.domain.services.dedup_ledger import (
    DedupScope,
    ReminderDedupLedger,
    is_same_local_day,
)
from medreminder.domains.medications.domain.services.time_window import matches, matching_times, minutes_since

__all__ = [
    "AdherenceCalculator",
    "AdherenceStats",
    "WeekdayAdherence",
    "WEEKDAY_NAMES",
    "DedupScope",
    "ReminderDedupLedger",
    "is_same_local_day",
    "matches",
    "matching_times",
    "minutes_since",
]
