from medreminder.domains.appointments.domain.services.conflict_rules import find_conflicts, intervals_overlap
from medreminder.domains.appointments.domain.services.slot_finder import AvailableSlot, ClinicHours, generate_slots

__all__ = ["intervals_overlap", "find_conflicts", "AvailableSlot", "ClinicHours", "generate_slots"]
