from medreminder.domains.shared.domain.value_objects.time_of_day import TimeOfDay
from medreminder.domains.shared.domain.value_objects.user_role import UserRole

__all__ = ["TimeOfDay", "UserRole"]
