from medreminder.domains.shared.domain.entities import User
from medreminder.domains.shared.domain.value_objects import TimeOfDay, UserRole

__all__ = ["User", "UserRole", "TimeOfDay"]
