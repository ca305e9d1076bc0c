from medreminder.domains.shared.domain.entities.user import User

__all__ = ["User"]
