from medreminder.domains.shared.infrastructure.persistence.sqlalchemy.models import UserModel

__all__ = ["UserModel"]
