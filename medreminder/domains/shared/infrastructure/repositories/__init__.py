from medreminder.domains.shared.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

__all__ = ["SQLAlchemyUserRepository"]
