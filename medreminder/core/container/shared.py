"""
Shared Domain Container.
"""

from typing import TYPE_CHECKING

from medreminder.domains.shared.infrastructure.repositories import SQLAlchemyUserRepository

if TYPE_CHECKING:
    from medreminder.core.container.base import BaseContainer


class SharedContainer:
    def __init__(self, base: "BaseContainer"):
        self._base = base

    def create_user_repository(self, db) -> SQLAlchemyUserRepository:
        """Create User Repository."""
        return SQLAlchemyUserRepository(session=db)
