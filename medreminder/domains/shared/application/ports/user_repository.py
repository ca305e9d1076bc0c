"""
User Repository Port
"""

from typing import Protocol, runtime_checkable

from medreminder.domains.shared.domain.entities.user import User


@runtime_checkable
class IUserRepository(Protocol):
    """
    User repository interface.
    """

    async def find_by_id(self, user_id: int) -> User | None:
        """
        Find user by ID.

        Args:
            user_id: User identifier

        Returns:
            User if found, None otherwise
        """
        ...

    async def find_by_ids(self, user_ids: list[int]) -> dict[int, User]:
        """
        Load several users at once.

        Returns:
            Mapping of user id to user; missing ids are absent from the map
        """
        ...

    async def save(self, user: User) -> User:
        """Create or update a user."""
        ...
