"""
User Repository Implementation
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from medreminder.domains.shared.application.ports.user_repository import IUserRepository
from medreminder.domains.shared.domain.entities.user import User
from medreminder.domains.shared.domain.value_objects.user_role import UserRole
from medreminder.domains.shared.infrastructure.persistence.sqlalchemy.models import UserModel

logger = logging.getLogger(__name__)


class SQLAlchemyUserRepository(IUserRepository):
    """
    SQLAlchemy implementation of user repository.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, user_id: int) -> User | None:
        result = await self.session.execute(select(UserModel).where(UserModel.id == user_id))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_by_ids(self, user_ids: list[int]) -> dict[int, User]:
        if not user_ids:
            return {}
        result = await self.session.execute(select(UserModel).where(UserModel.id.in_(set(user_ids))))
        return {model.id: self._to_entity(model) for model in result.scalars().all()}  # type: ignore[misc]

    async def save(self, user: User) -> User:
        model = None
        if user.id:
            result = await self.session.execute(select(UserModel).where(UserModel.id == user.id))
            model = result.scalar_one_or_none()

        if model:
            self._update_model(model, user)
        else:
            model = self._to_model(user)
            self.session.add(model)

        try:
            await self.session.commit()
            await self.session.refresh(model)
        except SQLAlchemyError:
            await self.session.rollback()
            raise

        return self._to_entity(model)

    # Mapping methods

    def _to_entity(self, model: UserModel) -> User:
        user = User(
            id=model.id,  # type: ignore[arg-type]
            name=model.name or "",  # type: ignore[arg-type]
            email=model.email or "",  # type: ignore[arg-type]
            role=model.role or UserRole.PATIENT,  # type: ignore[arg-type]
            notification_channel_id=model.notification_channel_id,  # type: ignore[arg-type]
            is_active=model.is_active if model.is_active is not None else True,  # type: ignore[arg-type]
        )
        if model.created_at:
            user.created_at = model.created_at  # type: ignore[assignment]
        if model.updated_at:
            user.updated_at = model.updated_at  # type: ignore[assignment]
        return user

    def _to_model(self, user: User) -> UserModel:
        return UserModel(
            name=user.name,
            email=user.email,
            role=user.role,
            notification_channel_id=user.notification_channel_id,
            is_active=user.is_active,
        )

    def _update_model(self, model: UserModel, user: User) -> None:
        model.name = user.name  # type: ignore[assignment]
        model.email = user.email  # type: ignore[assignment]
        model.role = user.role  # type: ignore[assignment]
        model.notification_channel_id = user.notification_channel_id  # type: ignore[assignment]
        model.is_active = user.is_active  # type: ignore[assignment]
