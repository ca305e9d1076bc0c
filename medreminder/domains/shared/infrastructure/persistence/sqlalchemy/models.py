"""
Shared SQLAlchemy Models
"""

from typing import Any

from sqlalchemy import Boolean, Column, Enum as SQLEnum, Integer, String

from medreminder.domains.shared.domain.value_objects.user_role import UserRole
from medreminder.models.db.base import Base, TimestampMixin


class UserModel(Base, TimestampMixin):
    """SQLAlchemy model for User entity."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    role = Column(
        SQLEnum(UserRole, name="user_role", values_callable=lambda enum: [e.value for e in enum]),
        default=UserRole.PATIENT,
        nullable=False,
    )
    notification_channel_id = Column(String(64), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, role={self.role}, email='{self.email}')>"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value if self.role else None,
            "notification_channel_id": self.notification_channel_id,
            "is_active": self.is_active,
        }
