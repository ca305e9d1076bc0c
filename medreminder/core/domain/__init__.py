"""
Domain layer building blocks shared by every domain package.
"""

from medreminder.core.domain.entities import Entity
from medreminder.core.domain.exceptions import (
    AppointmentConflictException,
    DomainException,
    EntityNotFoundException,
    InvalidOperationException,
    ValidationException,
)
from medreminder.core.domain.value_objects import StatusEnum, ValueObject

__all__ = [
    # Entities
    "Entity",
    # Value Objects
    "ValueObject",
    "StatusEnum",
    # Exceptions
    "DomainException",
    "ValidationException",
    "EntityNotFoundException",
    "InvalidOperationException",
    "AppointmentConflictException",
]
