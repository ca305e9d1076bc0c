"""
Unit tests for the user repository.
"""

from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest

from medreminder.domains.shared.domain.value_objects.user_role import UserRole
from medreminder.domains.shared.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


@pytest.fixture
def sample_user_model():
    """Sample SQLAlchemy user model."""
    model = MagicMock()
    model.id = 1
    model.name = "Ana Pérez"
    model.email = "ana@example.com"
    model.role = UserRole.PATIENT
    model.notification_channel_id = "5001"
    model.is_active = True
    model.created_at = datetime.now(UTC)
    model.updated_at = datetime.now(UTC)
    return model


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_user_find_by_id(mock_async_session, sample_user_model):
    """Test successfully getting a user by ID."""
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = sample_user_model
    mock_async_session.execute.return_value = mock_result
    repository = SQLAlchemyUserRepository(mock_async_session)

    user = await repository.find_by_id(1)

    assert user is not None
    assert user.is_patient()
    assert user.has_notification_channel()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_user_find_by_ids(mock_async_session, sample_user_model):
    """Test batch lookup keyed by id."""
    mock_result = MagicMock()
    mock_result.scalars.return_value.all.return_value = [sample_user_model]
    mock_async_session.execute.return_value = mock_result
    repository = SQLAlchemyUserRepository(mock_async_session)

    users = await repository.find_by_ids([1, 1, 2])

    assert list(users) == [1]
    assert users[1].email == "ana@example.com"


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_user_find_by_ids_empty(mock_async_session):
    """Test an empty id list never hits the database."""
    repository = SQLAlchemyUserRepository(mock_async_session)

    assert await repository.find_by_ids([]) == {}
    mock_async_session.execute.assert_not_called()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_user_save_unlinks_channel(mock_async_session, sample_user_model):
    """Test unlinking the channel clears it on the stored model."""
    # Arrange
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = sample_user_model
    mock_async_session.execute.return_value = mock_result
    repository = SQLAlchemyUserRepository(mock_async_session)
    user = await repository.find_by_id(1)
    user.unlink_channel()

    # Act
    await repository.save(user)

    # Assert
    assert sample_user_model.notification_channel_id is None
    mock_async_session.commit.assert_awaited_once()
