"""
Shared fixtures for Feedback Hub tests.
"""
import mongomock
import pytest

from feedback_hub.adapters.mongodb_adapter import MongoDBAdapter
from feedback_hub.domains import User, UserRole
from feedback_hub.repositories.feedback import MongoFeedbackRepository
from feedback_hub.repositories.user import MongoUserRepository


@pytest.fixture
def mongo_adapter():
    """MongoDB adapter backed by an in-memory mongomock client."""
    client = mongomock.MongoClient()
    adapter = MongoDBAdapter(
        connection_string="mongodb://localhost:27017", database_name="test_db"
    )
    # Replace the real client with the mock one
    adapter.client = client
    adapter.db = client["test_db"]
    return adapter


@pytest.fixture
def feedback_repository(mongo_adapter):
    return MongoFeedbackRepository(mongo_adapter)


@pytest.fixture
def user_repository(mongo_adapter):
    return MongoUserRepository(mongo_adapter)


@pytest.fixture
def alice(user_repository):
    user = User(name="Alice", email="alice@example.com")
    user_repository.create(user)
    return user


@pytest.fixture
def bob(user_repository):
    user = User(name="Bob", email="bob@example.com")
    user_repository.create(user)
    return user


@pytest.fixture
def admin(user_repository):
    user = User(name="Ada Admin", email="admin@example.com", role=UserRole.ADMIN)
    user_repository.create(user)
    return user
