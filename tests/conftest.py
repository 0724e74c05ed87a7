"""Pytest configuration and fixtures."""
import os
from datetime import date, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

os.environ.setdefault("MONGODB_URL", "mongodb://localhost:27017")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from app.main import app
from app.config import settings
from app.database import get_database
from app.models.bucket_item import BucketItem
from app.routers.auth import get_current_user_id
from app.utils.clock import get_today


TODAY = date(2025, 6, 15)


@pytest.fixture
def today():
    """Fixed evaluation date shared by engine and router tests."""
    return TODAY


@pytest.fixture
def make_item():
    """
    Factory for BucketItem snapshots.

    Items get increasing created_at timestamps so creation order is stable.
    """
    base = datetime(2025, 1, 1, 9, 0)

    def _make(item_id, title=None, **fields):
        created_at = fields.pop("created_at", base + timedelta(hours=item_id))
        return BucketItem(
            _id=item_id,
            owner_id=fields.pop("owner_id", "user123"),
            title=title or f"Goal {item_id}",
            created_at=created_at,
            updated_at=created_at,
            **fields,
        )

    return _make


@pytest.fixture
def item_doc():
    """Factory for raw bucket_list_items documents as motor returns them."""

    def _doc(item_id, **fields):
        now = datetime(2025, 1, 1, 9, 0)
        doc = {
            "_id": item_id,
            "owner_id": "user123",
            "title": f"Goal {item_id}",
            "description": None,
            "status": "Not Started",
            "category": None,
            "priority": "Medium",
            "tags": [],
            "target_date": None,
            "completion_date": None,
            "image_url": None,
            "created_at": now,
            "updated_at": now,
        }
        doc.update(fields)
        return doc

    return _doc


@pytest.fixture
def mock_db():
    """
    MagicMock database whose collections are created on first access.

    `mock_db.collections["bucket_list_items"]` gives tests the mock to script.
    """
    collections = {}

    def _collection(name):
        if name not in collections:
            collection = MagicMock()
            collection.find_one = AsyncMock(return_value=None)
            collection.insert_one = AsyncMock()
            collection.update_one = AsyncMock()
            collection.delete_one = AsyncMock()
            collection.find_one_and_update = AsyncMock()
            cursor = MagicMock()
            cursor.to_list = AsyncMock(return_value=[])
            collection.find.return_value.sort.return_value = cursor
            collection.find.return_value.to_list = cursor.to_list
            collections[name] = collection
        return collections[name]

    db = MagicMock()
    db.__getitem__.side_effect = _collection
    db.collections = collections
    db.collection = _collection
    return db


@pytest_asyncio.fixture
async def api_client(mock_db):
    """
    HTTP client against the app with auth, clock and database overridden.

    Requests run as "user123" on TODAY against `mock_db`.
    """
    app.dependency_overrides[get_database] = lambda: mock_db
    app.dependency_overrides[get_current_user_id] = lambda: "user123"
    app.dependency_overrides[get_today] = lambda: TODAY

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def app_client():
    """
    Create a test client with a clean test database.

    This fixture:
    - Skips the test when no MongoDB is reachable
    - Points the app at a throwaway database
    - Drops the test database after each test
    """
    test_client = AsyncIOMotorClient(settings.mongodb_url, serverSelectionTimeoutMS=1000)
    try:
        await test_client.admin.command("ping")
    except PyMongoError:
        test_client.close()
        pytest.skip("MongoDB is not reachable")

    test_db_name = f"{settings.mongodb_db_name}_test"
    test_db = test_client[test_db_name]

    # Override the database dependency
    from app.database import database
    original_db = database.db
    database.db = test_db
    app.dependency_overrides[get_today] = lambda: TODAY

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client

    # Cleanup: drop test database
    await test_client.drop_database(test_db_name)

    database.db = original_db
    app.dependency_overrides.clear()
    test_client.close()
