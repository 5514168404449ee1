"""
Test configuration and fixtures for the rental listings API.
Provides storage fixtures for both backends, an API client, test data factories
and image helpers.
"""

import io
import uuid
from typing import Any, AsyncGenerator, Dict

import pytest
from httpx import ASGITransport, AsyncClient
from PIL import Image
from pydantic.alias_generators import to_camel
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.database import create_tables
from app.main import app
from app.storage import MemoryObjectStore, MemoryStorage, SqlStorage, Storage
from app.utils.dependencies import get_object_store, get_storage


# Test database configuration
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def make_test_engine():
    """In-memory SQLite engine shared by every connection of one test."""
    return create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )


@pytest.fixture
async def sql_storage() -> AsyncGenerator[SqlStorage, None]:
    """Relational storage on a fresh in-memory SQLite database."""
    engine = make_test_engine()
    await create_tables(engine)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield SqlStorage(session)

    await engine.dispose()


@pytest.fixture
def memory_storage() -> MemoryStorage:
    """Empty in-memory storage."""
    return MemoryStorage()


@pytest.fixture(params=["memory", "sql"])
async def storage(request) -> AsyncGenerator[Storage, None]:
    """Each test using this fixture runs once per storage backend."""
    if request.param == "memory":
        yield MemoryStorage()
        return

    engine = make_test_engine()
    await create_tables(engine)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield SqlStorage(session)

    await engine.dispose()


@pytest.fixture
def object_store() -> MemoryObjectStore:
    return MemoryObjectStore()


@pytest.fixture
async def client(storage: Storage, object_store: MemoryObjectStore) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client bound to the test storage and object store."""
    async def override_get_storage():
        yield storage

    def override_get_object_store():
        return object_store

    app.dependency_overrides[get_storage] = override_get_storage
    app.dependency_overrides[get_object_store] = override_get_object_store

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as async_client:
        yield async_client

    app.dependency_overrides.clear()


# Test data factories
def camel(data: Dict[str, Any]) -> Dict[str, Any]:
    """Convert snake_case keys to the camelCase wire format."""
    return {to_camel(key): value for key, value in data.items()}


class LocationFactory:
    """Factory for creating test locations."""

    @staticmethod
    def create_location_data(slug: str = None, name: str = "Test Location") -> dict:
        return {
            "slug": slug or f"test-{uuid.uuid4().hex[:8]}",
            "name": name,
            "description": "A walkable test neighborhood",
            "image_url": "https://example.com/location.jpg",
            "link_text": "View Test Properties",
        }

    @staticmethod
    async def create_location(storage: Storage, **kwargs):
        return await storage.create_location(LocationFactory.create_location_data(**kwargs))


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        location_id: int,
        name: str = "Test Property",
        bedrooms: int = 2,
        bathrooms: float = 1.5,
        rent: int = 1500,
        is_multifamily: bool = False,
        **overrides
    ) -> dict:
        data = {
            "name": name,
            "description": "A bright test property",
            "address": "100 Test St NE, Atlanta, GA 30309",
            "bedrooms": bedrooms,
            "bathrooms": bathrooms,
            "sqft": 1000,
            "rent": rent,
            "available": True,
            "location_id": location_id,
            "image_url": "https://example.com/property.jpg",
            "features": "Hardwood floors, central AC",
            "property_type": "apartment",
            "is_multifamily": is_multifamily,
            "unit_count": 2 if is_multifamily else 0,
        }
        data.update(overrides)
        return data

    @staticmethod
    async def create_property(storage: Storage, location_id: int = None, **kwargs):
        if location_id is None:
            location = await LocationFactory.create_location(storage)
            location_id = location.id
        return await storage.create_property(PropertyFactory.create_property_data(location_id, **kwargs))


class UnitFactory:
    """Factory for creating test units."""

    @staticmethod
    def create_unit_data(property_id: int, unit_number: str = "101", **overrides) -> dict:
        data = {
            "property_id": property_id,
            "unit_number": unit_number,
            "bedrooms": 1,
            "bathrooms": 1.0,
            "sqft": 700,
            "rent": 1200,
            "available": True,
        }
        data.update(overrides)
        return data


class ImageFactory:
    """Factory for creating gallery image rows."""

    @staticmethod
    def create_property_image_data(property_id: int, display_order: int = 0, is_featured: bool = False, **overrides) -> dict:
        data = {
            "property_id": property_id,
            "url": f"https://example.com/{uuid.uuid4().hex[:8]}.jpg",
            "alt": "Test image",
            "display_order": display_order,
            "is_featured": is_featured,
        }
        data.update(overrides)
        return data

    @staticmethod
    def create_unit_image_data(unit_id: int, display_order: int = 0, is_featured: bool = False, **overrides) -> dict:
        data = {
            "unit_id": unit_id,
            "url": f"https://example.com/{uuid.uuid4().hex[:8]}.jpg",
            "alt": "Test unit image",
            "display_order": display_order,
            "is_featured": is_featured,
        }
        data.update(overrides)
        return data


class InquiryFactory:
    """Factory for creating inquiry payloads."""

    @staticmethod
    def create_inquiry_data(property_id: int = None, **overrides) -> dict:
        data = {
            "name": "Sarah Davis",
            "email": f"tenant{uuid.uuid4().hex[:6]}@example.com",
            "phone": "404-555-8765",
            "message": "Is the unit still available?",
        }
        if property_id is not None:
            data["property_id"] = property_id
        data.update(overrides)
        return data


def make_image_bytes(image_format: str = "PNG", size=(4, 4)) -> bytes:
    """Encode a small solid-color image."""
    buffer = io.BytesIO()
    Image.new("RGB", size, (180, 40, 40)).save(buffer, format=image_format)
    return buffer.getvalue()


# Common entity fixtures
@pytest.fixture
async def test_location(storage: Storage):
    return await LocationFactory.create_location(storage, slug="midtown", name="Midtown, Atlanta")


@pytest.fixture
async def test_property(storage: Storage, test_location):
    return await PropertyFactory.create_property(storage, location_id=test_location.id)


@pytest.fixture
async def test_multifamily_property(storage: Storage, test_location):
    return await PropertyFactory.create_property(
        storage,
        location_id=test_location.id,
        name="253 14th St NE",
        is_multifamily=True,
    )


@pytest.fixture
async def test_unit(storage: Storage, test_multifamily_property):
    return await storage.create_property_unit(UnitFactory.create_unit_data(test_multifamily_property.id))
