"""
Tests for the object storage adapters.
"""

import re

import pytest

from app.config import Settings
from app.storage import (
    DatabaseObjectStore,
    LocalObjectStore,
    MemoryObjectStore,
    MemoryStorage,
    create_object_store,
)
from app.storage.object_store import generate_object_key
from app.utils.exceptions import StorageError


KEY_PATTERN = re.compile(r"^images/[0-9a-f]{32}\.[a-z]+$")


@pytest.fixture(params=["memory", "local", "database"])
def any_object_store(request, tmp_path):
    """Each test using this fixture runs once per object store backend."""
    if request.param == "memory":
        return MemoryObjectStore()
    if request.param == "local":
        return LocalObjectStore(str(tmp_path / "objects"))
    return DatabaseObjectStore(MemoryStorage())


class TestGenerateObjectKey:
    """Test object key generation."""

    def test_key_format_keeps_extension(self):
        key = generate_object_key("Living Room.PNG")

        assert KEY_PATTERN.match(key)
        assert key.endswith(".png")

    def test_missing_extension_defaults_to_jpg(self):
        assert generate_object_key("photo").endswith(".jpg")
        assert generate_object_key("").endswith(".jpg")

    def test_keys_are_unique(self):
        assert generate_object_key("a.jpg") != generate_object_key("a.jpg")


class TestObjectStores:
    """Test behaviour shared by every object store backend."""

    async def test_upload_and_get(self, any_object_store):
        key = await any_object_store.upload(b"png-bytes", "photo.png", "image/png")

        assert KEY_PATTERN.match(key)
        assert await any_object_store.get(key) == b"png-bytes"
        assert await any_object_store.exists(key)

    async def test_get_missing_key(self, any_object_store):
        assert await any_object_store.get("images/missing.jpg") is None
        assert not await any_object_store.exists("images/missing.jpg")

    async def test_delete(self, any_object_store):
        key = await any_object_store.upload(b"bytes", "a.jpg")

        assert await any_object_store.delete(key) is True
        assert await any_object_store.delete(key) is False
        assert await any_object_store.get(key) is None

    async def test_list_images_filters_extensions(self, any_object_store):
        await any_object_store.put("images/a.jpg", b"a", "image/jpeg")
        await any_object_store.put("images/b.webp", b"b", "image/webp")
        await any_object_store.put("images/notes.txt", b"c", "text/plain")

        assert sorted(await any_object_store.list_images()) == ["images/a.jpg", "images/b.webp"]
        assert len(await any_object_store.list_keys()) == 3

    async def test_check_config(self, any_object_store):
        await any_object_store.put("images/a.jpg", b"a", "image/jpeg")

        report = await any_object_store.check_config()

        assert report["configured"] is True
        assert report["objects"] == 1
        assert report["backend"] == any_object_store.backend_name


class TestLocalObjectStore:
    """Test the filesystem backend."""

    async def test_writes_under_root(self, tmp_path):
        store = LocalObjectStore(str(tmp_path))

        await store.put("images/abc.png", b"data", "image/png")

        assert (tmp_path / "images" / "abc.png").read_bytes() == b"data"

    async def test_rejects_keys_outside_root(self, tmp_path):
        store = LocalObjectStore(str(tmp_path / "root"))

        with pytest.raises(StorageError):
            await store.put("../escape.png", b"data", "image/png")

        assert await store.get("../../etc/passwd") is None
        assert await store.delete("../escape.png") is False

    async def test_root_created_on_first_write(self, tmp_path):
        root = tmp_path / "objects"
        store = LocalObjectStore(str(root))

        assert not root.exists()
        assert await store.get("images/abc.png") is None
        assert await store.list_keys() == []

        await store.put("images/nested/abc.png", b"data", "image/png")

        assert (root / "images" / "nested" / "abc.png").read_bytes() == b"data"
        assert await store.list_keys() == ["images/nested/abc.png"]

    async def test_directories_are_not_objects(self, tmp_path):
        store = LocalObjectStore(str(tmp_path))
        await store.put("images/abc.png", b"data", "image/png")

        assert await store.get("images") is None
        assert await store.delete("images") is False
        assert (tmp_path / "images").is_dir()

    async def test_delete_removes_file(self, tmp_path):
        store = LocalObjectStore(str(tmp_path))
        await store.put("images/abc.png", b"data", "image/png")

        assert await store.delete("images/abc.png") is True
        assert not (tmp_path / "images" / "abc.png").exists()


class TestDatabaseObjectStore:
    """Test the image_storage table backend."""

    async def test_bytes_land_in_image_storage(self):
        storage = MemoryStorage()
        store = DatabaseObjectStore(storage)

        key = await store.upload(b"jpeg", "front.jpg", "image/jpeg")

        record = await storage.get_image_data_by_object_key(key)
        assert record.data == b"jpeg"
        assert record.mime_type == "image/jpeg"
        assert record.size == 4


class FailingObjectStore(MemoryObjectStore):
    async def put(self, key, data, mime_type):
        raise OSError("disk full")


class TestUploadFailures:
    async def test_backend_errors_become_storage_errors(self):
        with pytest.raises(StorageError) as exc_info:
            await FailingObjectStore().upload(b"x", "a.jpg")

        assert exc_info.value.status_code == 500
        assert "disk full" in exc_info.value.detail


class TestCreateObjectStore:
    """Test backend selection from settings."""

    def test_memory_backend(self):
        assert isinstance(create_object_store(Settings(object_storage_backend="memory")), MemoryObjectStore)

    def test_local_backend(self, tmp_path):
        config = Settings(object_storage_backend="local", object_storage_dir=str(tmp_path))

        store = create_object_store(config)

        assert isinstance(store, LocalObjectStore)
        assert store.root == tmp_path.resolve()

    def test_database_backend_requires_storage(self):
        config = Settings(object_storage_backend="database")

        with pytest.raises(ValueError):
            create_object_store(config)

        assert isinstance(create_object_store(config, MemoryStorage()), DatabaseObjectStore)
