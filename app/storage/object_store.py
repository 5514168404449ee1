"""
Object storage adapters for raw image bytes.
Blobs are addressed by keys of the form images/<md5><ext>. The local backend
writes under a directory, the database backend keeps bytes in the image_storage
table, and the memory backend keeps them in a dictionary.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional
import asyncio
import hashlib
import logging
import time

import aiofiles
import aiofiles.os

from app.config import Settings
from app.storage.base import Storage
from app.utils.exceptions import StorageError
from app.utils.image_refs import OBJECT_STORAGE_PREFIX, content_type_for_key, is_listable_image_key

logger = logging.getLogger(__name__)


def generate_object_key(filename: str) -> str:
    """
    Generate a unique object key for an uploaded file.

    Args:
        filename: Original filename; its extension is kept

    Returns:
        Key of the form images/<md5 of filename and timestamp><ext>
    """
    extension = Path(filename or "").suffix.lower() or ".jpg"
    digest = hashlib.md5(f"{filename}-{time.time_ns()}".encode("utf-8")).hexdigest()
    return f"{OBJECT_STORAGE_PREFIX}{digest}{extension}"


class ObjectStore(ABC):
    """Key-value byte store for images."""

    backend_name: str = "object-storage"

    async def upload(self, data: bytes, filename: str, mime_type: Optional[str] = None) -> str:
        """
        Store bytes under a freshly generated key.

        Args:
            data: Image bytes
            filename: Original filename, used for the key extension
            mime_type: Content type; derived from the key when omitted

        Returns:
            The new object key

        Raises:
            StorageError: If the backend rejects the write
        """
        key = generate_object_key(filename)
        try:
            await self.put(key, data, mime_type or content_type_for_key(key))
        except StorageError:
            raise
        except Exception as e:
            logger.error(f"Failed to upload {filename} to {self.backend_name}: {e}")
            raise StorageError(f"Failed to upload image: {e}")

        logger.info(f"Uploaded {len(data)} bytes to {self.backend_name} as {key}")
        return key

    @abstractmethod
    async def put(self, key: str, data: bytes, mime_type: str) -> None:
        """Write bytes under an explicit key."""

    @abstractmethod
    async def get(self, key: str) -> Optional[bytes]:
        """Bytes stored under key, or None when absent."""

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove a key; False when it did not exist."""

    @abstractmethod
    async def list_keys(self) -> List[str]:
        """Every stored key."""

    async def exists(self, key: str) -> bool:
        return await self.get(key) is not None

    async def list_images(self) -> List[str]:
        """Stored keys with raster image extensions."""
        return [key for key in await self.list_keys() if is_listable_image_key(key)]

    async def check_config(self) -> Dict[str, object]:
        """Report whether the backend can be listed."""
        try:
            keys = await self.list_keys()
            return {"backend": self.backend_name, "configured": True, "objects": len(keys)}
        except Exception as e:
            logger.error(f"Object storage check failed: {e}")
            return {"backend": self.backend_name, "configured": False, "error": str(e)}


class LocalObjectStore(ObjectStore):
    """Stores blobs as files below a root directory, created on first write."""

    backend_name = "local"

    def __init__(self, root_dir: str):
        self.root = Path(root_dir).resolve()

    def _path_for(self, key: str) -> Optional[Path]:
        path = (self.root / key).resolve()
        if path == self.root or self.root not in path.parents:
            logger.warning(f"Rejected object key outside storage root: {key}")
            return None
        return path

    async def put(self, key: str, data: bytes, mime_type: str) -> None:
        path = self._path_for(key)
        if path is None:
            raise StorageError(f"Invalid object key: {key}")

        await aiofiles.os.makedirs(path.parent, exist_ok=True)
        async with aiofiles.open(path, "wb") as f:
            await f.write(data)

    async def get(self, key: str) -> Optional[bytes]:
        path = self._path_for(key)
        if path is None or not await aiofiles.os.path.isfile(path):
            return None

        async with aiofiles.open(path, "rb") as f:
            return await f.read()

    async def delete(self, key: str) -> bool:
        path = self._path_for(key)
        if path is None or not await aiofiles.os.path.isfile(path):
            return False
        await aiofiles.os.remove(path)
        return True

    async def list_keys(self) -> List[str]:
        return await asyncio.to_thread(self._scan_keys)

    def _scan_keys(self) -> List[str]:
        return sorted(
            path.relative_to(self.root).as_posix()
            for path in self.root.rglob("*")
            if path.is_file()
        )


class DatabaseObjectStore(ObjectStore):
    """Stores blobs in the image_storage table of the active storage backend."""

    backend_name = "database"

    def __init__(self, storage: Storage):
        self.storage = storage

    async def put(self, key: str, data: bytes, mime_type: str) -> None:
        await self.storage.save_image_data(key, data, mime_type)

    async def get(self, key: str) -> Optional[bytes]:
        record = await self.storage.get_image_data_by_object_key(key)
        return record.data if record is not None else None

    async def delete(self, key: str) -> bool:
        return await self.storage.delete_image_data_by_object_key(key)

    async def list_keys(self) -> List[str]:
        return [record.object_key for record in await self.storage.get_all_stored_images()]


class MemoryObjectStore(ObjectStore):
    """Keeps blobs in process memory."""

    backend_name = "memory"

    def __init__(self):
        self.blobs: Dict[str, bytes] = {}

    async def put(self, key: str, data: bytes, mime_type: str) -> None:
        self.blobs[key] = bytes(data)

    async def get(self, key: str) -> Optional[bytes]:
        return self.blobs.get(key)

    async def delete(self, key: str) -> bool:
        return self.blobs.pop(key, None) is not None

    async def list_keys(self) -> List[str]:
        return sorted(self.blobs)


def create_object_store(config: Settings, storage: Optional[Storage] = None) -> ObjectStore:
    """
    Build the object store selected by configuration.

    Args:
        config: Application settings
        storage: Storage backing the database object store

    Returns:
        ObjectStore instance
    """
    if config.object_storage_backend == "database":
        if storage is None:
            raise ValueError("The database object store requires a storage backend")
        return DatabaseObjectStore(storage)
    if config.object_storage_backend == "memory":
        return MemoryObjectStore()
    return LocalObjectStore(config.object_storage_dir)
