"""
Moves images from the legacy uploads directory into object storage.
Rows whose url points at /uploads/<file> are repointed at the new object key.
"""

from pathlib import Path
from typing import Dict, List
import logging

import aiofiles
import aiofiles.os

from app.storage.base import Storage
from app.storage.object_store import ObjectStore
from app.utils.exceptions import StorageError
from app.utils.image_refs import content_type_for_key

logger = logging.getLogger(__name__)

LEGACY_UPLOAD_ROUTE = "/uploads/"
LEGACY_IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg")


async def scan_upload_dir(upload_dir: str) -> List[str]:
    """Image filenames directly inside upload_dir, sorted; empty when it is missing."""
    if not await aiofiles.os.path.isdir(upload_dir):
        logger.info(f"Uploads directory does not exist: {upload_dir}")
        return []

    names = []
    for name in sorted(await aiofiles.os.listdir(upload_dir)):
        if not name.lower().endswith(LEGACY_IMAGE_EXTENSIONS):
            continue
        if await aiofiles.os.path.isfile(Path(upload_dir) / name):
            names.append(name)

    logger.info(f"Found {len(names)} image files in {upload_dir}")
    return names


async def migrate_legacy_uploads(storage: Storage, object_store: ObjectStore, upload_dir: str) -> Dict[str, int]:
    """
    Upload every legacy image file and repoint the gallery rows that use it.

    Files that cannot be read or stored are logged and skipped. The files
    themselves are left in place.

    Args:
        storage: Storage holding the gallery rows
        object_store: Destination for the image bytes
        upload_dir: Directory the legacy /uploads route served from

    Returns:
        Counts of files found, uploaded and failed, and of rows updated
    """
    report = {"files": 0, "uploaded": 0, "failed": 0, "property_images": 0, "unit_images": 0}

    names = await scan_upload_dir(upload_dir)
    report["files"] = len(names)
    if not names:
        return report

    property_images, _ = await storage.get_property_images()
    unit_images = []
    for unit in await storage.get_all_property_units():
        unit_images.extend(await storage.get_unit_images(unit.id))

    for name in names:
        mime_type = content_type_for_key(name)
        try:
            async with aiofiles.open(Path(upload_dir) / name, "rb") as f:
                data = await f.read()
            object_key = await object_store.upload(data, name, mime_type)
        except (OSError, StorageError) as e:
            logger.error(f"Failed to migrate {name}: {e}")
            report["failed"] += 1
            continue

        report["uploaded"] += 1
        legacy_url = f"{LEGACY_UPLOAD_ROUTE}{name}"

        for image in property_images:
            if image.url == legacy_url:
                await storage.update_property_image_object_key(image.id, object_key, mime_type, len(data))
                report["property_images"] += 1
                logger.info(f"Property image {image.id} moved to {object_key}")

        for image in unit_images:
            if image.url == legacy_url:
                await storage.update_unit_image_object_key(image.id, object_key, mime_type, len(data))
                report["unit_images"] += 1
                logger.info(f"Unit image {image.id} moved to {object_key}")

    logger.info(f"Legacy upload migration finished: {report}")
    return report
