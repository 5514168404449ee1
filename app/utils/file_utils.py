"""
Image upload helpers.
Validates uploaded image bytes and decodes base64 data URLs before they reach object storage.
"""

import base64
import binascii
import io
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from PIL import Image, UnidentifiedImageError
from fastapi import UploadFile

from app.config import get_settings
from app.utils.exceptions import (
    FileSizeExceededError,
    FileUploadError,
    UnsupportedFileTypeError,
    ValidationError,
)

settings = get_settings()

DATA_URL_PATTERN = re.compile(r"^data:([A-Za-z\-+/]+);base64,(.+)$", re.DOTALL)

# MIME types and their preferred key extension first
MIME_EXTENSIONS: Dict[str, List[str]] = {
    "image/jpeg": [".jpg", ".jpeg"],
    "image/png": [".png"],
    "image/gif": [".gif"],
    "image/webp": [".webp"],
}

PIL_FORMATS = {
    "image/jpeg": "jpeg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}


@dataclass
class ValidatedImage:
    """Image bytes that passed validation."""
    data: bytes
    mime_type: str
    filename: str
    width: int
    height: int

    @property
    def size(self) -> int:
        return len(self.data)


class FileValidator:
    """Utility class for image validation operations."""

    def __init__(self, max_file_size: Optional[int] = None, allowed_types: Optional[List[str]] = None):
        self.max_file_size = max_file_size or settings.max_file_size
        self.allowed_types = allowed_types or settings.allowed_file_types

    def validate_mime_type(self, mime_type: Optional[str]) -> str:
        """
        Validate MIME type.

        Args:
            mime_type: MIME type to validate

        Returns:
            Validated MIME type

        Raises:
            ValidationError: If the MIME type is missing
            UnsupportedFileTypeError: If the MIME type is not accepted
        """
        if not mime_type:
            raise ValidationError("MIME type is required")

        mime_type = mime_type.lower()
        if mime_type == "image/jpg":
            mime_type = "image/jpeg"

        if mime_type not in self.allowed_types or mime_type not in MIME_EXTENSIONS:
            raise UnsupportedFileTypeError(mime_type, self.allowed_types)

        return mime_type

    def validate_file_size(self, file_size: int) -> int:
        """
        Validate file size.

        Raises:
            ValidationError: If the file is empty
            FileSizeExceededError: If the file exceeds the limit
        """
        if file_size <= 0:
            raise ValidationError("File size must be greater than 0")

        if file_size > self.max_file_size:
            raise FileSizeExceededError(file_size, self.max_file_size)

        return file_size

    def validate_image(self, data: bytes, mime_type: Optional[str], filename: Optional[str] = None) -> ValidatedImage:
        """
        Validate raw image bytes with Pillow.

        Args:
            data: Image bytes
            mime_type: Declared MIME type
            filename: Original filename; generated from the MIME type when missing

        Returns:
            ValidatedImage with dimensions and a filename carrying a matching extension

        Raises:
            ValidationError: If any validation fails
        """
        mime_type = self.validate_mime_type(mime_type)
        self.validate_file_size(len(data))

        try:
            with Image.open(io.BytesIO(data)) as img:
                width, height = img.size
                pil_format = (img.format or "").lower()
        except (UnidentifiedImageError, OSError) as e:
            raise ValidationError(f"Invalid image file: {e}")

        if pil_format != PIL_FORMATS[mime_type]:
            raise ValidationError(f"Image format '{pil_format}' doesn't match MIME type '{mime_type}'")

        extensions = MIME_EXTENSIONS[mime_type]
        if not filename or Path(filename).suffix.lower() not in extensions:
            stem = Path(filename).stem if filename else "image"
            filename = f"{stem}{extensions[0]}"

        return ValidatedImage(data=data, mime_type=mime_type, filename=filename, width=width, height=height)

    async def validate_upload_file(self, file: UploadFile) -> ValidatedImage:
        """
        Read and validate an uploaded file.

        Args:
            file: FastAPI UploadFile object

        Returns:
            ValidatedImage

        Raises:
            FileUploadError: If the upload has no filename
            ValidationError: If the image fails validation
        """
        if not file.filename:
            raise FileUploadError("Filename is required")

        await file.seek(0)
        content = await file.read()
        return self.validate_image(content, file.content_type, file.filename)

    def validate_data_url(self, data_url: str, filename: Optional[str] = None) -> ValidatedImage:
        """
        Decode and validate a base64 data URL.

        Args:
            data_url: String of the form data:<mime>;base64,<payload>
            filename: Optional original filename

        Returns:
            ValidatedImage

        Raises:
            ValidationError: If the data URL is malformed or the image is invalid
        """
        match = DATA_URL_PATTERN.match(data_url.strip())
        if not match:
            raise ValidationError("Invalid image data format")

        mime_type, payload = match.groups()
        try:
            data = base64.b64decode(payload, validate=False)
        except (binascii.Error, ValueError) as e:
            raise ValidationError(f"Invalid base64 image data: {e}")

        return self.validate_image(data, mime_type, filename)
