"""
Image reference resolution.
Maps the image reference strings stored on rows to the URL that serves the bytes.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

PLACEHOLDER_IMAGE_URL = "/placeholder-image.jpg"

OBJECT_STORAGE_PREFIX = "images/"

SOURCE_EXTERNAL = "external"
SOURCE_LEGACY = "legacy"
SOURCE_DATABASE = "database"
SOURCE_PROPERTY = "property"
SOURCE_UNIT = "unit"
SOURCE_OBJECT_STORAGE = "object-storage"
SOURCE_UNKNOWN = "unknown"

# Routes that already serve bytes, most specific first
SERVED_ROUTES = (
    ("/api/db-images/", SOURCE_DATABASE),
    ("/api/property-images/", SOURCE_PROPERTY),
    ("/api/unit-images/", SOURCE_UNIT),
)

SYNTHETIC_PREFIXES = (
    ("dbimg_", "/api/db-images/", SOURCE_DATABASE),
    ("propimg_", "/api/property-images/", SOURCE_PROPERTY),
    ("unitimg_", "/api/unit-images/", SOURCE_UNIT),
)

HINT_ROUTES = {
    "property": ("/api/property-images/", SOURCE_PROPERTY),
    "unit": ("/api/unit-images/", SOURCE_UNIT),
}

CONTENT_TYPES = {
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
}

LISTABLE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp")


@dataclass(frozen=True)
class ResolvedImage:
    """A dereferenceable image URL and where its bytes come from."""
    url: str
    source_type: str


def encode_key(key: str) -> str:
    """Percent-encode a key the way encodeURIComponent does."""
    return quote(key, safe="-_.!~*'()")


def resolve_image_ref(ref: Optional[str], hint: Optional[str] = None) -> ResolvedImage:
    """
    Resolve a stored image reference.

    Checks run most specific first so that an already resolved
    /api/property-images/... URL is never encoded a second time.

    Args:
        ref: Stored reference: external URL, legacy path, served route or object key
        hint: Optional "property" or "unit" to route bare keys to that gallery

    Returns:
        ResolvedImage with the URL and its source type
    """
    if not ref:
        return ResolvedImage(PLACEHOLDER_IMAGE_URL, SOURCE_UNKNOWN)

    if ref.startswith("http"):
        return ResolvedImage(ref, SOURCE_EXTERNAL)

    if ref.startswith("/uploads/"):
        return ResolvedImage(ref, SOURCE_LEGACY)

    for route, source_type in SERVED_ROUTES:
        if ref.startswith(route):
            return ResolvedImage(ref, source_type)

    if hint in HINT_ROUTES:
        route, source_type = HINT_ROUTES[hint]
        return ResolvedImage(f"{route}{encode_key(ref)}", source_type)

    for prefix, route, source_type in SYNTHETIC_PREFIXES:
        if ref.startswith(prefix):
            return ResolvedImage(f"{route}{ref}", source_type)

    if ref.startswith(OBJECT_STORAGE_PREFIX):
        return ResolvedImage(f"/api/images/{encode_key(ref)}", SOURCE_OBJECT_STORAGE)

    return ResolvedImage(ref, SOURCE_UNKNOWN)


def get_image_url(ref: Optional[str], hint: Optional[str] = None) -> str:
    """Shortcut returning only the resolved URL."""
    return resolve_image_ref(ref, hint).url


def get_image_source_type(ref: Optional[str]) -> str:
    """Shortcut returning only the source classification."""
    return resolve_image_ref(ref).source_type


def is_object_storage_key(ref: Optional[str]) -> bool:
    """Whether ref is a raw object storage key."""
    return bool(ref) and ref.startswith(OBJECT_STORAGE_PREFIX)


def get_filename_from_object_key(ref: Optional[str]) -> str:
    """
    Extract the bare filename from a key or served image URL.
    Applying it to its own result returns the same value.
    """
    if not ref:
        return ""

    for route in ("/api/images/", "/api/db-images/", "/api/property-images/", "/api/unit-images/"):
        if ref.startswith(route):
            ref = ref[len(route):]
            break

    return ref.split("/")[-1]


def content_type_for_key(key: str) -> str:
    """Content type for a key, derived from its extension; defaults to JPEG."""
    lowered = key.lower()
    for extension, content_type in CONTENT_TYPES.items():
        if lowered.endswith(extension):
            return content_type
    return "image/jpeg"


def is_listable_image_key(key: str) -> bool:
    """Whether a stored key has a raster image extension."""
    return key.lower().endswith(LISTABLE_EXTENSIONS)
