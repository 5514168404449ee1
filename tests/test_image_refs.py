"""
Tests for image reference resolution and key helpers.
"""

import pytest

from app.utils.image_refs import (
    PLACEHOLDER_IMAGE_URL,
    ResolvedImage,
    content_type_for_key,
    encode_key,
    get_filename_from_object_key,
    get_image_source_type,
    get_image_url,
    is_listable_image_key,
    is_object_storage_key,
    resolve_image_ref,
)


class TestResolveImageRef:
    """Test the resolution order of stored image references."""

    @pytest.mark.parametrize("ref", [None, ""])
    def test_empty_reference_resolves_to_placeholder(self, ref):
        assert resolve_image_ref(ref) == ResolvedImage(PLACEHOLDER_IMAGE_URL, "unknown")

    @pytest.mark.parametrize("ref", [
        "https://i.imgur.com/O9Fu46o.png",
        "http://example.com/images/a.jpg",
        "https://example.com/images/with space.jpg",
    ])
    def test_external_urls_are_unchanged(self, ref):
        resolved = resolve_image_ref(ref)
        assert resolved.url == ref
        assert resolved.source_type == "external"

    def test_external_url_wins_over_hint(self):
        assert resolve_image_ref("https://example.com/a.png", hint="unit").source_type == "external"

    def test_legacy_upload_path(self):
        resolved = resolve_image_ref("/uploads/123-photo.jpg")
        assert resolved == ResolvedImage("/uploads/123-photo.jpg", "legacy")

    @pytest.mark.parametrize("ref, source_type", [
        ("/api/db-images/dbimg_1.jpg", "database"),
        ("/api/property-images/images%2Fabc.png", "property"),
        ("/api/unit-images/images%2Fdef.png", "unit"),
    ])
    def test_served_routes_are_never_encoded_again(self, ref, source_type):
        assert resolve_image_ref(ref) == ResolvedImage(ref, source_type)
        assert resolve_image_ref(ref, hint="property").url == ref

    def test_hint_routes_key_to_gallery(self):
        assert resolve_image_ref("images/abc.png", hint="property") == ResolvedImage(
            "/api/property-images/images%2Fabc.png", "property"
        )
        assert resolve_image_ref("images/abc.png", hint="unit") == ResolvedImage(
            "/api/unit-images/images%2Fabc.png", "unit"
        )

    def test_unknown_hint_is_ignored(self):
        assert resolve_image_ref("images/abc.png", hint="location").source_type == "object-storage"

    @pytest.mark.parametrize("ref, expected", [
        ("dbimg_42.jpg", ResolvedImage("/api/db-images/dbimg_42.jpg", "database")),
        ("propimg_7.png", ResolvedImage("/api/property-images/propimg_7.png", "property")),
        ("unitimg_3.webp", ResolvedImage("/api/unit-images/unitimg_3.webp", "unit")),
    ])
    def test_synthetic_prefixes_are_prepended_without_encoding(self, ref, expected):
        assert resolve_image_ref(ref) == expected

    @pytest.mark.parametrize("ref, expected_url", [
        ("images/abc123.jpg", "/api/images/images%2Fabc123.jpg"),
        ("images/nested/a b.png", "/api/images/images%2Fnested%2Fa%20b.png"),
        ("images/x&y=z.gif", "/api/images/images%2Fx%26y%3Dz.gif"),
    ])
    def test_object_storage_keys(self, ref, expected_url):
        assert resolve_image_ref(ref) == ResolvedImage(expected_url, "object-storage")

    @pytest.mark.parametrize("ref", ["photo.jpg", "assets/photo.jpg", "ftp://example.com/a.jpg"])
    def test_unrecognized_references_are_unchanged(self, ref):
        assert resolve_image_ref(ref) == ResolvedImage(ref, "unknown")

    def test_shortcuts(self):
        assert get_image_url("images/a.jpg") == "/api/images/images%2Fa.jpg"
        assert get_image_url(None) == PLACEHOLDER_IMAGE_URL
        assert get_image_source_type("/uploads/a.jpg") == "legacy"


class TestKeyHelpers:
    """Test object key helpers."""

    def test_encode_key_matches_encode_uri_component(self):
        assert encode_key("images/a b/c.jpg") == "images%2Fa%20b%2Fc.jpg"
        assert encode_key("it's-(ok)_~!*.png") == "it's-(ok)_~!*.png"

    @pytest.mark.parametrize("ref, filename", [
        ("images/abc.jpg", "abc.jpg"),
        ("/api/images/images/abc.jpg", "abc.jpg"),
        ("/api/db-images/dbimg_1.jpg", "dbimg_1.jpg"),
        ("/api/property-images/images/p.png", "p.png"),
        ("/api/unit-images/u.png", "u.png"),
        ("plain.gif", "plain.gif"),
        ("", ""),
        (None, ""),
    ])
    def test_get_filename_from_object_key(self, ref, filename):
        assert get_filename_from_object_key(ref) == filename

    @pytest.mark.parametrize("ref", ["images/abc.jpg", "/api/db-images/x/y.png", "/api/unit-images/z", "a/b/c"])
    def test_filename_extraction_is_idempotent(self, ref):
        once = get_filename_from_object_key(ref)
        assert get_filename_from_object_key(once) == once

    def test_is_object_storage_key(self):
        assert is_object_storage_key("images/abc.jpg")
        assert not is_object_storage_key("/api/images/images%2Fabc.jpg")
        assert not is_object_storage_key(None)

    @pytest.mark.parametrize("key, content_type", [
        ("images/a.png", "image/png"),
        ("images/a.GIF", "image/gif"),
        ("images/a.webp", "image/webp"),
        ("images/a.svg", "image/svg+xml"),
        ("images/a.jpg", "image/jpeg"),
        ("images/a", "image/jpeg"),
    ])
    def test_content_type_for_key(self, key, content_type):
        assert content_type_for_key(key) == content_type

    def test_listable_image_keys(self):
        assert is_listable_image_key("images/a.JPEG")
        assert is_listable_image_key("images/a.webp")
        assert not is_listable_image_key("images/a.svg")
        assert not is_listable_image_key("images/readme.txt")
