"""
Tests for the storage backends.
Every test runs against both the in-memory and the relational backend.
"""

import pytest

from app.models.location import parse_hotspots
from app.storage import Storage, seed_storage
from app.storage.seed import FEATURES, LOCATIONS, PROPERTIES
from tests.conftest import (
    ImageFactory,
    InquiryFactory,
    LocationFactory,
    PropertyFactory,
    UnitFactory,
)


class TestLocationStorage:
    """Test location and neighborhood operations."""

    async def test_create_and_get_location(self, storage: Storage):
        location = await LocationFactory.create_location(storage, slug="dallas", name="Dallas, Texas")

        assert location.id is not None
        assert (await storage.get_location(location.id)).slug == "dallas"
        assert (await storage.get_location_by_slug("dallas")).id == location.id
        assert await storage.get_location_by_slug("missing") is None

    async def test_update_location(self, storage: Storage, test_location):
        updated = await storage.update_location(test_location.id, {"name": "Midtown"})

        assert updated.name == "Midtown"
        assert updated.slug == "midtown"

    async def test_update_missing_location_returns_none(self, storage: Storage):
        assert await storage.update_location(999, {"name": "Nowhere"}) is None

    async def test_neighborhood_hotspots_round_trip(self, storage: Storage, test_location):
        raw = '[{"name":"Piedmont Park","description":"Green space","distance":"0.3 miles","imageUrl":"https://example.com/p.jpg","link":"https://piedmontpark.org"}]'
        neighborhood = await storage.create_neighborhood({
            "location_id": test_location.id,
            "highlights": "Walkable",
            "explore_hotspots": raw,
        })

        fetched = await storage.get_neighborhood_by_location_id(test_location.id)
        assert fetched.id == neighborhood.id
        assert fetched.explore_hotspots == raw
        assert fetched.hotspots == parse_hotspots(raw)
        assert fetched.hotspots[0]["imageUrl"] == "https://example.com/p.jpg"

    async def test_update_neighborhood(self, storage: Storage, test_location):
        neighborhood = await storage.create_neighborhood({"location_id": test_location.id})
        updated = await storage.update_neighborhood(neighborhood.id, {"attractions": "Museums"})

        assert updated.attractions == "Museums"
        assert updated.hotspots == []


class TestPropertyStorage:
    """Test property and unit operations."""

    async def test_property_defaults(self, storage: Storage, test_location):
        property_obj = await storage.create_property({
            "name": "Defaults",
            "description": "Only required fields",
            "address": "1 Default Way",
            "bedrooms": 1,
            "bathrooms": 1.0,
            "sqft": 500,
            "location_id": test_location.id,
            "image_url": "https://example.com/d.jpg",
            "features": "",
        })

        assert property_obj.available is True
        assert property_obj.property_type == "multi-family"
        assert property_obj.is_multifamily is False
        assert property_obj.unit_count == 0
        assert property_obj.rent is None

    async def test_properties_by_location(self, storage: Storage, test_location):
        other = await LocationFactory.create_location(storage, slug="dallas")
        first = await PropertyFactory.create_property(storage, location_id=test_location.id, name="A")
        await PropertyFactory.create_property(storage, location_id=other.id, name="B")

        properties = await storage.get_properties_by_location(test_location.id)

        assert [p.id for p in properties] == [first.id]
        assert len(await storage.get_properties()) == 2

    async def test_update_property_allows_clearing_rent(self, storage: Storage, test_property):
        updated = await storage.update_property(test_property.id, {"rent": None, "bathrooms": 2.5})

        assert updated.rent is None
        assert updated.bathrooms == 2.5

    async def test_units_sorted_by_unit_number(self, storage: Storage, test_multifamily_property):
        for number in ("201", "101", "102"):
            await storage.create_property_unit(UnitFactory.create_unit_data(test_multifamily_property.id, number))

        units = await storage.get_property_units(test_multifamily_property.id)

        assert [u.unit_number for u in units] == ["101", "102", "201"]
        assert units[0].description == ""
        assert units[0].features == ""
        assert units[0].created_at is not None

    async def test_delete_property_cascades(self, storage: Storage, test_multifamily_property):
        unit = await storage.create_property_unit(UnitFactory.create_unit_data(test_multifamily_property.id))
        unit_image = await storage.create_unit_image(ImageFactory.create_unit_image_data(unit.id))
        property_image = await storage.create_property_image(
            ImageFactory.create_property_image_data(test_multifamily_property.id)
        )

        assert await storage.delete_property(test_multifamily_property.id) is True

        assert await storage.get_property(test_multifamily_property.id) is None
        assert await storage.get_property_unit(unit.id) is None
        assert await storage.get_unit_image(unit_image.id) is None
        assert await storage.get_property_image(property_image.id) is None

    async def test_delete_missing_property(self, storage: Storage):
        assert await storage.delete_property(404) is False

    async def test_delete_unit_cascades_to_images(self, storage: Storage, test_unit):
        image = await storage.create_unit_image(ImageFactory.create_unit_image_data(test_unit.id))

        assert await storage.delete_property_unit(test_unit.id) is True
        assert await storage.get_unit_image(image.id) is None


class TestGalleryStorage:
    """Test gallery ordering and the featured image invariant."""

    async def test_gallery_sorted_by_display_order_then_id(self, storage: Storage, test_property):
        third = await storage.create_property_image(ImageFactory.create_property_image_data(test_property.id, 2))
        first = await storage.create_property_image(ImageFactory.create_property_image_data(test_property.id, 0))
        second = await storage.create_property_image(ImageFactory.create_property_image_data(test_property.id, 0))

        images = await storage.get_property_images_by_property(test_property.id)

        assert [i.id for i in images] == [first.id, second.id, third.id]

    async def test_image_defaults(self, storage: Storage, test_property):
        image = await storage.create_property_image({"property_id": test_property.id, "url": "https://e.com/a.jpg"})

        assert image.alt == ""
        assert image.display_order == 0
        assert image.is_featured is False
        assert image.object_key is None

    async def test_setting_featured_clears_previous(self, storage: Storage, test_property):
        image_a = await storage.create_property_image(ImageFactory.create_property_image_data(test_property.id))
        image_b = await storage.create_property_image(ImageFactory.create_property_image_data(test_property.id))

        await storage.update_property_image_featured(image_b.id, True)
        await storage.update_property_image_featured(image_a.id, True)

        images = await storage.get_property_images_by_property(test_property.id)
        featured = [i.id for i in images if i.is_featured]
        assert featured == [image_a.id]

    async def test_featured_is_scoped_to_parent(self, storage: Storage, test_location):
        first = await PropertyFactory.create_property(storage, location_id=test_location.id)
        second = await PropertyFactory.create_property(storage, location_id=test_location.id)
        image_first = await storage.create_property_image(
            ImageFactory.create_property_image_data(first.id, is_featured=True)
        )
        image_second = await storage.create_property_image(
            ImageFactory.create_property_image_data(second.id)
        )

        await storage.update_property_image_featured(image_second.id, True)

        assert (await storage.get_property_image(image_first.id)).is_featured is True
        assert (await storage.get_property_image(image_second.id)).is_featured is True

    async def test_featured_create_clears_siblings(self, storage: Storage, test_unit):
        old = await storage.create_unit_image(ImageFactory.create_unit_image_data(test_unit.id, is_featured=True))
        new = await storage.create_unit_image(ImageFactory.create_unit_image_data(test_unit.id, is_featured=True))

        images = await storage.get_unit_images(test_unit.id)

        assert {i.id: i.is_featured for i in images} == {old.id: False, new.id: True}

    async def test_unfeature_image(self, storage: Storage, test_unit):
        image = await storage.create_unit_image(ImageFactory.create_unit_image_data(test_unit.id, is_featured=True))

        updated = await storage.update_unit_image_featured(image.id, False)

        assert updated.is_featured is False

    async def test_update_order_and_object_key(self, storage: Storage, test_property):
        image = await storage.create_property_image(ImageFactory.create_property_image_data(test_property.id))

        await storage.update_property_image_order(image.id, 5)
        updated = await storage.update_property_image_object_key(image.id, "images/abc.png", "image/png", 321)

        assert updated.display_order == 5
        assert updated.object_key == "images/abc.png"
        assert updated.size == 321
        assert (await storage.get_property_image_by_object_key("images/abc.png")).id == image.id

    async def test_missing_image_updates_return_none(self, storage: Storage):
        assert await storage.update_property_image_featured(99, True) is None
        assert await storage.update_unit_image_order(99, 1) is None

    async def test_paginated_property_images(self, storage: Storage, test_property):
        for order in range(5):
            await storage.create_property_image(ImageFactory.create_property_image_data(test_property.id, order))

        page, total = await storage.get_property_images(offset=2, limit=2)

        assert total == 5
        assert len(page) == 2


class TestInquiryStorage:
    """Test inquiry operations."""

    async def test_inquiry_default_status(self, storage: Storage):
        data = InquiryFactory.create_inquiry_data()
        inquiry = await storage.create_inquiry(data)

        assert inquiry.status == "new"
        assert inquiry.created_at is not None

    async def test_inquiries_newest_first(self, storage: Storage):
        first = await storage.create_inquiry(InquiryFactory.create_inquiry_data())
        second = await storage.create_inquiry(InquiryFactory.create_inquiry_data())

        inquiries = await storage.get_inquiries()

        assert [i.id for i in inquiries] == [second.id, first.id]

    async def test_update_inquiry_status(self, storage: Storage):
        inquiry = await storage.create_inquiry(InquiryFactory.create_inquiry_data())

        updated = await storage.update_inquiry_status(inquiry.id, "contacted")

        assert updated.status == "contacted"
        assert await storage.update_inquiry_status(999, "resolved") is None


class TestImageDataStorage:
    """Test database-resident image bytes."""

    async def test_save_replaces_existing_bytes(self, storage: Storage):
        await storage.save_image_data("images/a.png", b"first", "image/png")
        saved = await storage.save_image_data("images/a.png", b"second", "image/png")

        record = await storage.get_image_data_by_object_key("images/a.png")
        assert record.id == saved.id
        assert record.data == b"second"
        assert record.size == 6
        assert len(await storage.get_all_stored_images()) == 1

    async def test_delete_image_data(self, storage: Storage):
        await storage.save_image_data("images/b.jpg", b"bytes", "image/jpeg")

        assert await storage.delete_image_data_by_object_key("images/b.jpg") is True
        assert await storage.delete_image_data_by_object_key("images/b.jpg") is False
        assert await storage.get_image_data_by_object_key("images/b.jpg") is None


class TestSeedStorage:
    """Test demo data seeding."""

    async def test_seed_populates_empty_storage(self, storage: Storage):
        assert await seed_storage(storage) is True

        locations = await storage.get_locations()
        assert sorted(l.slug for l in locations) == sorted(l["slug"] for l in LOCATIONS)
        assert len(await storage.get_features()) == len(FEATURES)
        assert len(await storage.get_properties()) == len(PROPERTIES)

        midtown = await storage.get_location_by_slug("midtown")
        neighborhood = await storage.get_neighborhood_by_location_id(midtown.id)
        assert len(neighborhood.hotspots) > 0

    async def test_seed_is_noop_when_locations_exist(self, storage: Storage):
        await seed_storage(storage)

        assert await seed_storage(storage) is False
        assert len(await storage.get_locations()) == len(LOCATIONS)

    async def test_seeded_inquiry_links_property(self, storage: Storage):
        await seed_storage(storage)

        linked = [i for i in await storage.get_inquiries() if i.property_id is not None]

        assert linked
        property_obj = await storage.get_property(linked[0].property_id)
        assert linked[0].property_name == property_obj.name
