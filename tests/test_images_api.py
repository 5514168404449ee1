"""
API tests for gallery images, uploads and image serving.
"""

import base64

from httpx import AsyncClient

from tests.conftest import ImageFactory, camel, make_image_bytes


def png_data_url(size=(3, 3)) -> str:
    return "data:image/png;base64," + base64.b64encode(make_image_bytes("PNG", size)).decode("ascii")


class TestPropertyImageEndpoints:
    """Test property gallery endpoints."""

    async def test_create_external_image(self, client: AsyncClient, test_property):
        payload = camel(ImageFactory.create_property_image_data(test_property.id, display_order=2))

        response = await client.post("/api/property-images", json=payload)

        assert response.status_code == 201
        image = response.json()
        assert image["url"] == payload["url"]
        assert image["resolvedUrl"] == payload["url"]
        assert image["sourceType"] == "external"
        assert image["displayOrder"] == 2
        assert image["objectKey"] is None

    async def test_non_http_url_rejected(self, client: AsyncClient, test_property):
        payload = camel(ImageFactory.create_property_image_data(test_property.id, url="/uploads/a.jpg"))

        response = await client.post("/api/property-images", json=payload)

        assert response.status_code == 400

    async def test_image_for_missing_property(self, client: AsyncClient):
        payload = camel(ImageFactory.create_property_image_data(999))

        response = await client.post("/api/property-images", json=payload)

        assert response.status_code == 404

    async def test_gallery_of_property(self, client: AsyncClient, storage, test_property):
        later = await storage.create_property_image(ImageFactory.create_property_image_data(test_property.id, 1))
        first = await storage.create_property_image(ImageFactory.create_property_image_data(test_property.id, 0))

        response = await client.get(f"/api/properties/{test_property.id}/images")

        assert response.status_code == 200
        assert [i["id"] for i in response.json()] == [first.id, later.id]
        assert (await client.get("/api/properties/999/images")).status_code == 404

    async def test_pagination_headers(self, client: AsyncClient, storage, test_property):
        for order in range(5):
            await storage.create_property_image(ImageFactory.create_property_image_data(test_property.id, order))

        response = await client.get("/api/property-images", params={"page": 2, "limit": 2})

        assert response.status_code == 200
        assert len(response.json()) == 2
        assert response.headers["X-Total-Count"] == "5"
        assert response.headers["X-Page"] == "2"
        assert response.headers["X-Limit"] == "2"
        assert response.headers["X-Total-Pages"] == "3"

    async def test_pagination_rejects_bad_page(self, client: AsyncClient):
        response = await client.get("/api/property-images", params={"page": 0})

        assert response.status_code == 400

    async def test_featured_is_exclusive(self, client: AsyncClient, storage, test_property):
        first = await storage.create_property_image(
            ImageFactory.create_property_image_data(test_property.id, is_featured=True)
        )
        second = await storage.create_property_image(ImageFactory.create_property_image_data(test_property.id))

        response = await client.patch(f"/api/property-images/{second.id}/featured", json={"isFeatured": True})

        assert response.status_code == 200
        assert response.json()["isFeatured"] is True

        gallery = (await client.get(f"/api/properties/{test_property.id}/images")).json()
        assert {i["id"]: i["isFeatured"] for i in gallery} == {first.id: False, second.id: True}

    async def test_update_order(self, client: AsyncClient, storage, test_property):
        image = await storage.create_property_image(ImageFactory.create_property_image_data(test_property.id))

        response = await client.patch(f"/api/property-images/{image.id}/order", json={"displayOrder": 4})

        assert response.status_code == 200
        assert response.json()["displayOrder"] == 4

    async def test_order_must_be_an_integer(self, client: AsyncClient, storage, test_property):
        image = await storage.create_property_image(ImageFactory.create_property_image_data(test_property.id))

        response = await client.patch(f"/api/property-images/{image.id}/order", json={"displayOrder": "4"})

        assert response.status_code == 400

    async def test_featured_must_be_a_boolean(self, client: AsyncClient, storage, test_property):
        image = await storage.create_property_image(ImageFactory.create_property_image_data(test_property.id))

        response = await client.patch(f"/api/property-images/{image.id}/featured", json={"isFeatured": "yes"})

        assert response.status_code == 400

    async def test_updates_of_missing_image(self, client: AsyncClient):
        assert (await client.patch("/api/property-images/999/order", json={"displayOrder": 1})).status_code == 404
        assert (await client.patch("/api/property-images/999/featured", json={"isFeatured": True})).status_code == 404
        assert (await client.delete("/api/property-images/999")).status_code == 404


class TestImageUpload:
    """Test multipart uploads into object storage."""

    async def test_upload_and_serve(self, client: AsyncClient, object_store, test_property):
        content = make_image_bytes("PNG")

        response = await client.post(
            f"/api/properties/{test_property.id}/images/upload",
            files={"file": ("front.png", content, "image/png")},
            data={"alt": "Front of the building", "displayOrder": "1", "isFeatured": "true"},
        )

        assert response.status_code == 201
        image = response.json()
        key = image["objectKey"]
        assert key.startswith("images/") and key.endswith(".png")
        assert image["url"] is None
        assert image["alt"] == "Front of the building"
        assert image["displayOrder"] == 1
        assert image["isFeatured"] is True
        assert image["mimeType"] == "image/png"
        assert image["size"] == len(content)
        assert image["sourceType"] == "object-storage"
        assert image["resolvedUrl"] == f"/api/images/{key.replace('/', '%2F')}"
        assert await object_store.get(key) == content

        served = await client.get(image["resolvedUrl"])
        assert served.status_code == 200
        assert served.content == content
        assert served.headers["content-type"] == "image/png"
        assert served.headers["cache-control"] == "public, max-age=86400"

        owned = await client.get(f"/api/property-images/{key}")
        assert owned.status_code == 200
        assert owned.content == content

    async def test_upload_rejects_non_images(self, client: AsyncClient, test_property):
        response = await client.post(
            f"/api/properties/{test_property.id}/images/upload",
            files={"file": ("notes.png", b"not an image", "image/png")},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    async def test_upload_rejects_unsupported_type(self, client: AsyncClient, test_property):
        response = await client.post(
            f"/api/properties/{test_property.id}/images/upload",
            files={"file": ("notes.txt", b"hello", "text/plain")},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "BAD_REQUEST"
        assert "Unsupported file type" in response.json()["error"]["message"]

    async def test_upload_to_missing_property(self, client: AsyncClient):
        response = await client.post(
            "/api/properties/999/images/upload",
            files={"file": ("front.png", make_image_bytes("PNG"), "image/png")},
        )

        assert response.status_code == 404

    async def test_upload_unit_image(self, client: AsyncClient, test_unit):
        response = await client.post(
            f"/api/property-units/{test_unit.id}/images/upload",
            files={"file": ("kitchen.jpg", make_image_bytes("JPEG"), "image/jpeg")},
        )

        assert response.status_code == 201
        assert response.json()["unitId"] == test_unit.id
        assert response.json()["objectKey"].endswith(".jpg")

        gallery = await client.get(f"/api/property-units/{test_unit.id}/images")
        assert [i["id"] for i in gallery.json()] == [response.json()["id"]]

    async def test_delete_removes_blob(self, client: AsyncClient, object_store, test_property):
        uploaded = (await client.post(
            f"/api/properties/{test_property.id}/images/upload",
            files={"file": ("front.png", make_image_bytes("PNG"), "image/png")},
        )).json()

        response = await client.delete(f"/api/property-images/{uploaded['id']}")

        assert response.status_code == 204
        assert await object_store.get(uploaded["objectKey"]) is None
        assert (await client.get(uploaded["resolvedUrl"])).status_code == 404

    async def test_delete_property_removes_gallery_blobs(self, client: AsyncClient, object_store, test_property):
        uploaded = (await client.post(
            f"/api/properties/{test_property.id}/images/upload",
            files={"file": ("front.png", make_image_bytes("PNG"), "image/png")},
        )).json()

        assert (await client.delete(f"/api/properties/{test_property.id}")).status_code == 204

        assert await object_store.get(uploaded["objectKey"]) is None


class TestUnitImageEndpoints:
    """Test unit gallery endpoints."""

    async def test_data_url_is_uploaded(self, client: AsyncClient, object_store, test_unit):
        response = await client.post("/api/unit-images", json={
            "unitId": test_unit.id,
            "data": png_data_url(),
            "filename": "bedroom.png",
            "alt": "Bedroom",
        })

        assert response.status_code == 201
        image = response.json()
        assert image["url"] is None
        assert image["mimeType"] == "image/png"
        assert await object_store.get(image["objectKey"]) is not None

        served = await client.get(f"/api/unit-images/{image['objectKey']}")
        assert served.status_code == 200
        assert served.headers["content-type"] == "image/png"

    async def test_external_url(self, client: AsyncClient, test_unit):
        response = await client.post("/api/unit-images", json={
            "unitId": test_unit.id,
            "url": "https://example.com/unit.jpg",
        })

        assert response.status_code == 201
        assert response.json()["resolvedUrl"] == "https://example.com/unit.jpg"

    async def test_requires_data_or_url(self, client: AsyncClient, test_unit):
        response = await client.post("/api/unit-images", json={"unitId": test_unit.id})

        assert response.status_code == 400
        assert "Either image data or a valid URL is required" in response.text

    async def test_malformed_data_url(self, client: AsyncClient, test_unit):
        response = await client.post("/api/unit-images", json={"unitId": test_unit.id, "data": "not-a-data-url"})

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Invalid image data format"

    async def test_missing_unit(self, client: AsyncClient):
        response = await client.post("/api/unit-images", json={"unitId": 999, "url": "https://example.com/u.jpg"})

        assert response.status_code == 404

    async def test_featured_and_order(self, client: AsyncClient, storage, test_unit):
        first = await storage.create_unit_image(ImageFactory.create_unit_image_data(test_unit.id, is_featured=True))
        second = await storage.create_unit_image(ImageFactory.create_unit_image_data(test_unit.id))

        response = await client.patch(f"/api/unit-images/{second.id}/featured", json={"isFeatured": True})
        assert response.status_code == 200
        assert (await storage.get_unit_image(first.id)).is_featured is False

        response = await client.patch(f"/api/unit-images/{first.id}/order", json={"displayOrder": 3})
        assert response.json()["displayOrder"] == 3

    async def test_delete_removes_database_copy(self, client: AsyncClient, storage, test_unit):
        await storage.save_image_data("dbimg_5.jpg", make_image_bytes("JPEG"), "image/jpeg")
        image = await storage.create_unit_image(
            ImageFactory.create_unit_image_data(test_unit.id, url="/api/db-images/dbimg_5.jpg")
        )

        response = await client.delete(f"/api/unit-images/{image.id}")

        assert response.status_code == 204
        assert await storage.get_image_data_by_object_key("dbimg_5.jpg") is None
        assert (await client.delete(f"/api/unit-images/{image.id}")).status_code == 404


class TestImageServing:
    """Test raw image serving routes."""

    async def test_missing_blob(self, client: AsyncClient):
        response = await client.get("/api/images/images%2Fmissing.jpg")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "IMAGE_NOT_FOUND"

    async def test_content_type_from_key(self, client: AsyncClient, object_store):
        await object_store.put("images/photo.webp", b"webp-bytes", "image/webp")

        response = await client.get("/api/images/images/photo.webp")

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/webp"

    async def test_gallery_routes_require_owning_row(self, client: AsyncClient, object_store):
        await object_store.put("images/orphan.png", b"png", "image/png")

        response = await client.get("/api/property-images/images%2Forphan.png")
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Property image not found"

        response = await client.get("/api/unit-images/images/orphan.png")
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Unit image not found"

    async def test_db_images(self, client: AsyncClient, storage):
        content = make_image_bytes("GIF")
        await storage.save_image_data("dbimg_1.gif", content, "image/gif")

        response = await client.get("/api/db-images/dbimg_1.gif")

        assert response.status_code == 200
        assert response.content == content
        assert response.headers["content-type"] == "image/gif"
        assert (await client.get("/api/db-images/dbimg_2.gif")).status_code == 404

    async def test_list_stored_images(self, client: AsyncClient, storage, object_store):
        await object_store.put("images/a.jpg", b"a", "image/jpeg")
        await object_store.put("images/readme.txt", b"text", "text/plain")
        await storage.save_image_data("dbimg_1.jpg", b"b", "image/jpeg")

        response = await client.get("/api/images")

        assert response.status_code == 200
        body = response.json()
        assert body["images"] == [{"key": "images/a.jpg", "url": "/api/images/images%2Fa.jpg", "source": "object-storage"}]
        assert body["counts"] == {"database": 1, "objectStorage": 1, "total": 2}

    async def test_delete_object(self, client: AsyncClient, object_store):
        await object_store.put("images/a.jpg", b"a", "image/jpeg")

        assert (await client.delete("/api/images/images%2Fa.jpg")).status_code == 204
        assert await object_store.get("images/a.jpg") is None
        assert (await client.delete("/api/images/images%2Fa.jpg")).status_code == 404
