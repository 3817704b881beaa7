"""
Tests for the admin menu image pipeline.

Route and service tests replace the image adapter functions with fakes and
cover search -> download -> upload, size variants, batching and per-item
failures. The adapter tests at the bottom stub the Cloudinary SDK calls.
"""

import cloudinary
import cloudinary.api
import cloudinary.exceptions
import cloudinary.uploader
import pytest
from pydantic import SecretStr

from adapters import image_adapter
from app.config import settings
from app.exceptions import ExternalServiceError
from services import image_service
from services.image_service import ImageService, category_folder, optimized_urls
from test_fixtures import auth_headers, client, db, make_user

BASE = "https://res.cloudinary.com/foodfly/image/upload"


@pytest.fixture
def fake_cloud(monkeypatch):
    """Successful upstream calls; records what was uploaded"""
    uploads = []

    def search(query, count=1):
        if "Nothing" in query:
            return []
        return [{"urls": {"regular": f"https://images.example.com/{query}.jpg"}}]

    def upload(image, folder, transformation=None):
        public_id = f"{folder}/{len(uploads) + 1}"
        uploads.append({"folder": folder, "transformation": transformation, "bytes": image})
        return {"public_id": public_id, "width": 800, "height": 600, "format": "jpg", "bytes": 51234}

    monkeypatch.setattr(image_adapter, "search_food_images", search)
    monkeypatch.setattr(image_adapter, "download_image", lambda url: b"jpeg-bytes")
    monkeypatch.setattr(image_adapter, "upload_image", upload)
    monkeypatch.setattr(image_adapter, "delivery_base_url", lambda cloud_name=None: BASE)
    monkeypatch.setattr(settings, "image_batch_delay_sec", 0)
    return uploads


@pytest.fixture
def admin_headers(db):
    return auth_headers(make_user(db, role="admin"))


def test_category_folder():
    assert category_folder("Main Course") == "foodfly/menu/main-course"
    assert category_folder("  Bar  Tidbits ") == "foodfly/menu/bar-tidbits"


def test_optimized_urls():
    urls = optimized_urls("foodfly/menu/pasta/1", BASE)

    assert set(urls) == {"thumbnail", "small", "medium", "large", "original"}
    assert urls["thumbnail"] == f"{BASE}/w_200,h_200,c_fill,f_auto,q_auto/foodfly/menu/pasta/1"
    assert urls["original"] == f"{BASE}/foodfly/menu/pasta/1"


def test_process_single_image(fake_cloud, admin_headers):
    response = client.post(
        "/admin/process-images",
        json={"menu_items": [{"id": "fattoush", "name": "Fattoush", "category": "Salads"}]},
        headers=admin_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Successfully processed 1 images"
    result = body["data"]["results"]["fattoush"]
    assert result["success"] is True
    assert result["data"]["public_id"] == "foodfly/menu/salads/1"
    assert result["data"]["metadata"]["format"] == "jpg"
    assert fake_cloud[0]["folder"] == "foodfly/menu/salads"
    assert fake_cloud[0]["bytes"] == b"jpeg-bytes"


def test_single_mode_only_processes_first_item(fake_cloud, admin_headers):
    response = client.post(
        "/admin/process-images",
        json={
            "menu_items": [
                {"id": "a", "name": "Garlic Bread", "category": "Bar Tidbits"},
                {"id": "b", "name": "Tiramisu", "category": "Desserts"},
            ]
        },
        headers=admin_headers,
    )
    assert list(response.json()["data"]["results"]) == ["a"]
    assert len(fake_cloud) == 1


def test_single_mode_surfaces_failures(fake_cloud, admin_headers):
    response = client.post(
        "/admin/process-images",
        json={"menu_items": [{"id": "x", "name": "Nothing", "category": "Soups"}]},
        headers=admin_headers,
    )
    assert response.status_code == 404
    assert response.json()["error"].startswith("No images found for")


def test_batch_mode_reports_per_item_failures(fake_cloud, admin_headers, monkeypatch):
    monkeypatch.setattr(settings, "image_batch_size", 2)
    items = [
        {"id": "1", "name": "Pasta Alfredo", "category": "Pasta"},
        {"id": "2", "name": "Nothing", "category": "Pasta"},
        {"id": "3", "name": "Brownie", "category": "Desserts"},
    ]

    response = client.post(
        "/admin/process-images",
        json={"menu_items": items, "mode": "batch"},
        headers=admin_headers,
    )

    results = response.json()["data"]["results"]
    assert results["1"]["success"] is True
    assert results["2"] == {"success": False, "error": "No images found for: Nothing food Pasta"}
    assert results["3"]["success"] is True
    assert len(fake_cloud) == 2


def test_batch_sleeps_between_batches_only(fake_cloud, monkeypatch):
    sleeps = []
    monkeypatch.setattr(settings, "image_batch_size", 2)
    monkeypatch.setattr(settings, "image_batch_delay_sec", 1.5)
    monkeypatch.setattr(image_service.time, "sleep", sleeps.append)
    items = [{"id": str(i), "name": f"Dish {i}", "category": "Chinese"} for i in range(5)]

    ImageService.batch_process(items)

    assert sleeps == [1.5, 1.5]


def test_empty_request_is_rejected(admin_headers):
    response = client.post("/admin/process-images", json={"menu_items": []}, headers=admin_headers)
    assert response.status_code == 422


def test_unconfigured_provider_is_a_gateway_error(admin_headers, monkeypatch):
    monkeypatch.setattr(settings, "unsplash_access_key", None)
    response = client.post(
        "/admin/process-images",
        json={"menu_items": [{"id": "a", "name": "Soup", "category": "Soups"}]},
        headers=admin_headers,
    )
    assert response.status_code == 502
    assert response.json()["error"] == "Unsplash is not configured"


def test_image_analytics(admin_headers, monkeypatch):
    monkeypatch.setattr(
        image_adapter,
        "get_resource",
        lambda public_id: {"public_id": public_id, "bytes": 51234, "format": "jpg"},
    )
    response = client.get(
        "/admin/process-images", params={"publicId": "foodfly/menu/pasta/1"}, headers=admin_headers
    )
    assert response.json()["data"]["analytics"]["bytes"] == 51234


def test_delete_image(admin_headers, monkeypatch):
    deleted = []
    monkeypatch.setattr(image_adapter, "destroy_image", lambda pid: deleted.append(pid) or True)

    response = client.delete(
        "/admin/process-images", params={"publicId": "foodfly/menu/pasta/1"}, headers=admin_headers
    )
    assert response.status_code == 200
    assert deleted == ["foodfly/menu/pasta/1"]


def test_delete_image_failure(admin_headers, monkeypatch):
    monkeypatch.setattr(image_adapter, "destroy_image", lambda pid: False)

    response = client.delete(
        "/admin/process-images", params={"publicId": "missing"}, headers=admin_headers
    )
    assert response.status_code == 502
    assert response.json()["error"] == "Failed to delete image"


# =============================================================================
# CLOUDINARY SDK CALLS
# =============================================================================


@pytest.fixture
def cloudinary_sdk(monkeypatch):
    """Configured credentials and recorded SDK calls instead of network traffic"""
    calls = {"config": [], "upload": [], "destroy": []}
    monkeypatch.setattr(settings, "cloudinary_cloud_name", "foodfly")
    monkeypatch.setattr(settings, "cloudinary_api_key", "key-123")
    monkeypatch.setattr(settings, "cloudinary_api_secret", SecretStr("secret-456"))
    monkeypatch.setattr(cloudinary, "config", lambda **kw: calls["config"].append(kw))

    def upload(file, **options):
        calls["upload"].append({"bytes": file.read(), **options})
        return {"public_id": f"{options['folder']}/abc", "format": "jpg"}

    def destroy(public_id):
        calls["destroy"].append(public_id)
        return {"result": "ok" if public_id.startswith("foodfly/") else "not found"}

    monkeypatch.setattr(cloudinary.uploader, "upload", upload)
    monkeypatch.setattr(cloudinary.uploader, "destroy", destroy)
    return calls


def test_upload_uses_sdk(cloudinary_sdk):
    result = image_adapter.upload_image(b"jpeg-bytes", "foodfly/menu/pasta")

    assert result["public_id"] == "foodfly/menu/pasta/abc"
    assert cloudinary_sdk["config"][0]["cloud_name"] == "foodfly"
    assert cloudinary_sdk["config"][0]["api_secret"] == "secret-456"
    upload = cloudinary_sdk["upload"][0]
    assert upload["bytes"] == b"jpeg-bytes"
    assert upload["folder"] == "foodfly/menu/pasta"
    assert upload["resource_type"] == "image"
    assert upload["transformation"] == [image_adapter.DEFAULT_TRANSFORMATION]


def test_upload_failure_is_a_gateway_error(cloudinary_sdk, monkeypatch):
    def failing_upload(file, **options):
        raise cloudinary.exceptions.Error("Invalid image file")

    monkeypatch.setattr(cloudinary.uploader, "upload", failing_upload)

    with pytest.raises(ExternalServiceError) as exc:
        image_adapter.upload_image(b"not-an-image")
    assert "Invalid image file" in exc.value.message


def test_destroy_reports_result(cloudinary_sdk):
    assert image_adapter.destroy_image("foodfly/menu/pasta/abc") is True
    assert image_adapter.destroy_image("elsewhere/abc") is False
    assert cloudinary_sdk["destroy"] == ["foodfly/menu/pasta/abc", "elsewhere/abc"]


def test_resource_metadata(cloudinary_sdk, monkeypatch):
    monkeypatch.setattr(
        cloudinary.api,
        "resource",
        lambda public_id: {"public_id": public_id, "bytes": 51234, "format": "jpg", "etag": "x"},
    )

    info = image_adapter.get_resource("foodfly/menu/pasta/abc")

    assert info["bytes"] == 51234
    assert "etag" not in info


def test_missing_resource(cloudinary_sdk, monkeypatch):
    def not_found(public_id):
        raise cloudinary.exceptions.NotFound(f"Resource not found - {public_id}")

    monkeypatch.setattr(cloudinary.api, "resource", not_found)

    with pytest.raises(ExternalServiceError) as exc:
        image_adapter.get_resource("foodfly/menu/gone")
    assert exc.value.message == "Image foodfly/menu/gone not found on Cloudinary"


def test_unconfigured_cloudinary(monkeypatch):
    monkeypatch.setattr(settings, "cloudinary_api_secret", None)

    with pytest.raises(ExternalServiceError) as exc:
        image_adapter.upload_image(b"jpeg-bytes")
    assert exc.value.message == "Cloudinary is not configured"
