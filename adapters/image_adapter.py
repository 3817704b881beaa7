"""Menu image pipeline adapter: Unsplash search over HTTP, Cloudinary storage via its SDK.
"""

from typing import Any, Dict, List, Optional
import io
import logging

import cloudinary
import cloudinary.api
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError, NotFound
import httpx

from app.config import settings
from app.exceptions import ExternalServiceError

logger = logging.getLogger("foodfly.images")

CLOUDINARY_DELIVERY_URL = "https://res.cloudinary.com"
DEFAULT_TRANSFORMATION = {
    "width": 800,
    "height": 600,
    "crop": "fill",
    "quality": "auto",
    "fetch_format": "auto",
}


def _client() -> httpx.Client:
    return httpx.Client(timeout=settings.http_timeout_sec)


# ------------------ Unsplash ------------------
def search_food_images(query: str, count: int = 1) -> List[Dict[str, Any]]:
    """Search Unsplash for landscape photos matching ``query``."""
    if not settings.unsplash_access_key:
        raise ExternalServiceError("Unsplash is not configured")
    with _client() as client:
        response = client.get(
            f"{settings.unsplash_api_url}/search/photos",
            params={"query": query, "per_page": count, "orientation": "landscape"},
            headers={"Authorization": f"Client-ID {settings.unsplash_access_key}"},
        )
    if response.status_code != 200:
        raise ExternalServiceError(f"Unsplash API error: {response.status_code}")
    return response.json().get("results") or []


def download_image(image_url: str) -> bytes:
    with _client() as client:
        response = client.get(image_url, follow_redirects=True)
    if response.status_code != 200:
        raise ExternalServiceError(f"Failed to download image: {response.status_code}")
    return response.content


# ------------------ Cloudinary ------------------
def _configure_cloudinary() -> None:
    if not (
        settings.cloudinary_cloud_name
        and settings.cloudinary_api_key
        and settings.cloudinary_api_secret
    ):
        raise ExternalServiceError("Cloudinary is not configured")
    cloudinary.config(
        cloud_name=settings.cloudinary_cloud_name,
        api_key=settings.cloudinary_api_key,
        api_secret=settings.cloudinary_api_secret.get_secret_value(),
        secure=True,
    )


def upload_image(
    image: bytes,
    folder: str = "foodfly/menu",
    transformation: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Upload raw image bytes; returns Cloudinary's upload result."""
    _configure_cloudinary()
    try:
        return cloudinary.uploader.upload(
            io.BytesIO(image),
            folder=folder,
            transformation=[transformation or DEFAULT_TRANSFORMATION],
            resource_type="image",
        )
    except CloudinaryError as e:
        raise ExternalServiceError(f"Cloudinary upload failed: {e}")


def destroy_image(public_id: str) -> bool:
    _configure_cloudinary()
    try:
        result = cloudinary.uploader.destroy(public_id)
    except CloudinaryError as e:
        logger.warning("cloudinary_destroy_failed public_id=%s error=%s", public_id, e)
        return False
    return result.get("result") == "ok"


def get_resource(public_id: str) -> Dict[str, Any]:
    """Fetch stored metadata (bytes, format, size, created_at) of an uploaded image."""
    _configure_cloudinary()
    try:
        body = cloudinary.api.resource(public_id)
    except NotFound:
        raise ExternalServiceError(f"Image {public_id} not found on Cloudinary")
    except CloudinaryError as e:
        raise ExternalServiceError(f"Cloudinary API error: {e}")
    fields = ("public_id", "bytes", "format", "width", "height", "created_at", "url")
    return {key: body.get(key) for key in fields}


def delivery_base_url(cloud_name: Optional[str] = None) -> str:
    name = cloud_name or settings.cloudinary_cloud_name
    return f"{CLOUDINARY_DELIVERY_URL}/{name}/image/upload"
