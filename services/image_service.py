from typing import Any, Dict, List
import logging
import re
import time

from adapters import image_adapter
from app.config import settings
from app.exceptions import ExternalServiceError, FoodFlyError, NotFoundError

logger = logging.getLogger("foodfly.images")

MENU_FOLDER = "foodfly/menu"
SIZE_VARIANTS = {
    "thumbnail": "w_200,h_200",
    "small": "w_400,h_300",
    "medium": "w_800,h_600",
    "large": "w_1200,h_900",
}


def category_folder(category: str) -> str:
    """``foodfly/menu/<category slug>``"""
    slug = re.sub(r"\s+", "-", category.strip().lower())
    return f"{MENU_FOLDER}/{slug}"


def optimized_urls(public_id: str, base_url: str) -> Dict[str, str]:
    urls = {
        name: f"{base_url}/{size},c_fill,f_auto,q_auto/{public_id}"
        for name, size in SIZE_VARIANTS.items()
    }
    urls["original"] = f"{base_url}/{public_id}"
    return urls


class ImageService:
    @staticmethod
    def process_menu_image(name: str, category: str) -> Dict[str, Any]:
        """
        Search -> download -> upload for one dish.

        Returns:
            {"public_id", "urls": {thumbnail, small, medium, large, original}, "metadata"}

        Raises:
            NotFoundError: Unsplash returned no photo for the dish
            ExternalServiceError: any upstream call failed
        """
        query = f"{name} food {category}"
        images = image_adapter.search_food_images(query, 1)
        if not images:
            raise NotFoundError(f"No images found for: {query}")
        image = image_adapter.download_image(images[0]["urls"]["regular"])
        upload = image_adapter.upload_image(image, category_folder(category))
        public_id = upload["public_id"]
        logger.info("menu_image_uploaded public_id=%s query=%r", public_id, query)
        return {
            "public_id": public_id,
            "urls": optimized_urls(public_id, image_adapter.delivery_base_url()),
            "metadata": {
                "width": upload.get("width"),
                "height": upload.get("height"),
                "format": upload.get("format"),
                "bytes": upload.get("bytes"),
            },
        }

    @staticmethod
    def batch_process(items: List[Dict[str, str]]) -> Dict[str, Dict[str, Any]]:
        """
        Process menu items in batches with a pause between batches.

        A failing item is reported under its id and does not stop the batch.
        """
        results: Dict[str, Dict[str, Any]] = {}
        size = max(1, settings.image_batch_size)
        for start in range(0, len(items), size):
            for item in items[start : start + size]:
                try:
                    data = ImageService.process_menu_image(item["name"], item["category"])
                    results[item["id"]] = {"success": True, "data": data}
                except FoodFlyError as e:
                    logger.warning(
                        "menu_image_failed item_id=%s error=%s", item["id"], e.message
                    )
                    results[item["id"]] = {"success": False, "error": e.message}
            if start + size < len(items):
                time.sleep(settings.image_batch_delay_sec)
        return results

    @staticmethod
    def process(items: List[Dict[str, str]], mode: str = "single") -> Dict[str, Dict[str, Any]]:
        if mode == "batch":
            return ImageService.batch_process(items)
        item = items[0]
        return {
            item["id"]: {
                "success": True,
                "data": ImageService.process_menu_image(item["name"], item["category"]),
            }
        }

    @staticmethod
    def analytics(public_id: str) -> Dict[str, Any]:
        return image_adapter.get_resource(public_id)

    @staticmethod
    def delete(public_id: str) -> None:
        if not image_adapter.destroy_image(public_id):
            raise ExternalServiceError("Failed to delete image")
        logger.info("menu_image_deleted public_id=%s", public_id)
