"""Admin menu image pipeline routes (Unsplash -> Cloudinary)"""

from fastapi import APIRouter, Depends, Query
import logging
from typing import Any, Dict

from api.dependencies import require_admin
from api.responses import success_response
from domain.schemas.admin_schemas import ProcessImagesRequest
from services.image_service import ImageService

router = APIRouter(prefix="/admin/process-images", tags=["Admin"])
logger = logging.getLogger("foodfly.api.admin_images")


@router.post("")
def process_images(
    payload: ProcessImagesRequest, admin: Dict[str, Any] = Depends(require_admin)
):
    """
    Fetch, upload and size images for menu items.

    ``mode=single`` processes the first item and fails loudly; ``mode=batch``
    processes all items and reports per-item failures in the results.
    """
    items = [i.model_dump() for i in payload.menu_items]
    results = ImageService.process(items, payload.mode)
    return success_response(
        {"results": results}, f"Successfully processed {len(results)} images"
    )


@router.get("")
def image_analytics(
    public_id: str = Query(..., alias="publicId"),
    admin: Dict[str, Any] = Depends(require_admin),
):
    return success_response({"analytics": ImageService.analytics(public_id)})


@router.delete("")
def delete_image(
    public_id: str = Query(..., alias="publicId"),
    admin: Dict[str, Any] = Depends(require_admin),
):
    ImageService.delete(public_id)
    return success_response(None, "Image deleted successfully")
