from fastapi import APIRouter, HTTPException

from storefront.errors import CatalogError
from storefront.services.asset_service import list_available_image_assets

router = APIRouter(prefix="/api", tags=["assets"])


@router.get("/product-images", summary="Image files available for variant galleries")
def list_product_images():
    try:
        images = list_available_image_assets()
    except CatalogError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return {"images": images}
