from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.db import get_db
from storefront.errors import CatalogError
from storefront.schemas.catalog_schema import (
    VariantImagesOut,
    VariantOut,
    VariantSummaryOut,
)
from storefront.services.catalog_service import CatalogService

router = APIRouter(prefix="/api/variants", tags=["variants"])


@router.get("", summary="List variants for admin tooling")
def list_variants(db: Session = Depends(get_db)):
    svc = CatalogService(db)
    try:
        variants = svc.list_variants_summary()
    except CatalogError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return {
        "variants": [VariantSummaryOut.model_validate(v).model_dump() for v in variants]
    }


@router.post("", status_code=201, summary="Create a variant of the active product")
def create_variant(payload: dict, db: Session = Depends(get_db)):
    """
    payload: { "color_name": "Red", "color_hex": "#D32F2F", "sku": "NR-RED",
               "price_override": 52900, "stock_qty": 5, "images": ["/a.jpg"] }
    """
    svc = CatalogService(db)
    try:
        variant = svc.create_variant(
            color_name=payload.get("color_name"),
            sku=payload.get("sku"),
            stock_qty=payload.get("stock_qty"),
            color_hex=payload.get("color_hex"),
            price_override=payload.get("price_override"),
            images=payload.get("images"),
        )
    except CatalogError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return {"variant": VariantOut.model_validate(variant).model_dump()}


@router.put("/{variant_id}/images", summary="Replace a variant's image list")
def replace_variant_images(variant_id: str, payload: dict, db: Session = Depends(get_db)):
    """
    payload: { "images": ["/api/product-assets/red-1.jpg", ...] }
    """
    svc = CatalogService(db)
    try:
        variant = svc.replace_variant_images(variant_id, payload.get("images"))
    except CatalogError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return {"variant": VariantImagesOut.model_validate(variant).model_dump()}
