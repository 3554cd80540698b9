from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.db import get_db
from storefront.errors import CatalogError
from storefront.schemas.catalog_schema import ProductBundleOut, ProductOut
from storefront.services.catalog_service import CatalogService

router = APIRouter(prefix="/api/product", tags=["catalogue"])


@router.get("", summary="Active product with its variants and store settings")
def get_product(db: Session = Depends(get_db)):
    svc = CatalogService(db)
    try:
        bundle = svc.get_active_product_bundle()
    except CatalogError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return ProductBundleOut.model_validate(bundle, from_attributes=True).model_dump()


@router.put("/{product_id}", summary="Update product details")
def update_product(product_id: str, payload: dict, db: Session = Depends(get_db)):
    """
    payload: { "title": "...", "description": "...", "base_price": 49900 }
    """
    svc = CatalogService(db)
    try:
        product = svc.update_product(
            product_id,
            title=payload.get("title"),
            description=payload.get("description"),
            base_price=payload.get("base_price"),
        )
    except CatalogError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return {"product": ProductOut.model_validate(product).model_dump()}
