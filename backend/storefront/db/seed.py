import json
from typing import Dict, Optional

from sqlalchemy.orm import Session

from storefront.models.product import Product
from storefront.models.store_settings import StoreSettings
from storefront.models.variant import Variant
from storefront.utils.images import clean_images, encode_images

DEFAULT_CATALOG = {
    "product": {
        "title": "Nova Runner",
        "description": "נעל ריצה קלה עם וריאציות צבעים.",
        "base_price": 49900,
    },
    "variants": [
        {
            "color_name": "לבן",
            "color_hex": "#FFFFFF",
            "sku": "NR-WHITE",
            "price_override": None,
            "stock_qty": 12,
            "images": ["/images/white-1.jpg", "/images/white-2.jpg"],
        },
        {
            "color_name": "שחור",
            "color_hex": "#111111",
            "sku": "NR-BLACK",
            "price_override": None,
            "stock_qty": 8,
            "images": ["/images/black-1.jpg", "/images/black-2.jpg"],
        },
        {
            "color_name": "אדום",
            "color_hex": "#D32F2F",
            "sku": "NR-RED",
            "price_override": 52900,
            "stock_qty": 5,
            "images": ["/images/red-1.jpg", "/images/red-2.jpg"],
        },
    ],
    "settings": {
        "shipping_flat_fee": 2500,
        "currency": "ILS",
        "support_email": "support@shos.local",
    },
}


def load_catalog_file(path: str) -> Dict:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except ValueError as e:
            raise RuntimeError(f"Failed to parse JSON from {path}: {e}")
    if not isinstance(data, dict) or "product" not in data:
        raise RuntimeError(f"{path} must hold an object with a 'product' entry")
    return data


def seed_default_catalog(db: Session, catalog: Optional[Dict] = None) -> bool:
    """
    Insert the catalog (product, its variants and the settings row) when the
    store has no product yet. Returns True when rows were written.
    """
    if db.query(Product).first() is not None:
        return False

    catalog = catalog or DEFAULT_CATALOG
    entry = catalog["product"]
    try:
        product = Product(
            title=entry["title"],
            description=entry.get("description"),
            base_price=int(entry.get("base_price", 0)),
            active=True,
        )
        db.add(product)
        db.flush()

        for v in catalog.get("variants", []):
            db.add(
                Variant(
                    product_id=product.id,
                    color_name=v["color_name"],
                    color_hex=v.get("color_hex"),
                    sku=v["sku"],
                    price_override=v.get("price_override"),
                    stock_qty=int(v.get("stock_qty", 0)),
                    images=encode_images(clean_images(v.get("images") or [])),
                )
            )

        if db.query(StoreSettings).first() is None:
            s = catalog.get("settings") or DEFAULT_CATALOG["settings"]
            db.add(
                StoreSettings(
                    shipping_flat_fee=int(s.get("shipping_flat_fee", 0)),
                    currency=s.get("currency", "ILS"),
                    support_email=s.get("support_email"),
                )
            )
        db.commit()
    except Exception:
        db.rollback()
        raise
    return True
