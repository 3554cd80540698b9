from typing import List, Optional

from sqlalchemy.orm import Session

from storefront.models.variant import Variant
from storefront.utils.images import encode_images


class VariantRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, variant_id: int) -> Optional[Variant]:
        return self.db.query(Variant).filter(Variant.id == variant_id).first()

    def get_by_sku(self, sku: str) -> Optional[Variant]:
        return self.db.query(Variant).filter(Variant.sku == sku).first()

    def list_for_product(self, product_id: int) -> List[Variant]:
        return (
            self.db.query(Variant)
            .filter(Variant.product_id == product_id)
            .order_by(Variant.id)
            .all()
        )

    def list_all(self) -> List[Variant]:
        return self.db.query(Variant).order_by(Variant.id).all()

    def create(
        self,
        product_id: int,
        color_name: str,
        color_hex: Optional[str],
        sku: str,
        price_override: Optional[int],
        stock_qty: int,
        images: List[str],
    ) -> Variant:
        v = Variant(
            product_id=product_id,
            color_name=color_name,
            color_hex=color_hex,
            sku=sku,
            price_override=price_override,
            stock_qty=stock_qty,
            images=encode_images(images),
        )
        self.db.add(v)
        self.db.flush()
        return v

    def replace_images(self, variant: Variant, images: List[str]) -> Variant:
        variant.images = encode_images(images)
        self.db.flush()
        return variant
