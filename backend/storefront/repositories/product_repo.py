from typing import Optional

from sqlalchemy.orm import Session

from storefront.models.product import Product


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, product_id: int) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def get_active(self) -> Optional[Product]:
        """Return the first active product; the storefront only ever shows one."""
        return (
            self.db.query(Product)
            .filter(Product.active == True)
            .order_by(Product.id)
            .first()
        )

    def update(
        self, product: Product, title: str, description: str, base_price: int
    ) -> Product:
        product.title = title
        product.description = description
        product.base_price = base_price
        self.db.flush()
        return product
