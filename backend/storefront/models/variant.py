from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from storefront.db import Base


class Variant(Base):
    __tablename__ = "variants"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(
        Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )
    color_name = Column(String(128), nullable=False)
    color_hex = Column(String(16), nullable=True)
    sku = Column(String(64), unique=True, index=True, nullable=False)
    price_override = Column(Integer, nullable=True)  # minor currency units
    stock_qty = Column(Integer, nullable=False, default=0)
    # JSON-encoded list of image urls, first one is the preview
    images = Column(Text, nullable=False, default="[]")

    product = relationship("Product", back_populates="variants")

    def __repr__(self):
        return f"<Variant sku={self.sku} color={self.color_name}>"
