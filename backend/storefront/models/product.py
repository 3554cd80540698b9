from sqlalchemy import Boolean, Column, Integer, String, Text
from sqlalchemy.orm import relationship

from storefront.db import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(256), nullable=False)
    description = Column(Text, nullable=True)
    base_price = Column(Integer, nullable=False, default=0)  # minor currency units
    active = Column(Boolean, default=True, nullable=False)

    variants = relationship(
        "Variant", back_populates="product", order_by="Variant.id"
    )

    def __repr__(self):
        return f"<Product id={self.id} title={self.title}>"
