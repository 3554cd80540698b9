from sqlalchemy import Column, Integer, String

from storefront.db import Base


class StoreSettings(Base):
    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, index=True)
    shipping_flat_fee = Column(Integer, nullable=False, default=0)
    currency = Column(String(3), nullable=False, default="ILS")
    support_email = Column(String(256), nullable=True)
