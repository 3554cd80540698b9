from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from storefront.utils.images import decode_images


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    title: str
    description: Optional[str] = None
    base_price: int
    active: bool


class _ImagesMixin(BaseModel):
    images: List[str] = []

    @field_validator("images", mode="before")
    @classmethod
    def _decode(cls, value):
        if isinstance(value, list):
            return [item for item in value if isinstance(item, str)]
        return decode_images(value)


class VariantOut(_ImagesMixin):
    model_config = ConfigDict(from_attributes=True)
    id: int
    product_id: int
    color_name: str
    color_hex: Optional[str] = None
    sku: str
    price_override: Optional[int] = None
    stock_qty: int


class VariantSummaryOut(_ImagesMixin):
    model_config = ConfigDict(from_attributes=True)
    id: int
    color_name: str
    color_hex: Optional[str] = None
    sku: str


class VariantImagesOut(_ImagesMixin):
    model_config = ConfigDict(from_attributes=True)
    id: int
    color_name: str


class SettingsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    shipping_flat_fee: int
    currency: str
    support_email: Optional[str] = None


class ProductBundleOut(BaseModel):
    product: ProductOut
    variants: List[VariantOut]
    settings: Optional[SettingsOut] = None


class ImageAssetOut(BaseModel):
    name: str
    url: str
