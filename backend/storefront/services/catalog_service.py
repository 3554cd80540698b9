from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.errors import Conflict, InvalidInput, NotFound, StoreFailure
from storefront.models.product import Product
from storefront.models.variant import Variant
from storefront.repositories.product_repo import ProductRepository
from storefront.repositories.settings_repo import SettingsRepository
from storefront.repositories.variant_repo import VariantRepository
from storefront.utils.images import clean_images
from storefront.utils.log import get_logger
from storefront.utils.transactions import smart_transaction

log = get_logger("catalog")


def _coerce_int(value: Any) -> Optional[int]:
    """
    Loose numeric coercion for JSON form input: ints, integral floats and
    numeric strings are accepted. Returns None when the value is not an
    integer at all (booleans, fractions, blank or non-numeric strings).
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        try:
            return int(s)
        except ValueError:
            pass
        try:
            f = float(s)
        except ValueError:
            return None
        return int(f) if f.is_integer() else None
    return None


MAX_INT = 2**63 - 1  # largest value an INTEGER column holds


def _non_negative_int(value: Any, field: str) -> int:
    n = _coerce_int(value)
    if n is None or n < 0 or n > MAX_INT:
        raise InvalidInput(f"{field} must be a non-negative integer")
    return n


def _positive_id(value: Any, what: str) -> int:
    n = _coerce_int(value)
    if n is None or n <= 0:
        raise InvalidInput(f"Invalid {what} id")
    return n


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


class CatalogService:
    def __init__(self, db: Session):
        self.db = db
        self.products = ProductRepository(db)
        self.variants = VariantRepository(db)
        self.settings = SettingsRepository(db)

    # --- reads ---

    def get_active_product_bundle(self) -> Dict:
        """
        Return {product, variants, settings} for the active product.
        Variants come ordered by id; settings may be None.
        """
        try:
            product = self.products.get_active()
            if not product:
                raise NotFound("No active product found")
            variants = self.variants.list_for_product(product.id)
            store_settings = self.settings.get()
        except SQLAlchemyError as e:
            log.exception("Failed to fetch product data")
            raise StoreFailure("Failed to load product data") from e
        return {"product": product, "variants": variants, "settings": store_settings}

    def list_variants_summary(self) -> List[Variant]:
        try:
            return self.variants.list_all()
        except SQLAlchemyError as e:
            log.exception("Failed to fetch variants")
            raise StoreFailure("Failed to fetch variants") from e

    # --- writes ---

    def create_variant(
        self,
        color_name: Any,
        sku: Any,
        stock_qty: Any,
        color_hex: Any = None,
        price_override: Any = None,
        images: Any = None,
    ) -> Variant:
        color_name = _text(color_name)
        sku = _text(sku)
        if not color_name or not sku:
            raise InvalidInput("color_name and sku are required")

        stock = _non_negative_int(stock_qty, "stock_qty")

        if price_override is None or price_override == "":
            override = None
        else:
            override = _non_negative_int(price_override, "price_override")

        hex_value = _text(color_hex) or None
        clean = clean_images(images) if isinstance(images, list) else []

        # check-then-insert runs in one transaction; the unique index on sku
        # turns a concurrent duplicate into an IntegrityError we report as Conflict
        try:
            with smart_transaction(self.db):
                product = self.products.get_active()
                if not product:
                    raise NotFound("No active product found")
                if self.variants.get_by_sku(sku):
                    raise Conflict("SKU already exists")
                variant = self.variants.create(
                    product_id=product.id,
                    color_name=color_name,
                    color_hex=hex_value,
                    sku=sku,
                    price_override=override,
                    stock_qty=stock,
                    images=clean,
                )
        except IntegrityError as e:
            log.warning("sku %r collided on insert", sku)
            raise Conflict("SKU already exists") from e
        except SQLAlchemyError as e:
            log.exception("Failed to create variant")
            raise StoreFailure("Failed to create variant") from e

        self.db.refresh(variant)
        log.info("created variant id=%s sku=%s", variant.id, variant.sku)
        return variant

    def replace_variant_images(self, variant_id: Any, images: Any) -> Variant:
        """Overwrite the variant's image list with the cleaned input list."""
        vid = _positive_id(variant_id, "variant")
        if not isinstance(images, list):
            raise InvalidInput("images must be an array")
        clean = clean_images(images)

        try:
            with smart_transaction(self.db):
                variant = self.variants.get(vid)
                if not variant:
                    raise NotFound("Variant not found")
                self.variants.replace_images(variant, clean)
        except SQLAlchemyError as e:
            log.exception("Failed to save variant images")
            raise StoreFailure("Failed to save images") from e

        self.db.refresh(variant)
        return variant

    def update_product(
        self, product_id: Any, title: Any, description: Any, base_price: Any
    ) -> Product:
        pid = _positive_id(product_id, "product")
        title = _text(title)
        description = _text(description)
        if not title or not description:
            raise InvalidInput("title and description are required")
        price = _non_negative_int(base_price, "base_price")

        try:
            with smart_transaction(self.db):
                product = self.products.get(pid)
                if not product:
                    raise NotFound("Product not found")
                self.products.update(product, title, description, price)
        except SQLAlchemyError as e:
            log.exception("Failed to update product")
            raise StoreFailure("Failed to update product") from e

        self.db.refresh(product)
        return product
