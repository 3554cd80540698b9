"""
Page controllers for the storefront UI.

Each page owns one explicit state object. Controllers receive a shared
PageContext (API client, persisted cart, size options) instead of reaching
for globals; the cart is the only state that outlives a page.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from storefront.client.api import ApiError, StorefrontClient
from storefront.client.cart import Cart, CartItem
from storefront.client.pricing import format_price, order_total, resolve_price
from storefront.config import settings
from storefront.utils.log import get_logger

log = get_logger("pages")

LOAD_ERROR = "We couldn't load the product right now. Please try again."
SAVE_ERROR = "We couldn't save your changes. Please try again."
SAVED_NOTICE = "Saved."


@dataclass
class PageContext:
    api: StorefrontClient
    cart: Cart
    sizes: List[str] = field(default_factory=lambda: list(settings.AVAILABLE_SIZES))


class Stage(str, Enum):
    COLOR_SELECTION = "color-selection"
    SIZE_SELECTION = "size-selection"
    CART = "cart"


@dataclass
class ProductPageState:
    product: Optional[Dict] = None
    variants: List[Dict] = field(default_factory=list)
    settings: Optional[Dict] = None
    selected_variant_id: Optional[int] = None
    image_index: int = 0
    stage: Stage = Stage.COLOR_SELECTION
    size_quantities: Dict[str, int] = field(default_factory=dict)
    error: Optional[str] = None


class ProductPageController:
    def __init__(self, ctx: PageContext):
        self.ctx = ctx
        self.state = ProductPageState()

    def load(self) -> bool:
        try:
            bundle = self.ctx.api.get_product_bundle()
        except ApiError:
            self.state.error = LOAD_ERROR
            return False
        s = self.state
        s.product = bundle["product"]
        s.variants = bundle.get("variants") or []
        s.settings = bundle.get("settings")
        s.error = None
        s.stage = Stage.COLOR_SELECTION
        s.size_quantities = {}
        in_stock = [v for v in s.variants if v.get("stock_qty", 0) > 0]
        first = (in_stock or s.variants or [None])[0]
        s.selected_variant_id = first["id"] if first else None
        s.image_index = 0
        return True

    # --- derived values ---

    @property
    def selected_variant(self) -> Optional[Dict]:
        vid = self.state.selected_variant_id
        return next((v for v in self.state.variants if v["id"] == vid), None)

    @property
    def base_price(self) -> int:
        return (self.state.product or {}).get("base_price", 0)

    @property
    def shipping_flat_fee(self) -> int:
        return (self.state.settings or {}).get("shipping_flat_fee", 0)

    @property
    def currency(self) -> str:
        return (self.state.settings or {}).get("currency", "ILS")

    @property
    def unit_price(self) -> Optional[int]:
        v = self.selected_variant
        return resolve_price(v, self.base_price) if v else None

    @property
    def active_image(self) -> Optional[str]:
        v = self.selected_variant
        images = (v or {}).get("images") or []
        if not images:
            return None
        return images[min(self.state.image_index, len(images) - 1)]

    @property
    def can_continue(self) -> bool:
        v = self.selected_variant
        return bool(v) and v.get("stock_qty", 0) > 0

    @property
    def total_units(self) -> int:
        return sum(self.state.size_quantities.values())

    def price_label(self, variant: Dict) -> str:
        return format_price(resolve_price(variant, self.base_price), self.currency)

    def order_total(self) -> Optional[int]:
        v = self.selected_variant
        if not v:
            return None
        return order_total(v, self.base_price, self.total_units, self.shipping_flat_fee)

    # --- actions ---

    def select_variant(self, variant_id: int) -> bool:
        """
        Make variant_id the active variant and show its first image.

        While picking colors any variant may be viewed; once in size
        selection a sold-out variant is refused so the purchase path never
        holds an unavailable variant.
        """
        v = next((v for v in self.state.variants if v["id"] == variant_id), None)
        if v is None:
            return False
        if self.state.stage == Stage.SIZE_SELECTION and v.get("stock_qty", 0) <= 0:
            return False
        self.state.selected_variant_id = variant_id
        self.state.image_index = 0
        return True

    def select_image(self, index: int) -> bool:
        images = (self.selected_variant or {}).get("images") or []
        if not 0 <= index < len(images):
            return False
        self.state.image_index = index
        return True

    def continue_to_sizes(self) -> bool:
        if not self.can_continue:
            return False
        self.state.stage = Stage.SIZE_SELECTION
        return True

    def back_to_colors(self):
        self.state.stage = Stage.COLOR_SELECTION

    def set_size_quantity(self, size: str, quantity: int):
        if size not in self.ctx.sizes:
            raise ValueError(f"unknown size {size!r}")
        if quantity < 0:
            raise ValueError("quantity must not be negative")
        if quantity == 0:
            self.state.size_quantities.pop(size, None)
        else:
            self.state.size_quantities[size] = quantity

    def _cart_item(self, size: Optional[str]) -> CartItem:
        v = self.selected_variant
        images = v.get("images") or []
        return CartItem(
            variant_id=v["id"],
            color_name=v["color_name"],
            size=size,
            price=self.unit_price,
            image=images[0] if images else None,
            title=(self.state.product or {}).get("title", ""),
        )

    def add_to_cart(self, size: Optional[str] = None) -> Optional[CartItem]:
        """Add one unit of the selected variant; price is captured now."""
        if not self.can_continue:
            return None
        line = self.ctx.cart.add(self._cart_item(size))
        self.state.stage = Stage.CART
        return line

    def add_selection_to_cart(self) -> List[CartItem]:
        """Move every size with a quantity into the cart."""
        if not self.can_continue:
            return []
        lines = []
        for size, qty in sorted(self.state.size_quantities.items()):
            line = self.ctx.cart.add(self._cart_item(size))
            if qty > 1:
                self.ctx.cart.update_quantity(line.variant_id, size, line.quantity + qty - 1)
            lines.append(line)
        if lines:
            self.state.size_quantities = {}
            self.state.stage = Stage.CART
        return lines


@dataclass
class AdminPageState:
    product: Optional[Dict] = None
    variants: List[Dict] = field(default_factory=list)
    assets: List[Dict] = field(default_factory=list)
    drafts: Dict[int, List[str]] = field(default_factory=dict)
    error: Optional[str] = None
    form_error: Optional[str] = None
    notice: Optional[str] = None


class AdminPageController:
    def __init__(self, ctx: PageContext):
        self.ctx = ctx
        self.state = AdminPageState()

    def load(self) -> bool:
        api = self.ctx.api
        try:
            product = api.get_product_bundle()["product"]
            variants = api.list_variants()
            assets = api.list_product_images()
        except ApiError:
            self.state.error = LOAD_ERROR
            return False
        s = self.state
        s.product, s.variants, s.assets = product, variants, assets
        s.drafts = {v["id"]: list(v["images"]) for v in variants}
        s.error = None
        return True

    def _variant(self, variant_id: int) -> Dict:
        v = next((v for v in self.state.variants if v["id"] == variant_id), None)
        if v is None:
            raise KeyError(variant_id)
        return v

    # --- product details ---

    def update_product(self, title: str, description: str, base_price) -> bool:
        title = (title or "").strip()
        description = (description or "").strip()
        try:
            price = int(str(base_price).strip())
        except ValueError:
            price = -1
        if not title or not description or price < 0:
            self.state.form_error = (
                "Title and description are required and the price must be a "
                "whole non-negative amount."
            )
            return False
        if not self.state.product:
            self.state.error = LOAD_ERROR
            return False
        self.state.form_error = None
        try:
            self.state.product = self.ctx.api.update_product(
                self.state.product["id"], title, description, price
            )
        except ApiError:
            self.state.error = SAVE_ERROR
            return False
        self.state.error = None
        self.state.notice = SAVED_NOTICE
        return True

    # --- variants ---

    def create_variant(self, form: Dict) -> Optional[Dict]:
        if not (form.get("color_name") or "").strip() or not (form.get("sku") or "").strip():
            self.state.form_error = "Color name and SKU are required."
            return None
        self.state.form_error = None
        try:
            created = self.ctx.api.create_variant(form)
        except ApiError as e:
            log.info("variant create rejected (%s)", e.status_code)
            self.state.error = SAVE_ERROR
            return None
        summary = {k: created[k] for k in ("id", "color_name", "color_hex", "sku", "images")}
        self.state.variants.append(summary)
        self.state.drafts[created["id"]] = list(created["images"])
        self.state.error = None
        self.state.notice = SAVED_NOTICE
        return created

    # --- image curation ---

    def images_for(self, variant_id: int) -> List[str]:
        return self.state.drafts.setdefault(
            variant_id, list(self._variant(variant_id)["images"])
        )

    def is_dirty(self, variant_id: int) -> bool:
        return self.images_for(variant_id) != self._variant(variant_id)["images"]

    def add_image(self, variant_id: int, url: str) -> bool:
        url = (url or "").strip()
        if not url:
            return False
        self.images_for(variant_id).append(url)
        return True

    def pick_asset(self, variant_id: int, name: str) -> bool:
        asset = next((a for a in self.state.assets if a["name"] == name), None)
        if asset is None:
            return False
        return self.add_image(variant_id, asset["url"])

    def remove_image(self, variant_id: int, index: int) -> bool:
        images = self.images_for(variant_id)
        if not 0 <= index < len(images):
            return False
        del images[index]
        return True

    def move_image(self, variant_id: int, index: int, offset: int) -> bool:
        images = self.images_for(variant_id)
        target = index + offset
        if not (0 <= index < len(images) and 0 <= target < len(images)):
            return False
        images.insert(target, images.pop(index))
        return True

    def reset_images(self, variant_id: int):
        self.state.drafts[variant_id] = list(self._variant(variant_id)["images"])

    def save_images(self, variant_id: int) -> bool:
        """Send the whole draft list; on failure the saved list is left as it was."""
        draft = list(self.images_for(variant_id))
        try:
            saved = self.ctx.api.replace_variant_images(variant_id, draft)
        except ApiError:
            self.state.error = SAVE_ERROR
            return False
        self._variant(variant_id)["images"] = list(saved["images"])
        self.state.drafts[variant_id] = list(saved["images"])
        self.state.error = None
        self.state.notice = SAVED_NOTICE
        return True


class CheckoutPageController:
    """Order summary for the cart. No payment is taken."""

    def __init__(self, ctx: PageContext):
        self.ctx = ctx
        self.settings: Optional[Dict] = None
        self.error: Optional[str] = None

    def load(self) -> bool:
        try:
            self.settings = self.ctx.api.get_product_bundle().get("settings")
        except ApiError:
            self.error = LOAD_ERROR
            return False
        self.error = None
        return True

    @property
    def currency(self) -> str:
        return (self.settings or {}).get("currency", "ILS")

    @property
    def subtotal(self) -> int:
        return self.ctx.cart.total()

    @property
    def shipping(self) -> int:
        if not self.ctx.cart.items:
            return 0
        return (self.settings or {}).get("shipping_flat_fee", 0)

    @property
    def total(self) -> int:
        return self.subtotal + self.shipping

    def lines(self) -> List[Dict]:
        return [
            {
                "title": it.title,
                "color_name": it.color_name,
                "size": it.size,
                "quantity": it.quantity,
                "unit_price": format_price(it.price, self.currency),
                "line_total": format_price(it.price * it.quantity, self.currency),
            }
            for it in self.ctx.cart.items
        ]
