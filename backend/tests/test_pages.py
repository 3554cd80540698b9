import pytest
from fastapi.testclient import TestClient

from storefront.client.api import ApiError, StorefrontClient
from storefront.client.cart import Cart, CartStore
from storefront.client.pages import (
    LOAD_ERROR,
    SAVE_ERROR,
    AdminPageController,
    CheckoutPageController,
    PageContext,
    ProductPageController,
    Stage,
)
from storefront.client.routes import build_page, resolve_route
from storefront.main import app


@pytest.fixture
def ctx(tmp_path):
    api = StorefrontClient(base_url="http://testserver", session=TestClient(app))
    cart = Cart(CartStore(path=str(tmp_path / "storage.json")))
    return PageContext(api=api, cart=cart, sizes=["40", "41", "42"])


class _DownClient(StorefrontClient):
    def _request(self, method, path, json=None):
        raise ApiError("connection refused")


def _variant_id(page, sku):
    return next(v["id"] for v in page.state.variants if v["sku"] == sku)


# --- product page ---


def test_product_page_totals_scenario(ctx):
    page = ProductPageController(ctx)
    assert page.load() is True

    page.select_variant(_variant_id(page, "NR-WHITE"))
    assert page.continue_to_sizes() is True
    assert page.state.stage == Stage.SIZE_SELECTION
    assert page.order_total() == 49900 + 2500

    page.back_to_colors()
    page.select_variant(_variant_id(page, "NR-RED"))
    assert page.unit_price == 52900
    assert page.order_total() == 52900 + 2500


def test_order_total_scales_with_sizes(ctx):
    page = ProductPageController(ctx)
    page.load()
    page.select_variant(_variant_id(page, "NR-WHITE"))
    page.continue_to_sizes()
    page.set_size_quantity("40", 2)
    page.set_size_quantity("42", 1)
    assert page.total_units == 3
    assert page.order_total() == 3 * 49900 + 2500
    page.set_size_quantity("40", 0)
    assert page.total_units == 1


def test_unknown_size_is_rejected(ctx):
    page = ProductPageController(ctx)
    page.load()
    with pytest.raises(ValueError):
        page.set_size_quantity("50", 1)


def test_selecting_variant_resets_gallery(ctx):
    page = ProductPageController(ctx)
    page.load()
    page.select_variant(_variant_id(page, "NR-BLACK"))
    assert page.select_image(1) is True
    assert page.active_image == "/images/black-2.jpg"
    assert page.select_image(5) is False

    page.select_variant(_variant_id(page, "NR-RED"))
    assert page.state.image_index == 0
    assert page.active_image == "/images/red-1.jpg"


def test_zero_stock_variant_is_viewable_but_blocks_continue(ctx):
    red = ctx.api.get_product_bundle()["variants"][2]
    ctx.api.create_variant(
        {"color_name": "Pink", "sku": "NR-PINK", "stock_qty": 0, "images": ["/p.jpg"]}
    )
    page = ProductPageController(ctx)
    page.load()
    pink = _variant_id(page, "NR-PINK")

    assert page.select_variant(pink) is True
    assert page.active_image == "/p.jpg"
    assert page.can_continue is False
    assert page.continue_to_sizes() is False
    assert page.add_to_cart("40") is None
    assert ctx.cart.items == []

    # once picking sizes, a sold-out color can't be swapped in
    page.select_variant(red["id"])
    page.continue_to_sizes()
    assert page.select_variant(pink) is False
    assert page.state.selected_variant_id == red["id"]


def test_add_to_cart_snapshots_price(ctx):
    page = ProductPageController(ctx)
    page.load()
    red = _variant_id(page, "NR-RED")
    page.select_variant(red)
    page.add_to_cart("41")
    page.add_to_cart("41")
    assert page.state.stage == Stage.CART

    line = ctx.cart.find(red, "41")
    assert line.quantity == 2
    assert line.price == 52900
    assert line.image == "/images/red-1.jpg"
    assert line.title == "Nova Runner"
    assert ctx.cart.total() == 2 * 52900

    # repricing the product later doesn't touch the cart line
    ctx.api.update_product(page.state.product["id"], "Nova Runner", "d", 1000)
    assert Cart(ctx.cart.store).find(red, "41").price == 52900


def test_add_selection_to_cart(ctx):
    page = ProductPageController(ctx)
    page.load()
    white = _variant_id(page, "NR-WHITE")
    page.select_variant(white)
    page.continue_to_sizes()
    page.set_size_quantity("40", 3)
    page.set_size_quantity("42", 1)
    lines = page.add_selection_to_cart()

    assert len(lines) == 2
    assert ctx.cart.find(white, "40").quantity == 3
    assert ctx.cart.find(white, "42").quantity == 1
    assert page.state.size_quantities == {}


def test_product_page_load_failure(ctx):
    ctx.api = _DownClient(base_url="http://nowhere")
    page = ProductPageController(ctx)
    assert page.load() is False
    assert page.state.error == LOAD_ERROR
    assert page.selected_variant is None


def test_product_page_404_is_load_error(ctx, deactivate_products):
    deactivate_products()
    page = ProductPageController(ctx)
    assert page.load() is False
    assert page.state.error == LOAD_ERROR


# --- admin page ---


def test_admin_curates_and_saves_images(ctx, assets_dir):
    page = AdminPageController(ctx)
    assert page.load() is True
    assert [a["name"] for a in page.state.assets] == ["A-front.PNG", "b-side.jpg", "c-top.webp"]

    vid = page.state.variants[0]["id"]
    assert page.pick_asset(vid, "c-top.webp") is True
    assert page.pick_asset(vid, "missing.jpg") is False
    assert page.add_image(vid, "   ") is False
    assert page.move_image(vid, 2, -2) is True
    assert page.remove_image(vid, 2) is True
    assert page.images_for(vid) == ["/api/product-assets/c-top.webp", "/images/white-1.jpg"]
    assert page.is_dirty(vid)

    assert page.save_images(vid) is True
    assert not page.is_dirty(vid)
    stored = ctx.api.list_variants()[0]["images"]
    assert stored == ["/api/product-assets/c-top.webp", "/images/white-1.jpg"]


def test_admin_failed_save_keeps_state(ctx, assets_dir):
    page = AdminPageController(ctx)
    page.load()
    vid = page.state.variants[1]["id"]
    page.add_image(vid, "/new.jpg")

    ctx.api = _DownClient(base_url="http://nowhere")
    assert page.save_images(vid) is False
    assert page.state.error == SAVE_ERROR
    assert page.images_for(vid)[-1] == "/new.jpg"
    assert page.state.variants[1]["images"] == ["/images/black-1.jpg", "/images/black-2.jpg"]

    page.reset_images(vid)
    assert not page.is_dirty(vid)


def test_admin_creates_variant(ctx, assets_dir):
    page = AdminPageController(ctx)
    page.load()
    created = page.create_variant(
        {"color_name": "Olive", "sku": "NR-OLIVE", "stock_qty": "2", "price_override": ""}
    )
    assert created["sku"] == "NR-OLIVE"
    assert page.state.variants[-1]["sku"] == "NR-OLIVE"
    assert page.images_for(created["id"]) == []

    assert page.create_variant({"color_name": "Olive", "sku": "NR-OLIVE", "stock_qty": 1}) is None
    assert page.state.error == SAVE_ERROR

    assert page.create_variant({"color_name": "", "sku": "X"}) is None
    assert page.state.form_error


def test_admin_product_precheck(ctx, assets_dir):
    page = AdminPageController(ctx)
    page.load()
    assert page.update_product("Nova", "", 100) is False
    assert page.update_product("Nova", "Light", "12.5") is False
    assert page.update_product("Nova", "Light", -1) is False
    assert page.state.form_error

    assert page.update_product("Nova", "Light", "45900") is True
    assert page.state.form_error is None
    assert page.state.product["base_price"] == 45900
    assert ctx.api.get_product_bundle()["product"]["title"] == "Nova"


def test_admin_load_failure(ctx):
    ctx.api = _DownClient(base_url="http://nowhere")
    page = AdminPageController(ctx)
    assert page.load() is False
    assert page.state.error == LOAD_ERROR


# --- checkout and routing ---


def test_checkout_summary(ctx):
    product = ProductPageController(ctx)
    product.load()
    product.select_variant(_variant_id(product, "NR-RED"))
    product.add_to_cart("40")
    product.select_variant(_variant_id(product, "NR-WHITE"))
    product.add_to_cart("42")
    product.add_to_cart("42")

    checkout = CheckoutPageController(ctx)
    assert checkout.load() is True
    assert checkout.subtotal == 52900 + 2 * 49900
    assert checkout.shipping == 2500
    assert checkout.total == 52900 + 2 * 49900 + 2500
    lines = checkout.lines()
    assert lines[1]["line_total"] == "₪998.00"
    assert lines[0]["unit_price"] == "₪529.00"


def test_empty_checkout_has_no_shipping(ctx):
    checkout = CheckoutPageController(ctx)
    checkout.load()
    assert checkout.total == 0


def test_route_table(ctx):
    assert resolve_route("/") is ProductPageController
    assert resolve_route("/admin/") is AdminPageController
    assert resolve_route("/checkout?step=1") is CheckoutPageController
    assert resolve_route("/does-not-exist") is ProductPageController
    assert isinstance(build_page("/admin", ctx), AdminPageController)


def test_api_client_surfaces_status(ctx):
    with pytest.raises(ApiError) as exc:
        ctx.api.replace_variant_images(9999, [])
    assert exc.value.status_code == 404
    assert ctx.api.health() == {"status": "ok"}


def test_admin_update_product_before_load(ctx):
    page = AdminPageController(ctx)
    assert page.update_product("Nova", "Light", 100) is False
    assert page.state.error == LOAD_ERROR
