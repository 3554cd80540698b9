from typing import Callable, Dict
from urllib.parse import urlsplit

from storefront.client.pages import (
    AdminPageController,
    CheckoutPageController,
    PageContext,
    ProductPageController,
)

ROUTES: Dict[str, Callable[[PageContext], object]] = {
    "/": ProductPageController,
    "/admin": AdminPageController,
    "/checkout": CheckoutPageController,
}

DEFAULT_ROUTE = "/"


def normalize_path(path: str) -> str:
    p = urlsplit(path or "/").path.rstrip("/")
    return p or "/"


def resolve_route(path: str) -> Callable[[PageContext], object]:
    """Map a URL path to its page controller class; unknown paths show the product."""
    return ROUTES.get(normalize_path(path), ROUTES[DEFAULT_ROUTE])


def build_page(path: str, ctx: PageContext):
    return resolve_route(path)(ctx)
