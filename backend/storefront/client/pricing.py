"""
Price arithmetic shared by every page.

All amounts are integers in minor currency units (agorot, cents). Nothing
here rounds or divides except format_price, which is for display only.
"""
from typing import Any, Iterable, Mapping, Optional, Union

CURRENCY_SYMBOLS = {"ILS": "₪", "USD": "$", "EUR": "€", "GBP": "£"}


def _field(obj: Any, name: str, default=None):
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def resolve_price(variant: Any, base_price: int) -> int:
    """Variant override when present, product base price otherwise."""
    override = _field(variant, "price_override")
    return base_price if override is None else override


def cart_total(items: Iterable[Any]) -> int:
    return sum(_field(it, "price") * _field(it, "quantity") for it in items)


def order_total(
    variant: Any, base_price: int, total_units: int, shipping_flat_fee: int
) -> int:
    """Direct checkout of one variant: at least one unit plus flat shipping."""
    return resolve_price(variant, base_price) * max(1, total_units) + shipping_flat_fee


def format_price(amount: Union[int, None], currency: Optional[str] = "ILS") -> str:
    amount = amount or 0
    sign = "-" if amount < 0 else ""
    major, minor = divmod(abs(amount), 100)
    symbol = CURRENCY_SYMBOLS.get(currency or "", "")
    if symbol:
        return f"{sign}{symbol}{major:,}.{minor:02d}"
    return f"{sign}{major:,}.{minor:02d} {currency or ''}".rstrip()
