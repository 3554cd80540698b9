import json
import os
from typing import Any, Dict, List, Optional, Union

from filelock import FileLock, Timeout
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from storefront.client.pricing import cart_total
from storefront.config import settings
from storefront.utils.log import get_logger

log = get_logger("cart")


class CartItem(BaseModel):
    """One cart line. price is the unit price captured when it was added."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    variant_id: int
    color_name: str
    size: Optional[str] = None
    price: int = Field(ge=0)
    image: Optional[str] = None
    title: str
    quantity: int = Field(default=1, ge=1)

    @property
    def key(self):
        return (self.variant_id, self.size)


class CartStore:
    """
    File-backed stand-in for browser local storage.

    The file holds a JSON object of key -> string values; the cart lives
    under a single key as a serialized list. Writes take a file lock and
    replace the file atomically so a crash never leaves half a cart behind.
    """

    def __init__(self, path: Optional[str] = None, key: Optional[str] = None):
        self.path = path or settings.CART_STORAGE_PATH
        self.key = key or settings.CART_STORAGE_KEY
        self.lock = FileLock(f"{self.path}.lock")

    def _read_storage(self) -> Dict[str, Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> List[CartItem]:
        """Rehydrate the cart; anything missing or corrupt reads as empty."""
        raw = self._read_storage().get(self.key)
        if not isinstance(raw, str):
            return []
        try:
            entries = json.loads(raw)
            if not isinstance(entries, list):
                return []
            return [CartItem.model_validate(e) for e in entries]
        except (ValueError, ValidationError):
            log.warning("discarding corrupt cart under key %r", self.key)
            return []

    def save(self, items: List[CartItem]) -> None:
        payload = json.dumps(
            [it.model_dump(by_alias=True) for it in items], ensure_ascii=False
        )
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        try:
            with self.lock.acquire(timeout=5):
                data = self._read_storage()
                data[self.key] = payload
                tmp = f"{self.path}.tmp"
                with open(tmp, "w", encoding="utf-8") as f:
                    json.dump(data, f, ensure_ascii=False)
                os.replace(tmp, self.path)
        except Timeout:
            # the in-memory cart stays authoritative for this session
            log.warning("could not lock %s, cart not persisted", self.path)


class Cart:
    def __init__(self, store: Optional[CartStore] = None):
        self.store = store
        self.items: List[CartItem] = store.load() if store else []

    def _persist(self):
        if self.store:
            self.store.save(self.items)

    def find(self, variant_id: int, size: Optional[str]) -> Optional[CartItem]:
        return next((it for it in self.items if it.key == (variant_id, size)), None)

    def add(self, item: Union[CartItem, Dict]) -> CartItem:
        """Add one unit; an existing (variant, size) line is incremented instead."""
        if not isinstance(item, CartItem):
            item = CartItem.model_validate(item)
        existing = self.find(item.variant_id, item.size)
        if existing:
            existing.quantity += 1
            line = existing
        else:
            line = item.model_copy(update={"quantity": 1})
            self.items.append(line)
        self._persist()
        return line

    def update_quantity(self, variant_id: int, size: Optional[str], quantity: int) -> bool:
        # whole positive quantities only; bool is not a quantity
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            return False
        line = self.find(variant_id, size)
        if not line:
            return False
        line.quantity = quantity
        self._persist()
        return True

    def remove(self, variant_id: int, size: Optional[str]) -> bool:
        before = len(self.items)
        self.items = [it for it in self.items if it.key != (variant_id, size)]
        if len(self.items) == before:
            return False
        self._persist()
        return True

    def clear(self):
        self.items = []
        self._persist()

    def total(self) -> int:
        return cart_total(self.items)

    def count(self) -> int:
        return sum(it.quantity for it in self.items)
