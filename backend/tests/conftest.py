import os
import tempfile

# point settings at throwaway locations before anything imports storefront
_TMP = tempfile.mkdtemp(prefix="storefront-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP, 'test.db')}"
os.environ["PRODUCT_ASSETS_DIR"] = os.path.join(_TMP, "assets")
os.environ["CART_STORAGE_PATH"] = os.path.join(_TMP, "local_storage.json")
os.environ["SEED_DEFAULT_CATALOG"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest

from storefront.db import SessionLocal, init_db
from storefront.models.product import Product
from storefront.models.variant import Variant


@pytest.fixture(autouse=True)
def fresh_db():
    init_db(reset=True, seed=True)
    yield


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def variant_ids(db):
    """sku -> id for the seeded variants."""
    return {v.sku: v.id for v in db.query(Variant).all()}


@pytest.fixture
def deactivate_products(db):
    def _run():
        db.query(Product).update({Product.active: False})
        db.commit()

    return _run


@pytest.fixture
def assets_dir():
    path = os.environ["PRODUCT_ASSETS_DIR"]
    os.makedirs(path, exist_ok=True)
    for name in os.listdir(path):
        full = os.path.join(path, name)
        if os.path.isdir(full):
            os.rmdir(full)
        else:
            os.remove(full)
    for name in ("b-side.jpg", "A-front.PNG", "c-top.webp", "readme.txt"):
        with open(os.path.join(path, name), "wb") as f:
            f.write(b"\x89PNG fake")
    os.mkdir(os.path.join(path, "gallery.png"))
    return path
