import importlib

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from storefront.config import settings
from storefront.utils.log import get_logger

log = get_logger("db")

DATABASE_URL = settings.DATABASE_URL
engine = create_engine(DATABASE_URL, future=True, echo=False)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

# every model module must be imported before create_all so metadata is populated
MODEL_MODULES = [
    "storefront.models.product",
    "storefront.models.variant",
    "storefront.models.store_settings",
]


def init_db(reset: bool = False, seed: bool = False):
    """
    Initialize DB schema.

    reset drops every table first; seed inserts the default catalog when the
    store holds no product yet (idempotent).
    """
    for mod in MODEL_MODULES:
        importlib.import_module(mod)

    if reset:
        log.info("Resetting database at %s", DATABASE_URL)
        Base.metadata.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)
    log.info("Database tables ready")

    if seed:
        from storefront.db.seed import seed_default_catalog

        with SessionLocal() as s:
            if seed_default_catalog(s):
                log.info("Seeded default catalog")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
