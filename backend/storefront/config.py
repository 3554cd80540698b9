from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./storefront.db"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 3001
    FRONTEND_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]
    PRODUCT_ASSETS_DIR: str = "./assets/products"
    PRODUCT_ASSETS_URL_PREFIX: str = "/api/product-assets"
    SEED_DEFAULT_CATALOG: bool = True
    RESET_DB: bool = False
    LOG_LEVEL: str = "INFO"

    # client-side engine
    API_BASE_URL: str = "http://127.0.0.1:3001"
    REQUEST_TIMEOUT_SECONDS: float = 10.0
    CART_STORAGE_PATH: str = "./.storefront/local_storage.json"
    CART_STORAGE_KEY: str = "shos-cart"
    AVAILABLE_SIZES: List[str] = ["36", "37", "38", "39", "40", "41", "42", "43", "44", "45"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
