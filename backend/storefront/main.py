from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from storefront.api.health import router as health_router
from storefront.api.routes_assets import router as assets_router
from storefront.api.routes_catalogue import router as catalogue_router
from storefront.api.routes_variants import router as variants_router
from storefront.config import settings
from storefront.db import init_db
from storefront.utils.log import get_logger

log = get_logger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    init_db(reset=settings.RESET_DB, seed=settings.SEED_DEFAULT_CATALOG)
    log.info("Storefront API ready, assets served from %s", settings.PRODUCT_ASSETS_DIR)
    yield


app = FastAPI(title="Storefront - Backend", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def invalid_request(request: Request, exc: RequestValidationError):
    # malformed bodies are client errors like any other invalid field
    return JSONResponse(status_code=400, content={"detail": "Invalid request body"})


app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(catalogue_router, tags=["catalogue"])

app.include_router(variants_router, tags=["variants"])

app.include_router(assets_router, tags=["assets"])

# the asset directory may be created after startup, so don't check it here
app.mount(
    settings.PRODUCT_ASSETS_URL_PREFIX,
    StaticFiles(directory=settings.PRODUCT_ASSETS_DIR, check_dir=False),
    name="product-assets",
)
app.mount(
    "/product-assets",
    StaticFiles(directory=settings.PRODUCT_ASSETS_DIR, check_dir=False),
    name="product-assets-legacy",
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.APP_HOST, port=settings.APP_PORT)
