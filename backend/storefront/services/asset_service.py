import os
from typing import Dict, List, Optional

from storefront.config import settings
from storefront.errors import StoreFailure
from storefront.utils.log import get_logger

log = get_logger("assets")

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".webp", ".gif", ".avif")


def list_available_image_assets(
    directory: Optional[str] = None, url_prefix: Optional[str] = None
) -> List[Dict[str, str]]:
    """
    Scan the product asset directory and return [{name, url}] for every
    image file, sorted by name. Sub-directories are ignored.
    """
    directory = directory or settings.PRODUCT_ASSETS_DIR
    prefix = (url_prefix or settings.PRODUCT_ASSETS_URL_PREFIX).rstrip("/")
    try:
        with os.scandir(directory) as it:
            names = [
                entry.name
                for entry in it
                if entry.is_file() and entry.name.lower().endswith(IMAGE_EXTENSIONS)
            ]
    except OSError as e:
        log.exception("Failed to list product images in %s", directory)
        raise StoreFailure("Failed to list product images") from e

    names.sort(key=lambda n: (n.lower(), n))
    return [{"name": n, "url": f"{prefix}/{n}"} for n in names]
