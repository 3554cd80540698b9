from typing import Any, Dict, List, Optional

import requests

from storefront.config import settings
from storefront.utils.log import get_logger

log = get_logger("api-client")


class ApiError(Exception):
    """Any failed round trip: transport error, timeout, non-2xx or bad JSON."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class StorefrontClient:
    """
    Thin client for the storefront REST API.

    `session` may be any object with a requests-style ``request`` method;
    tests pass FastAPI's TestClient here.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Any = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout or settings.REQUEST_TIMEOUT_SECONDS

    def _request(self, method: str, path: str, json: Any = None) -> Dict:
        url = f"{self.base_url}{path}"
        try:
            res = self.session.request(method, url, json=json, timeout=self.timeout)
        except requests.RequestException as e:
            log.warning("%s %s failed: %s", method, path, e)
            raise ApiError(f"{method} {path} failed: {e}")
        if res.status_code >= 400:
            detail = None
            try:
                detail = res.json().get("detail")
            except (ValueError, AttributeError):
                pass
            log.warning("%s %s -> %s %s", method, path, res.status_code, detail)
            raise ApiError(detail or f"HTTP {res.status_code}", status_code=res.status_code)
        try:
            return res.json()
        except ValueError:
            raise ApiError(f"{method} {path} returned a non-JSON body", res.status_code)

    def health(self) -> Dict:
        return self._request("GET", "/api/health")

    def get_product_bundle(self) -> Dict:
        return self._request("GET", "/api/product")

    def list_variants(self) -> List[Dict]:
        return self._request("GET", "/api/variants")["variants"]

    def list_product_images(self) -> List[Dict]:
        return self._request("GET", "/api/product-images")["images"]

    def create_variant(self, fields: Dict) -> Dict:
        return self._request("POST", "/api/variants", json=fields)["variant"]

    def replace_variant_images(self, variant_id: int, images: List[str]) -> Dict:
        return self._request(
            "PUT", f"/api/variants/{variant_id}/images", json={"images": images}
        )["variant"]

    def update_product(
        self, product_id: int, title: str, description: str, base_price: int
    ) -> Dict:
        body = {"title": title, "description": description, "base_price": base_price}
        return self._request("PUT", f"/api/product/{product_id}", json=body)["product"]
