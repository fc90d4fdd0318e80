import logging
from typing import Dict, List, Optional

import requests

from stockledger.config import settings

log = logging.getLogger("stockledger.client")


class StockApiError(Exception):
    """The HTTP surface could not be reached or answered with an error status."""

    code = "TransportError"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class StockApiClient:
    """
    Thin wrapper over the /api HTTP surface.

    ``session`` is anything with requests-style ``get/post/put`` methods; a
    FastAPI ``TestClient`` works, which is how the tests drive the real app.
    """

    def __init__(self, base_url: str = None, timeout: float = None, session=None):
        self.base_url = (base_url or settings.STOCK_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.STOCK_API_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/api/{path.lstrip('/')}"

    def _request(self, method: str, path: str, json: Dict = None, allow_404: bool = False):
        url = self._url(path)
        kwargs = {"timeout": self.timeout}
        if json is not None:
            kwargs["json"] = json
        try:
            r = getattr(self.session, method)(url, **kwargs)
        except requests.RequestException as e:
            log.warning("%s %s failed: %s", method.upper(), url, e)
            raise StockApiError(f"Could not reach stock API at {self.base_url}: {e}") from e

        if allow_404 and r.status_code == 404:
            return None
        if r.status_code >= 400:
            raise StockApiError(self._detail(r), status_code=r.status_code)
        if r.status_code == 204 or not r.content:
            return None
        return r.json()

    @staticmethod
    def _detail(r) -> str:
        try:
            body = r.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("detail"):
            return str(body["detail"])
        return f"HTTP {r.status_code}: {r.text[:200]}"

    def get_products(self) -> List[Dict]:
        return self._request("get", "products") or []

    def get_product(self, product_id: int) -> Optional[Dict]:
        return self._request("get", f"products/{product_id}", allow_404=True)

    def get_low_stock_products(self) -> List[Dict]:
        return self._request("get", "products/low-stock") or []

    def create_product(self, payload: Dict) -> Dict:
        return self._request("post", "products", json=payload)

    def update_stock(self, product_id: int, movement_type: str, quantity: int, notes: str = "") -> Dict:
        body = {"movementType": movement_type, "quantity": quantity, "notes": notes}
        return self._request("put", f"products/{product_id}/stock", json=body)

    def get_product_movements(self, product_id: int) -> List[Dict]:
        return self._request("get", f"products/{product_id}/movements") or []

    def get_all_movements(self) -> List[Dict]:
        return self._request("get", "movements") or []

    def is_api_healthy(self) -> bool:
        try:
            self._request("get", "health")
            return True
        except StockApiError:
            return False
