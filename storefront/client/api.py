# storefront/client/api.py
"""
Thin synchronous client for the storefront REST API.

Works with any `httpx.Client`; tests pass FastAPI's `TestClient`, which
is one.
"""

import logging
from collections.abc import Callable
from typing import Any

import httpx

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Network error, please try again"
GENERIC_ERROR_MESSAGE = "Something went wrong"


class ApiError(Exception):
    """
    A failed API call.

    `status_code` is None when no response arrived at all.
    `message` is the server's `message` field when it sent one.
    """

    def __init__(self, status_code: int | None, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class StoreApiClient:
    def __init__(
        self,
        http: httpx.Client,
        token_provider: Callable[[], str | None] | None = None,
        api_prefix: str = "/api",
    ):
        self.http = http
        self.token_provider = token_provider
        self.api_prefix = api_prefix.rstrip("/")

    # ---------- Transport ----------

    def _headers(self) -> dict[str, str]:
        token = self.token_provider() if self.token_provider else None
        return {"Authorization": f"Bearer {token}"} if token else {}

    def request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = self.http.request(
                method,
                f"{self.api_prefix}{path}",
                headers=self._headers(),
                **kwargs,
            )
        except httpx.TransportError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(None, NETWORK_ERROR_MESSAGE) from exc

        if response.is_success:
            return response.json() if response.content else None

        try:
            message = response.json().get("message") or GENERIC_ERROR_MESSAGE
        except (ValueError, AttributeError):
            message = GENERIC_ERROR_MESSAGE
        raise ApiError(response.status_code, str(message))

    # ---------- Auth ----------

    def register(self, username: str, email: str, password: str, phone: str | None = None) -> dict:
        body = {"username": username, "email": email, "password": password}
        if phone:
            body["phone"] = phone
        return self.request("POST", "/auth/register", json=body)

    def login(self, email: str, password: str) -> dict:
        return self.request("POST", "/auth/login", json={"email": email, "password": password})

    def logout(self) -> dict:
        return self.request("POST", "/logout")

    def get_profile(self) -> dict:
        return self.request("GET", "/users/profile")

    # ---------- Catalog ----------

    def list_products(self, **filters: Any) -> list[dict]:
        params = {k: v for k, v in filters.items() if v is not None}
        return self.request("GET", "/products", params=params)

    def get_product(self, product_id: str) -> dict:
        return self.request("GET", f"/products/{product_id}")

    # ---------- Favorites ----------

    def get_favorites(self) -> list[dict]:
        return self.request("GET", "/favorites")

    def add_favorite(self, product_id: str | None = None, service_id: str | None = None) -> dict:
        body = {"product_id": product_id} if product_id else {"service_id": service_id}
        return self.request("POST", "/favorites", json=body)

    def remove_favorite(self, item_id: str) -> dict:
        return self.request("DELETE", f"/favorites/{item_id}")

    # ---------- Orders ----------

    def create_order(self, items: list[dict], delivery_info: dict) -> dict:
        return self.request(
            "POST",
            "/orders",
            json={"items": items, "delivery_info": delivery_info},
        )
