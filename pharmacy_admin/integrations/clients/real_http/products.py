"""
Real Products HTTP Client.

Talks to the pharmacy backend's /products routes. Every request carries the
caller's session token as a bearer header when one is available.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

import httpx

from pharmacy_admin.integrations.contracts.interfaces import (
    Product,
    ProductCatalogueClient,
    ProductFormPayload,
)
from pharmacy_admin.integrations.policy.response_wrappers import (
    ProductApiError,
    extract_error_message,
    normalize_product_list,
    normalize_product_response,
)
from pharmacy_admin.utils.config_loader import ProductAdminSettings

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]


class RealProductCatalogueClient(ProductCatalogueClient):
    def __init__(
        self,
        settings: Optional[ProductAdminSettings] = None,
        token_provider: Optional[TokenProvider] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or ProductAdminSettings()
        self.products_url = self.settings.products_url
        self.token_provider = token_provider or (lambda: None)
        self.timeout_seconds = self.settings.timeout_seconds
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        token = self.token_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = await client.request(method, url, headers=self._headers(), **kwargs)
        except httpx.HTTPError as exc:
            logger.error(f"{method} {url} failed without a response: {exc}")
            raise ProductApiError(f"Network error: {exc}") from exc

        if response.is_success:
            return response

        fallback = f"Server error: {response.status_code} {response.reason_phrase}".strip()
        try:
            payload = response.json()
        except ValueError:
            payload = None
        message = extract_error_message(payload, fallback)
        logger.error(f"{method} {url} returned {response.status_code}: {message}")
        raise ProductApiError(
            message,
            status_code=response.status_code,
            payload=payload if isinstance(payload, dict) else {},
        )

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise ProductApiError(
                f"Server returned an unreadable body ({response.status_code})",
                status_code=response.status_code,
            ) from exc

    async def list_products(self) -> List[Product]:
        params = {"includeOutOfStock": "true", "limit": str(self.settings.list_limit)}
        response = await self._request("GET", self.products_url, params=params)
        return normalize_product_list(self._json(response))

    async def get_product(self, product_id: str) -> Product:
        response = await self._request("GET", f"{self.products_url}/{product_id}")
        return normalize_product_response(self._json(response))

    async def list_categories(self) -> List[str]:
        response = await self._request("GET", f"{self.products_url}/categories")
        data = self._json(response)
        return [str(c) for c in data] if isinstance(data, list) else []

    async def create_product(self, payload: ProductFormPayload) -> Product:
        response = await self._request("POST", self.products_url, files=payload.to_multipart())
        return normalize_product_response(self._json(response))

    async def update_product(self, product_id: str, payload: ProductFormPayload) -> Product:
        response = await self._request(
            "PUT", f"{self.products_url}/{product_id}", files=payload.to_multipart()
        )
        return normalize_product_response(self._json(response))

    async def delete_product(self, product_id: str) -> None:
        await self._request("DELETE", f"{self.products_url}/{product_id}")
