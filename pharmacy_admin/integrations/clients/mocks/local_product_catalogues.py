"""
Local Product Catalogue Client (Mock/Local).

Purpose:
- Acts as an in-memory products backend when the real API is not available.
- Interprets multipart payloads the same way the server does (petType JSON list,
  comma-separated ingredients, URL lists, uploaded files) so the admin screen
  can be exercised end to end.

Usage:
- Used by scripts/run_admin_demo.py and by the controller tests.
- Failures can be queued with `fail_next(...)` to simulate server or network errors.

Swap:
Replace with clients/real_http/products.py once the backend is reachable.
"""

from __future__ import annotations

import copy
import json
import logging
from typing import Any, Dict, List, Optional
from uuid import uuid4

from pharmacy_admin.integrations.contracts.interfaces import (
    PetType,
    Product,
    ProductCatalogueClient,
    ProductFormPayload,
)
from pharmacy_admin.integrations.policy.response_wrappers import (
    ProductApiError,
    normalize_product_response,
)

logger = logging.getLogger(__name__)

UPLOAD_PREFIX = "uploads/products/"


class LocalProductCatalogueClient(ProductCatalogueClient):
    """In-memory products backend that records every call it receives."""

    def __init__(self, records: Optional[List[Dict[str, Any]]] = None) -> None:
        self._records: List[Dict[str, Any]] = [copy.deepcopy(r) for r in records or []]
        self.calls: List[Dict[str, Any]] = []
        self._failures: List[ProductApiError] = []

    # --- Failure injection ----------------------------------------------------

    def fail_next(self, message: str = "Server error", status_code: Optional[int] = 500) -> None:
        """Make the next call raise. status_code=None simulates a transport failure."""
        payload = {"message": message} if status_code is not None else {}
        self._failures.append(ProductApiError(message, status_code=status_code, payload=payload))

    def _record_call(self, operation: str, **details: Any) -> None:
        self.calls.append({"operation": operation, **details})
        if self._failures:
            raise self._failures.pop(0)

    # --- ProductCatalogueClient -----------------------------------------------

    async def list_products(self) -> List[Product]:
        self._record_call("list_products")
        return [normalize_product_response(copy.deepcopy(r)) for r in self._records]

    async def get_product(self, product_id: str) -> Product:
        self._record_call("get_product", product_id=product_id)
        return normalize_product_response(copy.deepcopy(self._find(product_id)))

    async def list_categories(self) -> List[str]:
        self._record_call("list_categories")
        seen: List[str] = []
        for record in self._records:
            category = record.get("category")
            if category and category not in seen:
                seen.append(category)
        return seen

    async def create_product(self, payload: ProductFormPayload) -> Product:
        self._record_call("create_product", payload=payload)
        record = {"_id": uuid4().hex, "averageRating": 0, "reviews": []}
        record.update(self._record_from_payload(payload))
        if not record.get("images"):
            raise ProductApiError("Error creating product", status_code=400, payload={"message": "Error creating product"})
        self._records.append(record)
        logger.info(f"[MOCK] Created product {record['_id']}")
        return normalize_product_response(copy.deepcopy(record))

    async def update_product(self, product_id: str, payload: ProductFormPayload) -> Product:
        self._record_call("update_product", product_id=product_id, payload=payload)
        record = self._find(product_id)
        record.update(self._record_from_payload(payload))
        logger.info(f"[MOCK] Updated product {product_id}")
        return normalize_product_response(copy.deepcopy(record))

    async def delete_product(self, product_id: str) -> None:
        self._record_call("delete_product", product_id=product_id)
        record = self._find(product_id)
        self._records.remove(record)
        logger.info(f"[MOCK] Deleted product {product_id}")

    # --- Helpers --------------------------------------------------------------

    def _find(self, product_id: str) -> Dict[str, Any]:
        for record in self._records:
            if str(record.get("_id")) == str(product_id):
                return record
        raise ProductApiError("Product not found", status_code=404, payload={"message": "Product not found"})

    @staticmethod
    def _record_from_payload(payload: ProductFormPayload) -> Dict[str, Any]:
        record: Dict[str, Any] = {}
        for key in ("name", "category", "description", "brand"):
            value = payload.get(key)
            if value is not None:
                record[key] = value

        if payload.get("price") is not None:
            record["price"] = float(payload.get("price"))
        if payload.get("stockQuantity") is not None:
            record["stockQuantity"] = int(payload.get("stockQuantity"))
        if payload.get("requiresPrescription") is not None:
            record["requiresPrescription"] = payload.get("requiresPrescription") == "true"

        pet_type = payload.get("petType")
        if pet_type:
            record["petType"] = json.loads(pet_type) if pet_type.startswith("[") else [pet_type]
        else:
            record["petType"] = [PetType.ALL.value]

        ingredients = payload.get("ingredients") or ""
        record["ingredients"] = [part.strip() for part in ingredients.split(",") if part.strip()]

        details = {}
        for key in ("dosage", "sideEffects", "warnings"):
            value = payload.get(f"prescriptionDetails[{key}]")
            if value:
                details[key] = value
        if details:
            record["prescriptionDetails"] = details

        if payload.files:
            record["imageType"] = "upload"
            record["images"] = [UPLOAD_PREFIX + image.filename for _, image in payload.files]
            record["image"] = record["images"][0]
        elif payload.get("imageType") == "url":
            images = json.loads(payload.get("images") or "[]")
            record["imageType"] = "url"
            record["images"] = images
            record["image"] = payload.get("image") or (images[0] if images else "")
        return record
