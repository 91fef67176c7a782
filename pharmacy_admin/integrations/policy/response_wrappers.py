from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from pharmacy_admin.integrations.contracts.interfaces import PetType, Product


class IntegrationResponseError(ValueError):
    def __init__(self, message: str, *, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.payload = payload or {}


class ProductApiError(IntegrationResponseError):
    """A products API call failed.

    `status_code` is None when no response was obtained at all (transport failure).
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, payload=payload)
        self.message = message
        self.status_code = status_code

    @property
    def kind(self) -> str:
        return "transport" if self.status_code is None else "status"


def extract_error_message(payload: Any, fallback: str) -> str:
    """Pick the user-facing message out of an error body."""
    if isinstance(payload, dict):
        for key in ("message", "error"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value
    return fallback


def normalize_product_list(data: Any) -> List[Product]:
    """Accept either a bare list or an envelope with a `products` field."""
    if isinstance(data, list):
        items = data
    elif isinstance(data, dict):
        items = data.get("products") or []
        if not isinstance(items, list):
            raise IntegrationResponseError("Product envelope has a non-list 'products' field.", payload=data)
    else:
        raise IntegrationResponseError(f"Unexpected product list body of type {type(data).__name__}.")
    return [normalize_product_response(item) for item in items]


def normalize_product_response(raw: Any) -> Product:
    if not isinstance(raw, dict):
        raise IntegrationResponseError(f"Product record must be an object, got {type(raw).__name__}.")

    details = raw.get("prescriptionDetails") if isinstance(raw.get("prescriptionDetails"), dict) else {}
    product_id = _first_non_empty(raw, "_id", "id")
    reviews = raw.get("reviews")
    if isinstance(reviews, list):
        review_count = len(reviews)
    else:
        review_count = _first_non_empty(raw, "totalReviews", "reviews", default=0)

    return _build_model(
        Product,
        {
            "id": str(product_id),
            "name": str(_first_non_empty(raw, "name")),
            "brand": _as_str(raw.get("brand")),
            "category": _as_str(raw.get("category")),
            "description": _as_str(raw.get("description")),
            "price": str(_first_non_empty(raw, "price", default=0)),
            "stock_quantity": _first_non_empty(raw, "stockQuantity", "stock_quantity", default=0),
            "images": _as_str_list(raw.get("images")),
            "image": raw.get("image") or None,
            "prescription_required": _as_bool(
                _first_non_empty(raw, "requiresPrescription", "prescriptionRequired", default=False)
            ),
            "pet_type": _as_str_list(raw.get("petType")) or [PetType.ALL.value],
            "ingredients": _split_ingredients(raw.get("ingredients")),
            "dosage": _as_str(details.get("dosage") or raw.get("dosage")),
            "side_effects": _as_str(details.get("sideEffects") or raw.get("sideEffects")),
            "warnings": _as_str(details.get("warnings") or raw.get("warnings")),
            "average_rating": str(_first_non_empty(raw, "averageRating", default=0)),
            "review_count": review_count,
            "raw": raw,
        },
        raw,
    )


def _first_non_empty(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    if default is not None:
        return default
    raise IntegrationResponseError(f"Missing required field. Checked keys: {', '.join(keys)}", payload=data)


def _as_str(value: Any) -> str:
    return "" if value is None else str(value)


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, list):
        return [str(v) for v in value if v is not None and str(v).strip()]
    return [str(value)]


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes", "on")


def _split_ingredients(value: Any) -> List[str]:
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return _as_str_list(value)


def _build_model(model_type, payload: Dict[str, Any], raw: Dict[str, Any]):
    try:
        return model_type(**payload)
    except ValidationError as exc:
        raise IntegrationResponseError(f"Response validation failed: {exc}", payload=raw) from exc
