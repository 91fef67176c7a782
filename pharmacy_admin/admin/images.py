"""Display URLs for product images."""

from typing import Optional

from pharmacy_admin.integrations.contracts.interfaces import Product

URL_SCHEMES = ("http://", "https://", "data:", "blob:")


def resolve_image_url(value: Optional[str], products_url: str, placeholder: Optional[str] = None) -> Optional[str]:
    """Use absolute URLs as-is; treat anything else as a file served under the products route."""
    if not value or not value.strip():
        return placeholder
    value = value.strip()
    if value.lower().startswith(URL_SCHEMES):
        return value
    return f"{products_url.rstrip('/')}/{value.lstrip('/')}"


def thumbnail_url(product: Product, products_url: str, placeholder: Optional[str] = None) -> Optional[str]:
    first = product.images[0] if product.images else product.image
    return resolve_image_url(first, products_url, placeholder)
