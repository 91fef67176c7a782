"""
Integrations layer.
This package contains all code used to talk to the pharmacy backend:
- Product list / detail / category reads
- Product create, update and delete with multipart bodies

Key rule:
- The admin screen MUST NOT call the HTTP API directly.
- It should call a ProductCatalogueClient (under pharmacy_admin/integrations/clients).
- The LOCAL mock client is used for demos and tests; the REAL_HTTP client talks to the server.
"""

from .contracts.interfaces import (
    PRODUCT_CATEGORIES,
    ImageFile,
    ImageUploadType,
    Notifier,
    PetType,
    Product,
    ProductCatalogueClient,
    ProductFormPayload,
)
from .contracts.product_catalogues import (
    ALL_CATEGORIES,
    ProductFilter,
    StockFilter,
    StockSummary,
    filter_products,
    summarize_stock,
)
from .policy.response_wrappers import (
    IntegrationResponseError,
    ProductApiError,
)

__all__ = [
    # interfaces
    "PRODUCT_CATEGORIES", "ImageFile", "ImageUploadType", "Notifier", "PetType",
    "Product", "ProductCatalogueClient", "ProductFormPayload",
    # products
    "ALL_CATEGORIES", "ProductFilter", "StockFilter", "StockSummary",
    "filter_products", "summarize_stock",
    # errors
    "IntegrationResponseError", "ProductApiError",
]
