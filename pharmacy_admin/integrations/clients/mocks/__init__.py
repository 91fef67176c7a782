"""
Mock integration clients.

These clients return realistic responses without calling any external API.
They are used when:
- The pharmacy backend is not running locally
- We want to test the admin screen end-to-end without network access

Important:
- Mock clients must follow the SAME interface as real HTTP clients.
"""
from .local_product_catalogues import LocalProductCatalogueClient

__all__ = ["LocalProductCatalogueClient"]
