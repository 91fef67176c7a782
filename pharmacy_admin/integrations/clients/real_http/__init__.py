"""
Real HTTP integration clients.

These clients communicate with the pharmacy backend over HTTP.

Important:
- Must implement the same interface as the mock clients
- Must return data shaped according to pharmacy_admin/integrations/contracts/*
"""
from .products import RealProductCatalogueClient

__all__ = ["RealProductCatalogueClient"]
