"""
Contracts (data models).

This folder defines the shapes exchanged with the products backend:
- Product records as the admin screen sees them
- Multipart form payloads for create/update
- Filter and summary models for the product table

Both mock and real HTTP clients use these contracts.
"""
