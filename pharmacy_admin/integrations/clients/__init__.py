"""
Products backend clients.

- real_http/: talks to the pharmacy REST API over httpx
- mocks/: in-memory backend with the same interface
"""
