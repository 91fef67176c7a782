"""Pytest fixtures for the product admin tests."""

import os
import sys

import pytest

# Ensure project root is on sys.path so `pharmacy_admin` imports resolve
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from pharmacy_admin.admin.controller import ProductAdminController  # noqa: E402
from pharmacy_admin.integrations.clients.mocks.local_product_catalogues import (  # noqa: E402
    LocalProductCatalogueClient,
)
from pharmacy_admin.integrations.contracts.interfaces import ImageFile, Notifier  # noqa: E402
from pharmacy_admin.integrations.policy.response_wrappers import normalize_product_response  # noqa: E402
from pharmacy_admin.utils.config_loader import ProductAdminSettings  # noqa: E402


class FakeNotifier(Notifier):
    def __init__(self, confirm_answer: bool = True):
        self.confirm_answer = confirm_answer
        self.alerts = []
        self.confirmations = []

    def alert(self, message: str) -> None:
        self.alerts.append(message)

    def confirm(self, message: str) -> bool:
        self.confirmations.append(message)
        return self.confirm_answer


def make_record(product_id, stock=10, **overrides):
    record = {
        "_id": product_id,
        "name": f"Product {product_id}",
        "brand": "VetCare",
        "category": "Medicine",
        "description": "A product",
        "price": 10.0,
        "stockQuantity": stock,
        "images": [f"https://example.com/{product_id}.jpg"],
        "petType": ["Dog"],
    }
    record.update(overrides)
    return record


def make_product(product_id, stock=10, **overrides):
    return normalize_product_response(make_record(product_id, stock, **overrides))


def make_image(name="photo.png", content=b"\x89PNG fake"):
    return ImageFile(filename=name, content=content, content_type="image/png")


@pytest.fixture
def seed_records():
    return [
        make_record("1", stock=0, name="Flea Shield", brand="VetCare", category="Medicine"),
        make_record("2", stock=5, name="Salmon Bites", brand="Purr", category="Food"),
        make_record("3", stock=20, name="Seed Mix", brand="Feather", category="Food"),
    ]


@pytest.fixture
def settings():
    return ProductAdminSettings(api_base_url="http://api.test/api")


@pytest.fixture
def client(seed_records):
    return LocalProductCatalogueClient(seed_records)


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def controller(client, notifier, settings):
    return ProductAdminController(client, notifier, settings)
