#!/usr/bin/env python3
"""
Drive the product admin screen from the terminal: load, create, edit, filter, delete.
Uses the in-memory backend unless --live is given.

Usage (from repo root):
  python scripts/run_admin_demo.py
  python scripts/run_admin_demo.py --live --token "$ADMIN_TOKEN"
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from pharmacy_admin.admin.controller import ProductAdminController
from pharmacy_admin.admin.notifier import LoggingNotifier
from pharmacy_admin.integrations.clients.mocks.local_product_catalogues import LocalProductCatalogueClient
from pharmacy_admin.integrations.clients.real_http.products import RealProductCatalogueClient
from pharmacy_admin.utils.config_loader import load_settings

SEED_PRODUCTS = [
    {"_id": "p1", "name": "Flea Shield", "brand": "VetCare", "category": "Medicine",
     "description": "Monthly flea treatment", "price": 24.99, "stockQuantity": 0,
     "images": ["https://example.com/flea.jpg"], "petType": ["Dog"]},
    {"_id": "p2", "name": "Salmon Bites", "brand": "Purr", "category": "Food",
     "description": "Cat treats", "price": 6.5, "stockQuantity": 5,
     "images": ["uploads/products/salmon.jpg"], "petType": ["Cat"]},
    {"_id": "p3", "name": "Seed Mix", "brand": "Feather", "category": "Food",
     "description": "Daily bird food", "price": 9, "stockQuantity": 40,
     "images": ["https://example.com/seed.jpg"], "petType": ["Bird"]},
]


def setup_logging():
    """Log to terminal at INFO so every stage is visible."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


def print_stage(title: str, data):
    """Print a stage header and data to the terminal."""
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)
    if isinstance(data, (dict, list)):
        print(json.dumps(data, indent=2, default=str))
    else:
        print(data)
    print()


def table(controller: ProductAdminController):
    return [
        {"id": p.id, "name": p.name, "stock": p.stock_quantity, "image": controller.thumbnail_url(p)}
        for p in controller.visible_products
    ]


async def main():
    parser = argparse.ArgumentParser(description="Product admin demo")
    parser.add_argument("--live", action="store_true", help="Use the configured backend instead of the in-memory one")
    parser.add_argument("--token", default=None, help="Bearer token for the live backend")
    args = parser.parse_args()

    setup_logging()
    settings = load_settings()
    if args.live:
        client = RealProductCatalogueClient(settings, token_provider=lambda: args.token)
    else:
        client = LocalProductCatalogueClient(SEED_PRODUCTS)

    controller = ProductAdminController(client, LoggingNotifier(auto_confirm=True), settings)

    await controller.load()
    print_stage("LOADED PRODUCTS", table(controller))
    print_stage("STOCK SUMMARY", vars(controller.stock_summary))

    if args.live:
        return

    controller.open_create()
    for name, value in {
        "name": "Joint Support", "brand": "VetCare", "category": "Health & Wellness",
        "description": "Glucosamine chews", "price": "19.90", "stockQuantity": "12", "petType": "Dog",
    }.items():
        controller.editor.set_field(name, value)
    controller.editor.update_image_slot(0, "https://example.com/joint.jpg")
    await controller.submit()
    print_stage("AFTER CREATE", table(controller))

    controller.open_edit("p2")
    controller.editor.set_field("stockQuantity", "0")
    await controller.submit()

    controller.set_stock_filter("out")
    print_stage("OUT OF STOCK", table(controller))

    controller.set_stock_filter("all")
    await controller.delete("p1")
    print_stage("AFTER DELETE", table(controller))


if __name__ == "__main__":
    asyncio.run(main())
