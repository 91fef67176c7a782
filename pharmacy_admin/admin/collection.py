"""
Client-side mirror of the backend product list
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional

from pharmacy_admin.integrations.contracts.interfaces import Product

logger = logging.getLogger(__name__)


class ProductCollection:
    """
    Ordered products keyed by id.

    Only confirmed server responses should be applied here. Order is the
    fetched order, with created products appended and updated ones kept in place.
    """

    def __init__(self, products: Optional[Iterable[Product]] = None):
        self._items: List[Product] = []
        if products is not None:
            self.replace_all(products)

    def replace_all(self, products: Iterable[Product]) -> None:
        items: List[Product] = []
        seen = set()
        for product in products:
            if product.id in seen:
                logger.warning(f"Dropping duplicate product id {product.id} from fetched list")
                continue
            seen.add(product.id)
            items.append(product)
        self._items = items

    def clear(self) -> None:
        self._items = []

    def upsert(self, product: Product) -> bool:
        """Replace the entry with the same id, or append. Returns True when appended."""
        for index, existing in enumerate(self._items):
            if existing.id == product.id:
                self._items[index] = product
                return False
        self._items.append(product)
        return True

    def replace(self, product_id: str, product: Product) -> bool:
        """Put `product` where `product_id` was, or append it. Returns True when appended."""
        for index, existing in enumerate(self._items):
            if existing.id == product_id:
                self._items[index] = product
                if product.id != product_id:
                    # keep ids unique if the server answered with another id
                    self._items = [
                        p for i, p in enumerate(self._items) if i == index or p.id != product.id
                    ]
                return False
        return self.upsert(product)

    def remove(self, product_id: str) -> bool:
        before = len(self._items)
        self._items = [p for p in self._items if p.id != product_id]
        return len(self._items) != before

    def get(self, product_id: str) -> Optional[Product]:
        return next((p for p in self._items if p.id == product_id), None)

    def to_list(self) -> List[Product]:
        return list(self._items)

    def __contains__(self, product_id: object) -> bool:
        return any(p.id == product_id for p in self._items)

    def __iter__(self) -> Iterator[Product]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)
