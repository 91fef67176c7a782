"""
Product catalogue contracts: list filtering and stock summaries for the admin view.

Everything here is a pure function of the product list: nothing mutates the
collection it is given, and results keep the collection's order.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List

from .interfaces import Product

ALL_CATEGORIES = "all"
LOW_STOCK_THRESHOLD = 10


class StockFilter(str, Enum):
    ALL = "all"
    LOW = "low"
    OUT = "out"
    IN = "in"


# ---------------------------------------------------------------------------
# Filter models
# ---------------------------------------------------------------------------

@dataclass
class ProductFilter:
    """Active filters on the admin product table."""
    search_term: str = ""
    category: str = ALL_CATEGORIES
    stock: StockFilter = StockFilter.ALL
    low_stock_threshold: int = LOW_STOCK_THRESHOLD


@dataclass
class StockSummary:
    """Counters over the whole collection, independent of any filter."""
    total: int
    in_stock: int
    low_stock: int
    out_of_stock: int


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def matches_search(product: Product, term: str) -> bool:
    needle = term.lower()
    return needle in (product.name or "").lower() or needle in (product.brand or "").lower()


def matches_category(product: Product, category: str) -> bool:
    return category == ALL_CATEGORIES or product.category == category


def matches_stock(product: Product, stock: StockFilter, low_stock_threshold: int = LOW_STOCK_THRESHOLD) -> bool:
    stock = StockFilter(stock)
    qty = product.stock_quantity
    if stock is StockFilter.LOW:
        return qty < low_stock_threshold
    if stock is StockFilter.OUT:
        return qty == 0
    if stock is StockFilter.IN:
        return qty > 0
    return True


def filter_products(products: Iterable[Product], f: ProductFilter) -> List[Product]:
    """Apply a ProductFilter to a list of products and return matching ones."""
    return [
        p for p in products
        if matches_search(p, f.search_term)
        and matches_category(p, f.category)
        and matches_stock(p, f.stock, f.low_stock_threshold)
    ]


def summarize_stock(products: Iterable[Product], low_stock_threshold: int = LOW_STOCK_THRESHOLD) -> StockSummary:
    items = list(products)
    return StockSummary(
        total=len(items),
        in_stock=sum(1 for p in items if p.stock_quantity > 0),
        low_stock=sum(1 for p in items if p.stock_quantity < low_stock_threshold),
        out_of_stock=sum(1 for p in items if p.stock_quantity == 0),
    )
