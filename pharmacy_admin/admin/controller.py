"""
Product admin screen: keeps the product collection, the draft editor and the
table filters consistent with each other and with the backend.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from pharmacy_admin.admin.collection import ProductCollection
from pharmacy_admin.admin.draft import DraftEditor
from pharmacy_admin.admin.images import thumbnail_url
from pharmacy_admin.admin.serializer import serialize_draft
from pharmacy_admin.admin.validation import FormValidationError, validate_submission
from pharmacy_admin.error_handler import ErrorHandler
from pharmacy_admin.integrations.contracts.interfaces import (
    PRODUCT_CATEGORIES,
    ImageFile,
    Notifier,
    Product,
    ProductCatalogueClient,
)
from pharmacy_admin.integrations.contracts.product_catalogues import (
    ProductFilter,
    StockFilter,
    StockSummary,
    filter_products,
    summarize_stock,
)
from pharmacy_admin.integrations.policy.response_wrappers import IntegrationResponseError
from pharmacy_admin.utils.config_loader import ProductAdminSettings

logger = logging.getLogger(__name__)

DELETE_CONFIRMATION = "Are you sure you want to delete this product? This action cannot be undone."
PRODUCT_ADDED = "Product added successfully!"
PRODUCT_UPDATED = "Product updated successfully!"
PRODUCT_DELETED = "Product deleted successfully!"


class ProductAdminController:
    def __init__(
        self,
        client: ProductCatalogueClient,
        notifier: Notifier,
        settings: Optional[ProductAdminSettings] = None,
        error_handler: Optional[ErrorHandler] = None,
    ):
        self.client = client
        self.notifier = notifier
        self.settings = settings or ProductAdminSettings()
        self.error_handler = error_handler or ErrorHandler()

        self.collection = ProductCollection()
        self.editor = DraftEditor(max_files=self.settings.max_image_files)
        self.filters = ProductFilter(low_stock_threshold=self.settings.low_stock_threshold)
        self.loading = False

    # --- Collection sync ----------------------------------------------------

    async def load(self) -> None:
        """Fetch every product. Any failure leaves an empty collection; nothing is shown to the user."""
        self.loading = True
        try:
            products = await self.client.list_products()
            self.collection.replace_all(products)
            logger.info(f"Loaded {len(self.collection)} products")
        except IntegrationResponseError as exc:
            logger.error(f"Failed to load products: {exc}")
            self.collection.clear()
        except Exception as exc:
            logger.exception(f"Unexpected error loading products: {exc}")
            self.collection.clear()
        finally:
            self.loading = False

    async def refresh_product(self, product_id: str) -> Optional[Product]:
        try:
            product = await self.client.get_product(product_id)
        except IntegrationResponseError as exc:
            self._report(exc, {"operation": "refresh", "product_id": product_id})
            return None
        self.collection.replace(product_id, product)
        return product

    async def load_categories(self) -> List[str]:
        """Categories for the filter dropdown; falls back to the known list."""
        try:
            categories = await self.client.list_categories()
        except IntegrationResponseError as exc:
            logger.warning(f"Could not fetch categories, using defaults: {exc}")
            return list(PRODUCT_CATEGORIES)
        return categories or list(PRODUCT_CATEGORIES)

    # --- Draft lifecycle ----------------------------------------------------

    def open_create(self) -> None:
        self.editor.open_create()

    def open_edit(self, product_id: str) -> None:
        product = self.collection.get(product_id)
        if product is None:
            raise KeyError(f"Product {product_id} is not in the collection")
        self.editor.open_edit(product)

    def cancel(self) -> None:
        self.editor.reset()

    def select_files(self, files: Iterable[ImageFile]) -> bool:
        try:
            self.editor.select_files(files)
        except FormValidationError as exc:
            self._report(exc, {"operation": "select_files"})
            return False
        return True

    async def submit(self) -> bool:
        """Validate, send and reconcile the draft. Returns True on success."""
        editing_id = self.editor.editing_product_id
        context = {"operation": "update" if editing_id else "create", "product_id": editing_id}

        try:
            validate_submission(self.editor)
        except FormValidationError as exc:
            self._report(exc, context)
            return False

        payload = serialize_draft(self.editor, legacy_warnings_field=self.settings.legacy_warnings_field)
        try:
            if editing_id:
                product = await self.client.update_product(editing_id, payload)
            else:
                product = await self.client.create_product(payload)
        except IntegrationResponseError as exc:
            self._report(exc, context)
            return False

        if editing_id:
            self.collection.replace(editing_id, product)
            message = PRODUCT_UPDATED
        else:
            self.collection.upsert(product)
            message = PRODUCT_ADDED
        logger.info(f"Product {product.id} saved ({context['operation']})")

        self.editor.reset()
        self.notifier.alert(message)
        return True

    async def delete(self, product_id: str) -> bool:
        if not self.notifier.confirm(DELETE_CONFIRMATION):
            return False
        try:
            await self.client.delete_product(product_id)
        except IntegrationResponseError as exc:
            self._report(exc, {"operation": "delete", "product_id": product_id})
            return False

        self.collection.remove(product_id)
        logger.info(f"Product {product_id} deleted")
        self.notifier.alert(PRODUCT_DELETED)
        return True

    # --- View filter --------------------------------------------------------

    def set_search(self, term: str) -> None:
        self.filters.search_term = term or ""

    def set_category(self, category: str) -> None:
        self.filters.category = category

    def set_stock_filter(self, stock: Any) -> None:
        self.filters.stock = StockFilter(stock)

    @property
    def visible_products(self) -> List[Product]:
        return filter_products(self.collection, self.filters)

    @property
    def stock_summary(self) -> StockSummary:
        return summarize_stock(self.collection, self.settings.low_stock_threshold)

    def thumbnail_url(self, product: Product) -> Optional[str]:
        return thumbnail_url(product, self.settings.products_url, self.settings.placeholder_image_url)

    # --- Helpers ------------------------------------------------------------

    def _report(self, exc: Exception, context: Dict[str, Any]) -> None:
        result = self.error_handler.handle_exception(exc, context=context)
        self.notifier.alert(result["message"])
