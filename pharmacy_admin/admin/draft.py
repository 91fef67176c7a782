"""
Draft product form state
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Iterable, List, Optional

from pharmacy_admin.admin.previews import PreviewStore
from pharmacy_admin.admin.validation import TooManyFilesError, parse_bool
from pharmacy_admin.integrations.contracts.interfaces import (
    ImageFile,
    ImageUploadType,
    PetType,
    Product,
)

logger = logging.getLogger(__name__)

MAX_IMAGE_FILES = 5

# Form control names as the backend spells them
FIELD_ALIASES = {
    "stockQuantity": "stock_quantity",
    "prescriptionRequired": "prescription_required",
    "requiresPrescription": "prescription_required",
    "petType": "pet_type",
    "sideEffects": "side_effects",
}
BOOLEAN_FIELDS = {"prescription_required"}


@dataclass
class ProductDraft:
    """Editable copy of a product, kept as raw form values."""

    name: str = ""
    category: str = ""
    description: str = ""
    price: str = ""
    stock_quantity: str = ""
    brand: str = ""
    images: List[str] = field(default_factory=lambda: [""])
    ingredients: str = ""
    prescription_required: bool = False
    pet_type: str = PetType.ALL.value
    dosage: str = ""
    side_effects: str = ""
    warnings: str = ""

    @classmethod
    def from_product(cls, product: Product) -> "ProductDraft":
        return cls(
            name=product.name or "",
            category=product.category or "",
            description=product.description or "",
            price=str(product.price) if product.price is not None else "",
            stock_quantity=str(product.stock_quantity) if product.stock_quantity is not None else "",
            brand=product.brand or "",
            images=list(product.images) if product.images else [""],
            ingredients=", ".join(product.ingredients),
            prescription_required=bool(product.prescription_required),
            pet_type=product.pet_type[0] if product.pet_type else PetType.ALL.value,
            dosage=product.dosage or "",
            side_effects=product.side_effects or "",
            warnings=product.warnings or "",
        )

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


SCALAR_FIELDS = {f.name for f in fields(ProductDraft)} - {"images"}


class DraftEditor:
    """
    Owns the draft being created or edited, its image-source mode, and the
    selected files with their preview references.

    Switching between URL and file mode keeps both sides' data; only reset()
    clears them.
    """

    def __init__(self, max_files: int = MAX_IMAGE_FILES, previews: Optional[PreviewStore] = None):
        self.max_files = max_files
        self.previews = previews or PreviewStore()
        self.draft = ProductDraft()
        self.editing_product_id: Optional[str] = None
        self.image_upload_type = ImageUploadType.URL
        self.image_files: List[ImageFile] = []
        self.preview_refs: List[str] = []
        self.is_open = False

    @property
    def is_editing(self) -> bool:
        return self.editing_product_id is not None

    # --- Lifecycle ----------------------------------------------------------

    def open_create(self) -> None:
        self.reset()
        self.is_open = True

    def open_edit(self, product: Product) -> None:
        self.reset()
        self.draft = ProductDraft.from_product(product)
        self.editing_product_id = product.id
        self.is_open = True
        logger.debug(f"Editing product {product.id}")

    def reset(self) -> None:
        """Discard the draft, release every preview and close the form."""
        self.previews.revoke_all(self.preview_refs)
        self.preview_refs = []
        self.image_files = []
        self.draft = ProductDraft()
        self.editing_product_id = None
        self.image_upload_type = ImageUploadType.URL
        self.is_open = False

    # --- Field mutation -----------------------------------------------------

    def set_field(self, name: str, value: Any) -> None:
        key = FIELD_ALIASES.get(name, name)
        if key not in SCALAR_FIELDS:
            raise KeyError(f"Unknown product form field: {name}")
        if key in BOOLEAN_FIELDS:
            value = parse_bool(value)
        else:
            value = "" if value is None else str(value)
        setattr(self.draft, key, value)
        logger.debug(f"Draft field {key} updated")

    def add_image_slot(self) -> None:
        self.draft.images.append("")

    def update_image_slot(self, index: int, value: str) -> None:
        self._check_index(index, self.draft.images)
        self.draft.images[index] = value

    def remove_image_slot(self, index: int) -> None:
        self._check_index(index, self.draft.images)
        del self.draft.images[index]

    def set_image_upload_type(self, mode: Any) -> None:
        self.image_upload_type = ImageUploadType(mode)

    # --- File selection -----------------------------------------------------

    def select_files(self, files: Iterable[ImageFile]) -> None:
        """Replace the file selection. Raises TooManyFilesError and keeps the old one if over the limit."""
        selected = list(files)
        if len(selected) > self.max_files:
            logger.warning(f"Rejected selection of {len(selected)} files (limit {self.max_files})")
            raise TooManyFilesError(limit=self.max_files, selected=len(selected))

        self.previews.revoke_all(self.preview_refs)
        self.image_files = selected
        self.preview_refs = [self.previews.create(image) for image in selected]

    def remove_file(self, index: int) -> None:
        self._check_index(index, self.image_files)
        ref = self.preview_refs.pop(index)
        del self.image_files[index]
        self.previews.revoke(ref)

    @staticmethod
    def _check_index(index: int, items: list) -> None:
        if not 0 <= index < len(items):
            raise IndexError(f"Index {index} out of range for {len(items)} item(s)")
