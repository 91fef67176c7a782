from __future__ import annotations

import mimetypes
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class PetType(str, Enum):
    ALL = "All"
    DOG = "Dog"
    CAT = "Cat"
    BIRD = "Bird"
    FISH = "Fish"
    SMALL_ANIMAL = "Small Animal"


class ImageUploadType(str, Enum):
    URL = "url"
    FILE = "file"


PRODUCT_CATEGORIES: Tuple[str, ...] = (
    "Medicine",
    "Food",
    "Accessories",
    "Grooming",
    "Toys",
    "Health & Wellness",
)


# ---------------------------------------------------------------------------
# Shared data models
# ---------------------------------------------------------------------------

class Product(BaseModel):
    """A product record as returned by the backend, with snake_case names."""

    id: str
    name: str
    brand: str = ""
    category: str = ""
    description: str = ""
    price: Decimal = Field(default=Decimal("0"), ge=0)
    stock_quantity: int = Field(default=0, ge=0)
    images: List[str] = Field(default_factory=list)
    image: Optional[str] = None
    prescription_required: bool = False
    pet_type: List[str] = Field(default_factory=lambda: [PetType.ALL.value])
    ingredients: List[str] = Field(default_factory=list)
    dosage: str = ""
    side_effects: str = ""
    warnings: str = ""
    average_rating: Decimal = Field(default=Decimal("0"), ge=0)
    review_count: int = Field(default=0, ge=0)
    raw: Dict[str, Any] = Field(default_factory=dict)


@dataclass
class ImageFile:
    """A binary image selected for upload."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "ImageFile":
        path = Path(path)
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return cls(filename=path.name, content=path.read_bytes(), content_type=content_type)


@dataclass
class ProductFormPayload:
    """Multipart body for product create/update requests.

    `fields` holds plain form values in send order; `files` holds binary parts.
    Keys may repeat in both lists.
    """

    fields: List[Tuple[str, str]] = field(default_factory=list)
    files: List[Tuple[str, ImageFile]] = field(default_factory=list)

    def add(self, name: str, value: str) -> None:
        self.fields.append((name, value))

    def attach(self, name: str, image: ImageFile) -> None:
        self.files.append((name, image))

    def values(self, name: str) -> List[str]:
        return [value for key, value in self.fields if key == name]

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        values = self.values(name)
        return values[-1] if values else default

    def to_multipart(self) -> List[Tuple[str, Tuple[Optional[str], bytes, Optional[str]]]]:
        """Render every part in httpx `files=` form so the body is always multipart."""
        parts: List[Tuple[str, Tuple[Optional[str], bytes, Optional[str]]]] = [
            (name, (None, value.encode("utf-8"), None)) for name, value in self.fields
        ]
        parts.extend(
            (name, (image.filename, image.content, image.content_type)) for name, image in self.files
        )
        return parts


# ---------------------------------------------------------------------------
# Abstract collaborator interfaces
# ---------------------------------------------------------------------------

class ProductCatalogueClient(ABC):
    """Every products backend client (real or mock) must implement this interface."""

    @abstractmethod
    async def list_products(self) -> List[Product]:
        """Return every product, including out-of-stock ones."""

    @abstractmethod
    async def get_product(self, product_id: str) -> Product:
        """Fetch a single product by ID."""

    @abstractmethod
    async def list_categories(self) -> List[str]:
        """Return the distinct categories in use."""

    @abstractmethod
    async def create_product(self, payload: ProductFormPayload) -> Product:
        """Create a product and return the stored record."""

    @abstractmethod
    async def update_product(self, product_id: str, payload: ProductFormPayload) -> Product:
        """Update a product and return the stored record."""

    @abstractmethod
    async def delete_product(self, product_id: str) -> None:
        """Delete a product."""


class Notifier(ABC):
    """Blocking user notifications raised by the admin screen."""

    @abstractmethod
    def alert(self, message: str) -> None:
        """Show a message the user must acknowledge."""

    @abstractmethod
    def confirm(self, message: str) -> bool:
        """Ask a yes/no question; True means the user agreed."""
