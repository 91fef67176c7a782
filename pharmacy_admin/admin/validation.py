"""Pre-submit validation for the product form.

Checks run in a fixed order and the first failing stage wins: required
fields, then images for the active image mode, then value formats. Each stage
raises `FormValidationError` with one user-facing `message` plus per-field
`field_errors`, before any request is built.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional

from pharmacy_admin.integrations.contracts.interfaces import ImageUploadType, PetType

if TYPE_CHECKING:  # pragma: no cover
    from pharmacy_admin.admin.draft import DraftEditor


REQUIRED_FIELDS_MESSAGE = (
    "Please fill in all required fields (Name, Category, Brand, Price, Stock Quantity, and Description)"
)
MISSING_IMAGE_URL_MESSAGE = "Please provide at least one product image"
MISSING_IMAGE_FILE_MESSAGE = "Please select at least one image file"
TOO_MANY_FILES_MESSAGE = "Maximum {limit} images allowed"

REQUIRED_FIELDS = (
    ("name", "Name"),
    ("category", "Category"),
    ("price", "Price"),
    ("stock_quantity", "Stock Quantity"),
    ("brand", "Brand"),
    ("description", "Description"),
)


@dataclass
class FormValidationError(Exception):
    """Exception raised for form validation failures.

    Attributes:
        field_errors: mapping of field name -> human-readable error message.
        message: optional top-level message.
    """

    field_errors: Dict[str, str]
    message: str = "Validation failed"

    def __str__(self) -> str:  # pragma: no cover
        return self.message


class TooManyFilesError(FormValidationError):
    """A file selection exceeded the per-product image limit."""

    def __init__(self, limit: int, selected: int) -> None:
        super().__init__(
            field_errors={"image_files": f"{selected} files selected, at most {limit} allowed"},
            message=TOO_MANY_FILES_MESSAGE.format(limit=limit),
        )
        self.limit = limit
        self.selected = selected


def _strip(v: Any) -> str:
    return "" if v is None else str(v).strip()


def add_error(errors: Dict[str, str], field: str, message: str) -> None:
    if field not in errors:
        errors[field] = message


def parse_price(raw: Any) -> Decimal:
    value = Decimal(_strip(raw))
    if not value.is_finite():
        raise InvalidOperation(raw)
    return value


def parse_stock(raw: Any) -> int:
    return int(_strip(raw))


def parse_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    s = _strip(raw).lower()
    if s in ("true", "1", "yes", "y", "on"):
        return True
    if s in ("false", "0", "no", "n", "off", ""):
        return False
    raise ValueError(f"{raw!r} is not a true/false value")


def format_decimal(value: Decimal) -> str:
    """Render a decimal without exponent or trailing zeros ("12.50" -> "12.5")."""
    text = format(value.normalize(), "f")
    return "0" if text in ("-0", "") else text


def validate_in(value: str, allowed: Iterable[str], errors: Dict[str, str], field: str) -> str:
    raw = _strip(value)
    if raw not in set(allowed):
        add_error(errors, field, f"{field} has an invalid value")
    return raw


def raise_if_errors(errors: Dict[str, str], message: str = "Please correct the highlighted fields") -> None:
    if errors:
        raise FormValidationError(field_errors=errors, message=message)


def validate_required_fields(values: Dict[str, Any]) -> None:
    errors: Dict[str, str] = {}
    for field, label in REQUIRED_FIELDS:
        if not _strip(values.get(field)):
            add_error(errors, field, f"{label} is required")
    raise_if_errors(errors, REQUIRED_FIELDS_MESSAGE)


def validate_images(mode: ImageUploadType, image_urls: list, file_count: int) -> None:
    if mode is ImageUploadType.URL:
        first = image_urls[0] if image_urls else ""
        if not _strip(first):
            raise_if_errors({"images": "The first image URL is required"}, MISSING_IMAGE_URL_MESSAGE)
    elif file_count == 0:
        raise_if_errors({"image_files": "At least one image file is required"}, MISSING_IMAGE_FILE_MESSAGE)


def validate_formats(values: Dict[str, Any]) -> None:
    errors: Dict[str, str] = {}

    try:
        if parse_price(values.get("price")) < 0:
            add_error(errors, "price", "Price must be at least 0")
    except (InvalidOperation, ValueError):
        add_error(errors, "price", "Price must be a number")

    try:
        if parse_stock(values.get("stock_quantity")) < 0:
            add_error(errors, "stock_quantity", "Stock Quantity must be at least 0")
    except ValueError:
        add_error(errors, "stock_quantity", "Stock Quantity must be a whole number")

    validate_in(values.get("pet_type"), (p.value for p in PetType), errors, "pet_type")

    if errors:
        # Report the first problem as the headline.
        raise_if_errors(errors, next(iter(errors.values())))


def validate_submission(editor: "DraftEditor", values: Optional[Dict[str, Any]] = None) -> None:
    """Validate the editor's draft for submission; raises FormValidationError."""
    values = values if values is not None else editor.draft.as_dict()
    validate_required_fields(values)
    validate_images(editor.image_upload_type, list(editor.draft.images), len(editor.image_files))
    validate_formats(values)
