"""
Turns a validated draft into the multipart body the products API accepts.

The same body shape is used for create and update. Text values follow the
server's form conventions: booleans as "true"/"false", petType and URL image
lists as JSON arrays, medical details under prescriptionDetails[...] keys.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from pharmacy_admin.admin.validation import format_decimal, parse_price, parse_stock
from pharmacy_admin.integrations.contracts.interfaces import ImageUploadType, ProductFormPayload

if TYPE_CHECKING:  # pragma: no cover
    from pharmacy_admin.admin.draft import DraftEditor

logger = logging.getLogger(__name__)


def _details_key(name: str) -> str:
    return f"prescriptionDetails[{name}]"


def serialize_draft(editor: "DraftEditor", *, legacy_warnings_field: bool = False) -> ProductFormPayload:
    """Build the multipart payload for the editor's current draft.

    With `legacy_warnings_field`, side effects and warnings share the single
    prescriptionDetails[warnings] key and warnings win when both are set.
    """
    draft = editor.draft
    payload = ProductFormPayload()

    payload.add("name", draft.name)
    payload.add("category", draft.category)
    payload.add("description", draft.description)
    payload.add("price", format_decimal(parse_price(draft.price)))
    payload.add("stockQuantity", str(parse_stock(draft.stock_quantity)))
    payload.add("brand", draft.brand)
    payload.add("ingredients", draft.ingredients)
    payload.add("requiresPrescription", "true" if draft.prescription_required else "false")
    payload.add("petType", json.dumps([draft.pet_type]))

    if draft.dosage:
        payload.add(_details_key("dosage"), draft.dosage)
    if legacy_warnings_field:
        # one shared key: warnings is sent whenever either field is filled, side effects never
        if draft.side_effects or draft.warnings:
            payload.add(_details_key("warnings"), draft.warnings)
    else:
        if draft.side_effects:
            payload.add(_details_key("sideEffects"), draft.side_effects)
        if draft.warnings:
            payload.add(_details_key("warnings"), draft.warnings)

    if editor.image_upload_type is ImageUploadType.FILE:
        for image in editor.image_files:
            payload.attach("images", image)
    else:
        urls = [url.strip() for url in draft.images if url and url.strip()]
        payload.add("imageType", "url")
        payload.add("image", urls[0] if urls else "")
        payload.add("images", json.dumps(urls))

    logger.debug(
        f"Serialized draft with {len(payload.fields)} field(s) and {len(payload.files)} file(s)"
    )
    return payload
