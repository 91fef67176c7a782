"""
In-process preview references for selected image files.

A preview reference is an opaque `blob:` style string that stands in for a
selected file until it is revoked. References are owned by the draft editor,
which must revoke them whenever a selection is replaced, a file is removed,
or the draft is discarded.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional
from uuid import uuid4

from pharmacy_admin.integrations.contracts.interfaces import ImageFile

logger = logging.getLogger(__name__)

PREVIEW_SCHEME = "blob:pharmacy-admin/"


class PreviewStore:
    def __init__(self) -> None:
        # Simple in-memory store: reference -> file
        self._previews: Dict[str, ImageFile] = {}

    def create(self, image: ImageFile) -> str:
        ref = f"{PREVIEW_SCHEME}{uuid4()}"
        self._previews[ref] = image
        return ref

    def get(self, ref: str) -> Optional[ImageFile]:
        return self._previews.get(ref)

    def revoke(self, ref: str) -> None:
        if self._previews.pop(ref, None) is None:
            logger.debug(f"Preview {ref} was already released")

    def revoke_all(self, refs: Iterable[str]) -> None:
        for ref in list(refs):
            self.revoke(ref)

    @property
    def active(self) -> int:
        return len(self._previews)

    def __contains__(self, ref: object) -> bool:
        return ref in self._previews
