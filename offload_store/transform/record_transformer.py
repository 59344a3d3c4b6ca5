# ==============================================
# RecordTransformer
# ==============================================
#
# PURPOSE:
#   Convert between the logical record the caller sees and the
#   physical pieces the two backends store.
#
# WHY THIS CLASS EXISTS:
#   The structured item and the blob must stay mutually consistent:
#   an offloaded item has no content and a pointer equal to its Path,
#   an inline item carries its content and (after migration) no pointer.
#   Keeping those rules in one pure class makes them testable without
#   any backend.
#
# CLASS: RecordTransformer
# ------------------------
#   Pure, no I/O. Every method deep-copies; caller records are
#   never mutated.
#
#   Constructor:
#   ------------
#   - __init__(config: DocumentConfig)
#
#   Methods:
#   --------
#   - to_structured(record, use_blob_store) -> dict
#       use_blob_store=True  → content removed, pointer set to Path
#       use_blob_store=False → unchanged copy
#
#   - to_inline(record) -> dict
#       Copy with the pointer removed (blob → structured migration).
#
#   - blob_body(record) -> bytes
#       Encoded content for the blob store.
#
#   - restore_content(record, content) -> dict
#       Copy with the content field set to the given logical value.
#
#   - path_of / pointer_of / has_content / content_of / key_for
#       Field accessors driven by the configured paths.
#
# ==============================================

import copy
from typing import Any, Optional

from ..config import DocumentConfig
from .content_codec import encode_content
from .field_paths import get_path, has_path, set_path, unset_path


class RecordTransformer:
    def __init__(self, config: DocumentConfig):
        self.config = config

    def path_of(self, record: dict) -> Optional[str]:
        return get_path(record, self.config.path_path)

    def pointer_of(self, record: Optional[dict]) -> Optional[str]:
        if not record:
            return None
        return get_path(record, self.config.s3_key_path)

    def has_content(self, record: dict) -> bool:
        return has_path(record, self.config.content_path)

    def content_of(self, record: dict) -> Any:
        return get_path(record, self.config.content_path)

    def key_for(self, path: str) -> dict:
        """Build the structured-store key for a path."""
        key: dict = {}
        set_path(key, self.config.path_path, path)
        return key

    def to_structured(self, record: dict, use_blob_store: bool) -> dict:
        transformed = copy.deepcopy(record)
        if use_blob_store:
            unset_path(transformed, self.config.content_path)
            set_path(transformed, self.config.s3_key_path, self.path_of(transformed))
        return transformed

    def to_inline(self, record: dict) -> dict:
        transformed = copy.deepcopy(record)
        unset_path(transformed, self.config.s3_key_path)
        # Drop the attributes namespace if the pointer was all it held
        parent_path, _, _ = self.config.s3_key_path.rpartition(".")
        if parent_path and get_path(transformed, parent_path) == {}:
            unset_path(transformed, parent_path)
        return transformed

    def blob_body(self, record: dict) -> bytes:
        return encode_content(self.content_of(record))

    def restore_content(self, record: dict, content: Any) -> dict:
        restored = copy.deepcopy(record)
        set_path(restored, self.config.content_path, content)
        return restored
