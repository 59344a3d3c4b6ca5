# ==============================================
# TOPIC 1: TRANSFORMATION
# ==============================================
#
# This package turns a logical record into the physical pieces
# each backend stores, and back. Nothing here does I/O.
#
# Modules:
# --------
# - field_paths.py        → Dotted-path get/set/unset on nested dicts
# - content_codec.py      → Blob body encoding (JSON, bytes-safe)
# - record_transformer.py → Structured/inline representations of a record
#
# ==============================================

from .record_transformer import RecordTransformer
from .content_codec import decode_content, encode_content

__all__ = ["RecordTransformer", "decode_content", "encode_content"]
