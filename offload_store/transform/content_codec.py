# ==============================================
# Content Codec
# ==============================================
#
# PURPOSE:
#   Turn a record's content value into the bytes stored in the
#   blob store, and back.
#
# FORMAT:
# -------
#   UTF-8 JSON. Values plain JSON cannot carry are tagged:
#     - bytes / bytearray / Binary → {"__bytes__": "<base64>"}
#     - set / frozenset   → {"__set__": [...]}
#     - Decimal           → int when integral, float otherwise
#       (boto3 hands DynamoDB numbers back as Decimal)
#
# FUNCTIONS:
# ----------
# - encode_content(value) -> bytes
# - decode_content(body) -> Any
#     Bodies that are not valid JSON are returned as raw bytes,
#     so objects written by other tools still read back.
#
# ==============================================

import base64
import json
from decimal import Decimal
from typing import Any

from boto3.dynamodb.types import Binary

_BYTES_TAG = "__bytes__"
_SET_TAG = "__set__"


def _default(value: Any) -> Any:
    if isinstance(value, Binary):
        value = value.value
    if isinstance(value, (bytes, bytearray)):
        return {_BYTES_TAG: base64.b64encode(bytes(value)).decode("ascii")}
    if isinstance(value, (set, frozenset)):
        return {_SET_TAG: sorted(value, key=repr)}
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _object_hook(obj: dict) -> Any:
    if len(obj) == 1:
        if _BYTES_TAG in obj:
            return base64.b64decode(obj[_BYTES_TAG])
        if _SET_TAG in obj:
            return set(obj[_SET_TAG])
    return obj


def encode_content(value: Any) -> bytes:
    return json.dumps(value, default=_default).encode("utf-8")


def decode_content(body: bytes) -> Any:
    try:
        return json.loads(body, object_hook=_object_hook)
    except (ValueError, TypeError):
        return body
