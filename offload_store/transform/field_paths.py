# ==============================================
# Field Paths
# ==============================================
#
# PURPOSE:
#   Read and write values at dotted field paths inside nested
#   dicts, e.g. "Attributes.S3Key" → record["Attributes"]["S3Key"].
#
# WHY THIS MODULE EXISTS:
#   The content, pointer and path fields are all configured as
#   dotted paths, so every piece of the offload layer has to
#   address nested attributes the same way.
#
# FUNCTIONS:
# ----------
# - get_path(record, path, default=None) -> Any
#     Walk the path; return default if any segment is missing.
#
# - set_path(record, path, value) -> None
#     Walk the path, creating intermediate dicts as needed,
#     and assign the value in place.
#
# - unset_path(record, path) -> None
#     Remove the leaf key if present. Missing segments are a no-op.
#
# - has_path(record, path) -> bool
#
# ==============================================

from typing import Any, List

_MISSING = object()


def _split(path: str) -> List[str]:
    return path.split(".")


def get_path(record: Any, path: str, default: Any = None) -> Any:
    obj = record
    for part in _split(path):
        if not isinstance(obj, dict) or part not in obj:
            return default
        obj = obj[part]
    return obj


def has_path(record: Any, path: str) -> bool:
    return get_path(record, path, _MISSING) is not _MISSING


def set_path(record: dict, path: str, value: Any) -> None:
    parts = _split(path)
    obj = record
    for part in parts[:-1]:
        # Replace scalars in the way; the path wins
        if not isinstance(obj.get(part), dict):
            obj[part] = {}
        obj = obj[part]
    obj[parts[-1]] = value


def unset_path(record: dict, path: str) -> None:
    parts = _split(path)
    obj = record
    for part in parts[:-1]:
        obj = obj.get(part) if isinstance(obj, dict) else None
        if obj is None:
            return
    if isinstance(obj, dict):
        obj.pop(parts[-1], None)
