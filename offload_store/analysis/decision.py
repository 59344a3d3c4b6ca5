# ==============================================
# Decision (Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes that represent the OUTPUT of size evaluation.
#   A placement decision says which backend holds a record's
#   content; a transition says how an update moves it.
#
# ENUMS:
# ------
# - Backend(Enum): STRUCTURED, BLOB
#     Which backend holds the content field.
#
# - Transition(Enum): STAYS_STRUCTURED, STRUCTURED_TO_BLOB,
#                     BLOB_TO_STRUCTURED, STAYS_BLOB
#     The four migration cases an update can trigger.
#
# CLASSES:
# --------
# - PlacementDecision (dataclass)
#     The decision for a single record.
#
#     Attributes:
#     -----------
#     - size: int                    → Structured wire-format size in bytes
#     - oversize_structured: bool    → Over the structured store's per-item limit
#     - oversize_absolute: bool      → Over the configured maximum document size
#
#     Properties:
#     -----------
#     - use_blob_store -> bool
#     - backend -> Backend
#
# ==============================================

from enum import Enum
from dataclasses import dataclass
from typing import Dict, Any


class Backend(Enum):
    """
    Enumeration of storage backends for a record's content.

    - STRUCTURED: content stays inline in the key/value item
    - BLOB: content is offloaded to the blob store, item keeps a pointer
    """
    STRUCTURED = "structured"
    BLOB = "blob"


class Transition(Enum):
    """The four ways an update can move a record between backends."""
    STAYS_STRUCTURED = "structured->structured"
    STRUCTURED_TO_BLOB = "structured->blob"
    BLOB_TO_STRUCTURED = "blob->structured"
    STAYS_BLOB = "blob->blob"

    @classmethod
    def between(cls, old_uses_blob: bool, new_uses_blob: bool) -> "Transition":
        """
        Select the transition for an (old, new) placement pair.

        Args:
            old_uses_blob: Whether the stored version lives in the blob store
            new_uses_blob: Whether the mutated version must live in the blob store

        Returns:
            The matching Transition
        """
        return _TRANSITIONS[(old_uses_blob, new_uses_blob)]


_TRANSITIONS = {
    (False, False): Transition.STAYS_STRUCTURED,
    (False, True): Transition.STRUCTURED_TO_BLOB,
    (True, False): Transition.BLOB_TO_STRUCTURED,
    (True, True): Transition.STAYS_BLOB,
}


@dataclass(frozen=True)
class PlacementDecision:
    """
    Represents the placement decision for a single record.

    This is what the SizeEvaluator produces and what the router and
    migration coordinator use to pick a backend.
    """

    size: int  # Bytes as the structured store would encode the record
    oversize_structured: bool  # Larger than the structured store accepts
    oversize_absolute: bool  # Larger than the configured maximum

    @property
    def use_blob_store(self) -> bool:
        return self.oversize_structured

    @property
    def backend(self) -> Backend:
        return Backend.BLOB if self.oversize_structured else Backend.STRUCTURED

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the decision for logging.

        Returns:
            A JSON-serializable dictionary representation
        """
        return {
            "size": self.size,
            "backend": self.backend.value,
            "oversize_structured": self.oversize_structured,
            "oversize_absolute": self.oversize_absolute,
        }
