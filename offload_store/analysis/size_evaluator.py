# ==============================================
# SizeEvaluator
# ==============================================
#
# PURPOSE:
#   Measure a record the way the structured store will see it on the
#   wire and decide whether its content has to be offloaded.
#
# WHY THIS CLASS EXISTS:
#   DynamoDB refuses items over 400 KB. Anything bigger must have its
#   content moved to S3, and anything over the configured maximum must
#   be refused outright before we touch either backend.
#
# CLASS: SizeEvaluator
# --------------------
#   Stateless apart from the configured maximum.
#
#   Constructor:
#   ------------
#   - __init__(max_document_size: int, structured_limit: int = STRUCTURED_ITEM_LIMIT)
#
#   Methods:
#   --------
#   - measure(record: dict) -> int
#       Byte size of the record in DynamoDB JSON wire format.
#
#   - classify(record: dict) -> PlacementDecision
#       Measure and compare against both thresholds. Never raises.
#
#   - evaluate(record: dict) -> PlacementDecision
#       Same as classify, but raises DocumentTooLargeError when
#       the record is over the configured maximum.
#
# ==============================================

import base64
import json
import logging
from decimal import Decimal
from typing import Any

from boto3.dynamodb.types import TypeSerializer

from ..errors import DocumentTooLargeError
from .decision import PlacementDecision

logger = logging.getLogger(__name__)

# DynamoDB's hard per-item limit. Larger records go to the blob store.
STRUCTURED_ITEM_LIMIT = 400 * 1024


def to_dynamo_types(value: Any) -> Any:
    """Coerce Python values TypeSerializer rejects into ones it accepts."""
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: to_dynamo_types(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_dynamo_types(v) for v in value]
    return value


def _wire_default(value: Any) -> Any:
    # Binary attributes travel base64-encoded in the JSON protocol
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class SizeEvaluator:
    def __init__(self, max_document_size: int, structured_limit: int = STRUCTURED_ITEM_LIMIT):
        self.max_document_size = max_document_size
        self.structured_limit = structured_limit
        self._serializer = TypeSerializer()

    def measure(self, record: dict) -> int:
        if not isinstance(record, dict):
            raise TypeError("Record must be a dictionary")
        marshalled = {
            key: self._serializer.serialize(to_dynamo_types(value))
            for key, value in record.items()
        }
        wire = json.dumps(marshalled, separators=(",", ":"), ensure_ascii=False, default=_wire_default)
        return len(wire.encode("utf-8"))

    def classify(self, record: dict) -> PlacementDecision:
        size = self.measure(record)
        return PlacementDecision(
            size=size,
            oversize_structured=size > self.structured_limit,
            oversize_absolute=size > self.max_document_size,
        )

    def evaluate(self, record: dict) -> PlacementDecision:
        """
        Decide placement for a record that is about to be written.

        Args:
            record: The logical record, content included

        Returns:
            PlacementDecision whose use_blob_store is the placement signal

        Raises:
            DocumentTooLargeError: If the record exceeds the configured maximum
        """
        decision = self.classify(record)
        if decision.oversize_absolute:
            raise DocumentTooLargeError(decision.size, self.max_document_size)
        logger.debug("Placement decision: %s", decision.to_dict())
        return decision
