# ==============================================
# PlacementRouter
# ==============================================
#
# PURPOSE:
#   Runs Get, Put and Delete for one logical document across the
#   structured store and the blob store, so callers see a single
#   record no matter where its content lives.
#
# WHY THIS CLASS EXISTS:
#   A document's content goes to the blob store when the whole item
#   is too large for the structured store. The two writes have to
#   happen in an order that never leaves a blob without a structured
#   pointer, and a failed blob write has to be undone.
#
# CLASS: PlacementRouter
# ----------------------
#   Holds references to both gateways. Keeps no state between calls.
#
#   Constructor:
#   ------------
#   - __init__(structured, blob, config, evaluator=None,
#              transformer=None, on_inconsistency=log_inconsistency)
#
#   Methods:
#   --------
#   - put(item: dict, **params) -> dict
#       1. Evaluate size (DocumentTooLargeError before any I/O)
#       2. Transform to structured representation (a record with no
#          content field is never offloaded)
#       3. Write structured item, asking for the prior item
#          (errors propagate, nothing to undo)
#       4. If inline: delete the blob the prior item pointed at;
#          a failure there is reported, not raised
#       5. If offloaded: write blob at key = Path
#            on failure → delete the structured item, re-raise the
#            ORIGINAL blob error; a failed undo is reported, not raised
#       6. Return {"Attributes": item with the original content}
#
#   - get(path: str, **params) -> dict
#       Structured get; if the item has a pointer, fetch the blob and
#       splice its content back in. No pointer means not offloaded.
#
#   - delete(path: str, **params) -> dict
#       Structured delete first (returns prior attributes). If they
#       carry a pointer, read the blob (for the response) then delete
#       it. A failed blob step is reported, not raised.
#
#   put and delete always send ReturnValues=ALL_OLD; a caller asking
#   for anything else gets a ValueError before any I/O.
#
# ==============================================

import logging
from typing import Any, Dict, Optional

from ..analysis.size_evaluator import SizeEvaluator
from ..config import DocumentConfig
from ..transform.content_codec import decode_content
from ..transform.record_transformer import RecordTransformer
from .gateways import BlobGateway, StructuredGateway
from .inconsistency import (
    Inconsistency,
    InconsistencyHandler,
    InconsistencyKind,
    log_inconsistency,
)

logger = logging.getLogger(__name__)


class PlacementRouter:
    def __init__(
        self,
        structured: StructuredGateway,
        blob: BlobGateway,
        config: DocumentConfig,
        evaluator: Optional[SizeEvaluator] = None,
        transformer: Optional[RecordTransformer] = None,
        on_inconsistency: InconsistencyHandler = log_inconsistency,
    ):
        self.structured = structured
        self.blob = blob
        self.config = config
        self.evaluator = evaluator or SizeEvaluator(config.max_document_size)
        self.transformer = transformer or RecordTransformer(config)
        self.on_inconsistency = on_inconsistency

    def put(self, item: Dict[str, Any], **params: Any) -> Dict[str, Any]:
        """
        Write a logical record, offloading its content when it is too large.

        Args:
            item: The logical record, content included
            **params: Extra arguments for the structured put (e.g. ConditionExpression)

        Returns:
            {"Attributes": record} with the caller's content value

        Raises:
            DocumentTooLargeError: Record over the configured maximum (no I/O done)
            ValueError: Record has no path, or ReturnValues other than ALL_OLD
        """
        path = self.transformer.path_of(item)
        if not path:
            raise ValueError(f"Record has no '{self.config.path_path}' field")
        params = self._with_prior_values(params)

        decision = self.evaluator.evaluate(item)
        # Nothing to offload when the record carries no content
        use_blob_store = decision.use_blob_store and self.transformer.has_content(item)
        structured_item = self.transformer.to_structured(item, use_blob_store)

        response = self.structured.put(structured_item, **params)

        if not use_blob_store:
            self._drop_replaced_blob(path, response.get("Attributes"))
            return {"Attributes": structured_item}

        try:
            self.blob.put(path, self.transformer.blob_body(item))
        except Exception as blob_error:
            logger.warning("Blob write failed for '%s', undoing structured write: %r", path, blob_error)
            self._undo_structured_put(path, blob_error)
            raise

        logger.debug("Offloaded content of '%s' (%d bytes)", path, decision.size)
        attributes = self.transformer.restore_content(
            structured_item, self.transformer.content_of(item)
        )
        return {"Attributes": attributes}

    def _with_prior_values(self, params: Dict[str, Any]) -> Dict[str, Any]:
        # Prior attributes are how a replaced or deleted item's blob is found
        return_values = params.get("ReturnValues", "ALL_OLD")
        if return_values != "ALL_OLD":
            raise ValueError(f"ReturnValues must be ALL_OLD, got {return_values!r}")
        return {**params, "ReturnValues": "ALL_OLD"}

    def _drop_replaced_blob(self, path: str, prior: Optional[Dict[str, Any]]) -> None:
        pointer = self.transformer.pointer_of(prior)
        if not pointer:
            return
        try:
            self.blob.delete(pointer)
        except Exception as error:
            self.on_inconsistency(Inconsistency(
                kind=InconsistencyKind.BLOB_DELETE_FAILED,
                path=path,
                error=error,
                detail=f"replaced item's blob '{pointer}' may be orphaned",
            ))
            return
        logger.debug("Removed blob '%s' of replaced item '%s'", pointer, path)

    def _undo_structured_put(self, path: str, blob_error: BaseException) -> None:
        try:
            self.structured.delete(self.transformer.key_for(path))
        except Exception as undo_error:
            self.on_inconsistency(Inconsistency(
                kind=InconsistencyKind.COMPENSATION_FAILURE,
                path=path,
                error=undo_error,
                detail=f"structured item points at a missing blob; original blob error: {blob_error!r}",
            ))

    def get(self, path: str, **params: Any) -> Dict[str, Any]:
        response = self.structured.get(self.transformer.key_for(path), **params)
        item = response.get("Item")
        pointer = self.transformer.pointer_of(item)
        if not pointer:
            return response

        content = decode_content(self.blob.get(pointer))
        logger.debug("Reassembled '%s' from blob '%s'", path, pointer)
        return {**response, "Item": self.transformer.restore_content(item, content)}

    def delete(self, path: str, **params: Any) -> Dict[str, Any]:
        params = self._with_prior_values(params)
        response = self.structured.delete(self.transformer.key_for(path), **params)
        attributes = response.get("Attributes")
        pointer = self.transformer.pointer_of(attributes)
        if not pointer:
            return response

        # The structured item is gone already; from here on failures are
        # reported instead of raised.
        try:
            body = self.blob.get(pointer)
            self.blob.delete(pointer)
        except Exception as error:
            self.on_inconsistency(Inconsistency(
                kind=InconsistencyKind.BLOB_DELETE_FAILED,
                path=path,
                error=error,
                detail=f"blob '{pointer}' may be orphaned",
            ))
            return response

        content = decode_content(body)
        return {**response, "Attributes": self.transformer.restore_content(attributes, content)}
