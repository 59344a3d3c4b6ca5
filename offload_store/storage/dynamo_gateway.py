# ==============================================
# DynamoTableGateway
# ==============================================
#
# PURPOSE:
#   StructuredGateway backed by a single DynamoDB table through
#   the boto3 Table resource.
#
# WHY THIS CLASS EXISTS:
#   The router only knows the StructuredGateway protocol. This class
#   maps each protocol call onto the matching Table call and fixes up
#   the Python types the resource layer will not accept (floats).
#
# CLASS: DynamoTableGateway
# -------------------------
#   Stateful — holds the boto3 Table resource.
#
#   Constructor:
#   ------------
#   - __init__(table_name, region=None, endpoint_url=None, resource=None)
#       Store connection params. Don't connect yet unless a
#       ready-made DynamoDB service resource is handed in.
#
#   Methods:
#   --------
#   - connect() / disconnect()
#   - get(key, **params)      → Table.get_item
#   - put(item, **params)     → Table.put_item
#   - delete(key, **params)   → Table.delete_item (ReturnValues=ALL_OLD)
#   - update(key, **params)   → Table.update_item
#   - batch_get / batch_write → ServiceResource.batch_get_item / batch_write_item
#   - query / scan            → Table.query / Table.scan
#
#   Context Manager:
#   ----------------
#   - __enter__ / __exit__ for `with DynamoTableGateway(...) as table:` usage.
#
# ==============================================

import logging
from typing import Any, Dict, Optional

import boto3

from ..analysis.size_evaluator import to_dynamo_types

logger = logging.getLogger(__name__)


class DynamoTableGateway:
    def __init__(self, table_name: str, region: Optional[str] = None,
                 endpoint_url: Optional[str] = None, resource=None):
        self.table_name = table_name
        self.region = region
        self.endpoint_url = endpoint_url
        self.resource = resource
        self.table = resource.Table(table_name) if resource is not None else None

    def connect(self) -> None:
        # Build the Table resource. No network call happens until first use.
        resource_kwargs: Dict[str, Any] = {}
        if self.region:
            resource_kwargs["region_name"] = self.region
        if self.endpoint_url:
            resource_kwargs["endpoint_url"] = self.endpoint_url
        self.resource = boto3.resource("dynamodb", **resource_kwargs)
        self.table = self.resource.Table(self.table_name)
        logger.info("Using DynamoDB table '%s'.", self.table_name)

    def disconnect(self) -> None:
        self.table = None
        self.resource = None

    def _require_table(self):
        if self.table is None:
            raise RuntimeError("Not connected to DynamoDB.")
        return self.table

    def get(self, key: Dict[str, Any], **params: Any) -> Dict[str, Any]:
        return self._require_table().get_item(Key=key, **params)

    def put(self, item: Dict[str, Any], **params: Any) -> Dict[str, Any]:
        return self._require_table().put_item(Item=to_dynamo_types(item), **params)

    def delete(self, key: Dict[str, Any], **params: Any) -> Dict[str, Any]:
        # The router needs the prior attributes to find the blob pointer
        params.setdefault("ReturnValues", "ALL_OLD")
        return self._require_table().delete_item(Key=key, **params)

    def update(self, key: Dict[str, Any], **params: Any) -> Dict[str, Any]:
        if "ExpressionAttributeValues" in params:
            params["ExpressionAttributeValues"] = to_dynamo_types(params["ExpressionAttributeValues"])
        return self._require_table().update_item(Key=key, **params)

    def batch_get(self, **params: Any) -> Dict[str, Any]:
        self._require_table()
        return self.resource.batch_get_item(**params)

    def batch_write(self, **params: Any) -> Dict[str, Any]:
        self._require_table()
        return self.resource.batch_write_item(**params)

    def query(self, **params: Any) -> Dict[str, Any]:
        return self._require_table().query(**params)

    def scan(self, **params: Any) -> Dict[str, Any]:
        return self._require_table().scan(**params)

    def __enter__(self):
        if self.table is None:
            self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
