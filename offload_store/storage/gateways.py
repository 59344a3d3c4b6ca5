# ==============================================
# Gateways (Interfaces)
# ==============================================
#
# PURPOSE:
#   The two backends the router talks to, described structurally.
#   Anything with these methods works: the boto3 adapters in this
#   package, in-memory fakes in tests, or a caller's own client.
#
# PROTOCOLS:
# ----------
# - StructuredGateway
#     Key/value item store with a hard per-item size ceiling
#     (DynamoDB). Responses use DynamoDB's shapes:
#       get    → {"Item": {...}}        (no "Item" when absent)
#       put    → {...}
#       delete → {"Attributes": {...}}  (prior attributes)
#       update → {"Attributes": {...}}
#     batch_get / batch_write / query / scan are passed through
#     untouched by the offload layer.
#
# - BlobGateway
#     Unbounded object store (S3) addressed by string key.
#
# Errors raised by implementations reach the caller unchanged.
#
# ==============================================

from typing import Any, Dict, Protocol, runtime_checkable


@runtime_checkable
class StructuredGateway(Protocol):
    """Protocol for the size-constrained structured store."""

    def get(self, key: Dict[str, Any], **params: Any) -> Dict[str, Any]:
        """Fetch one item by key."""
        ...

    def put(self, item: Dict[str, Any], **params: Any) -> Dict[str, Any]:
        """Write one item, replacing any item with the same key."""
        ...

    def delete(self, key: Dict[str, Any], **params: Any) -> Dict[str, Any]:
        """Delete one item and return its prior attributes."""
        ...

    def update(self, key: Dict[str, Any], **params: Any) -> Dict[str, Any]:
        """Apply a partial update expression to one item."""
        ...

    def batch_get(self, **params: Any) -> Dict[str, Any]:
        ...

    def batch_write(self, **params: Any) -> Dict[str, Any]:
        ...

    def query(self, **params: Any) -> Dict[str, Any]:
        ...

    def scan(self, **params: Any) -> Dict[str, Any]:
        ...


@runtime_checkable
class BlobGateway(Protocol):
    """Protocol for the unbounded blob store."""

    def get(self, key: str) -> bytes:
        """Read an object's body."""
        ...

    def put(self, key: str, body: bytes) -> None:
        """Write an object, replacing any existing one."""
        ...

    def delete(self, key: str) -> None:
        """Delete an object."""
        ...
