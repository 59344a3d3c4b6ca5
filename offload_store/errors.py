# ==============================================
# Errors
# ==============================================
#
# PURPOSE:
#   Exceptions raised by the offload layer itself. Errors coming
#   from the backends (botocore ClientError and friends) are never
#   wrapped; they reach the caller exactly as the gateway raised them.
#
# HIERARCHY:
# ----------
# - OffloadStoreError
#     ├── DocumentTooLargeError   → record over the configured maximum
#     ├── DocumentNotFoundError   → update on a path with no record
#     └── ConfigurationError      → invalid configuration values
#
# ==============================================


class OffloadStoreError(Exception):
    """Base exception for all offload store errors."""

    pass


class DocumentTooLargeError(OffloadStoreError):
    """
    Raised when a record's serialized size exceeds the configured maximum.

    Always raised before any backend I/O. Not retryable without shrinking
    the content.
    """

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(
            f"Item size has exceeded the maximum allowed size ({size} > {limit} bytes)"
        )


class DocumentNotFoundError(OffloadStoreError):
    """Raised when an update targets a path that has no stored record."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Document not found: {path}")


class ConfigurationError(OffloadStoreError):
    """Raised when configuration values are missing or invalid."""

    pass
