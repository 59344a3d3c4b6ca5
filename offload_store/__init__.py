# ==============================================
# Offload Store
# ==============================================
#
# Package Structure (3 Topics + Orchestrator):
#
# offload_store/
# ├── transform/        # Topic 1: Field paths, content codec, record transformation
# ├── analysis/         # Topic 2: Size evaluation & placement decisions
# ├── storage/          # Topic 3: Gateways, placement router, migration coordinator
# ├── config.py         # Configuration management
# ├── errors.py         # Exception hierarchy
# ├── document_client.py  # Final orchestrator class
# └── cli.py            # Command line entry point
#
# ==============================================

from .document_client import DocumentClient
from .errors import (
    ConfigurationError,
    DocumentNotFoundError,
    DocumentTooLargeError,
    OffloadStoreError,
)

__version__ = "0.1.0"

__all__ = [
    "DocumentClient",
    "ConfigurationError",
    "DocumentNotFoundError",
    "DocumentTooLargeError",
    "OffloadStoreError",
]
