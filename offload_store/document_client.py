# ==============================================
# DocumentClient — Final Orchestrator
# ==============================================
#
# PURPOSE:
#   This is the MAIN CLASS callers use. It looks like a plain
#   structured-store client (get / put / delete / update plus the
#   batch and query calls), while documents too large for the
#   structured store have their content kept in the blob store.
#
# HOW IT CONNECTS THE 3 TOPICS:
#
#   ┌──────────────────────────────────────────────────────────┐
#   │                     DocumentClient                       │
#   │                                                          │
#   │  get / put / delete            update                    │
#   │        │                          │                      │
#   │        ▼                          ▼                      │
#   │  ┌────────────────┐    ┌─────────────────────────┐       │
#   │  │ PlacementRouter│◄───│ MigrationCoordinator    │       │
#   │  └───────┬────────┘    └────────────┬────────────┘       │
#   │          │ uses                     │ uses               │
#   │          ▼                          ▼                    │
#   │  SizeEvaluator (Topic 2)   RecordTransformer (Topic 1)   │
#   │          │                                               │
#   │          ▼                                               │
#   │  StructuredGateway (DynamoDB)   BlobGateway (S3)         │
#   │                                                          │
#   │  batch_get / batch_write / query / scan ──► passthrough  │
#   └──────────────────────────────────────────────────────────┘
#
# CONCURRENCY:
#   Every call is independent and the client holds no mutable state,
#   so one instance can be shared between threads. Calls on the SAME
#   path are NOT serialized: two puts, or an update racing a delete,
#   on one path can leave the structured item and the blob out of
#   step. Callers that need that guarantee must serialize per path.
#
# CLASS: DocumentClient
# ---------------------
#   Constructor:
#   ------------
#   - __init__(structured, blob, config: DocumentConfig,
#              on_inconsistency=log_inconsistency)
#
#   Class methods:
#   --------------
#   - from_config(app_config: AppConfig | None = None) -> DocumentClient
#       Build boto3-backed gateways from configuration (.env).
#
#   Methods:
#   --------
#   - get(path, **params)                  → {"Item": record}
#   - put(item, **params)                  → {"Attributes": record}
#   - delete(path, **params)               → {"Attributes": record}
#   - update(path, mutate, **update_params) → {"Attributes": record}
#   - batch_get / batch_write / query / scan (unmodified passthrough)
#
# ==============================================

import logging
from typing import Any, Dict, Optional

from .config import AppConfig, DocumentConfig, get_config
from .storage.dynamo_gateway import DynamoTableGateway
from .storage.gateways import BlobGateway, StructuredGateway
from .storage.inconsistency import InconsistencyHandler, log_inconsistency
from .storage.migrator import MigrationCoordinator, Mutation
from .storage.placement_router import PlacementRouter
from .storage.s3_gateway import S3BlobGateway

logger = logging.getLogger(__name__)


class DocumentClient:
    def __init__(
        self,
        structured: StructuredGateway,
        blob: BlobGateway,
        config: DocumentConfig,
        on_inconsistency: InconsistencyHandler = log_inconsistency,
    ):
        self.config = config
        self.structured = structured
        self.blob = blob
        self.router = PlacementRouter(structured, blob, config, on_inconsistency=on_inconsistency)
        self.migrator = MigrationCoordinator(self.router)

    @classmethod
    def from_config(cls, app_config: Optional[AppConfig] = None) -> "DocumentClient":
        """
        Build a client talking to DynamoDB and S3.

        Args:
            app_config: Configuration to use; loaded from the environment when omitted

        Returns:
            A DocumentClient with connected gateways
        """
        app_config = app_config or get_config()
        aws = app_config.aws
        structured = DynamoTableGateway(aws.table_name, region=aws.region, endpoint_url=aws.endpoint_url)
        structured.connect()
        blob = S3BlobGateway(app_config.document.bucket_name, region=aws.region, endpoint_url=aws.endpoint_url)
        blob.connect()
        logger.info("Document client ready: table '%s', bucket '%s'.",
                    aws.table_name, app_config.document.bucket_name)
        return cls(structured, blob, app_config.document)

    # --- Offload-aware operations ---

    def get(self, path: str, **params: Any) -> Dict[str, Any]:
        return self.router.get(path, **params)

    def put(self, item: Dict[str, Any], **params: Any) -> Dict[str, Any]:
        return self.router.put(item, **params)

    def delete(self, path: str, **params: Any) -> Dict[str, Any]:
        return self.router.delete(path, **params)

    def update(self, path: str, mutate: Mutation, **update_params: Any) -> Dict[str, Any]:
        return self.migrator.update(path, mutate, **update_params)

    # --- Passthrough ---

    def batch_get(self, **params: Any) -> Dict[str, Any]:
        return self.structured.batch_get(**params)

    def batch_write(self, **params: Any) -> Dict[str, Any]:
        return self.structured.batch_write(**params)

    def query(self, **params: Any) -> Dict[str, Any]:
        return self.structured.query(**params)

    def scan(self, **params: Any) -> Dict[str, Any]:
        return self.structured.scan(**params)
