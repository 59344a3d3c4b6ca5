# ==============================================
# TOPIC 3: STORAGE (DynamoDB + S3)
# ==============================================
#
# This package handles all backend operations: the gateway
# interfaces, their boto3 implementations, and the two
# orchestrators that keep a document consistent across them.
#
# Modules:
# --------
# - gateways.py           → StructuredGateway / BlobGateway protocols
# - dynamo_gateway.py     → DynamoDB table adapter
# - s3_gateway.py         → S3 bucket adapter
# - inconsistency.py      → Out-of-band reports when the backends drift
# - placement_router.py   → Get / Put / Delete across both backends
# - migrator.py           → Update and the four migration transitions
#
# ==============================================

from .gateways import BlobGateway, StructuredGateway
from .dynamo_gateway import DynamoTableGateway
from .s3_gateway import S3BlobGateway
from .inconsistency import Inconsistency, InconsistencyKind, log_inconsistency
from .placement_router import PlacementRouter
from .migrator import MigrationCoordinator, MigrationPlan, plan_transition

__all__ = [
    "BlobGateway",
    "StructuredGateway",
    "DynamoTableGateway",
    "S3BlobGateway",
    "Inconsistency",
    "InconsistencyKind",
    "log_inconsistency",
    "PlacementRouter",
    "MigrationCoordinator",
    "MigrationPlan",
    "plan_transition",
]
