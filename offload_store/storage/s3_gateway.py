# ==============================================
# S3BlobGateway
# ==============================================
#
# PURPOSE:
#   BlobGateway backed by one S3 bucket through the boto3 client.
#
# CLASS: S3BlobGateway
# --------------------
#   Stateful — holds the boto3 S3 client.
#
#   Constructor:
#   ------------
#   - __init__(bucket_name, region=None, endpoint_url=None, client=None)
#       Store connection params. A ready-made client (or a mock)
#       can be handed in instead of calling connect().
#
#   Methods:
#   --------
#   - connect() -> None
#       Create the client and check the bucket is reachable.
#   - disconnect() -> None
#   - get(key) -> bytes     → get_object, body read fully
#   - put(key, body)        → put_object (application/json)
#   - delete(key)           → delete_object
#
#   botocore.exceptions.ClientError is never caught on the data
#   path; callers see S3's own error codes.
#
# ==============================================

import logging
from typing import Any, Dict, Optional

import boto3

logger = logging.getLogger(__name__)


class S3BlobGateway:
    def __init__(self, bucket_name: str, region: Optional[str] = None,
                 endpoint_url: Optional[str] = None, client=None):
        self.bucket_name = bucket_name
        self.region = region
        self.endpoint_url = endpoint_url
        self.client = client

    def connect(self) -> None:
        session_kwargs: Dict[str, Any] = {}
        if self.region:
            session_kwargs["region_name"] = self.region
        client_kwargs: Dict[str, Any] = {}
        if self.endpoint_url:
            client_kwargs["endpoint_url"] = self.endpoint_url

        self.client = boto3.client("s3", **session_kwargs, **client_kwargs)
        # Fail early on a missing bucket or bad credentials
        self.client.head_bucket(Bucket=self.bucket_name)
        logger.info("Connected to S3 bucket '%s'.", self.bucket_name)

    def disconnect(self) -> None:
        self.client = None

    def _require_client(self):
        if self.client is None:
            raise RuntimeError("Not connected to S3.")
        return self.client

    def get(self, key: str) -> bytes:
        response = self._require_client().get_object(Bucket=self.bucket_name, Key=key)
        return response["Body"].read()

    def put(self, key: str, body: bytes) -> None:
        self._require_client().put_object(
            Bucket=self.bucket_name,
            Key=key,
            Body=body,
            ContentType="application/json",
        )

    def delete(self, key: str) -> None:
        self._require_client().delete_object(Bucket=self.bucket_name, Key=key)

    def __enter__(self):
        if self.client is None:
            self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
