# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - DocumentConfig (frozen dataclass)
#     bucket_name: str        (required)
#     content_path: str       (default "Content")
#     s3_key_path: str        (default "Attributes.S3Key")
#     path_path: str          (default "Path")
#     max_document_size: int  (default 5 MiB)
#
# - AwsConfig (dataclass)
#     region: str | None        (default None)
#     endpoint_url: str | None  (default None, for LocalStack / MinIO)
#     table_name: str           (default "documents")
#
# - AppConfig (dataclass)
#     document: DocumentConfig
#     aws: AwsConfig
#     log_level: str            (default "INFO")
#
# FUNCTIONS:
# ----------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Forget the singleton so the next get_config() reloads.
#
# USAGE:
# ------
#   from offload_store.config import get_config
#   config = get_config()
#   print(config.document.bucket_name)
#   print(config.aws.table_name)
#
# ==============================================

import os
from dataclasses import dataclass
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv

from .errors import ConfigurationError


DEFAULT_CONTENT_PATH = "Content"
DEFAULT_S3_KEY_PATH = "Attributes.S3Key"
DEFAULT_PATH_PATH = "Path"
DEFAULT_MAX_DOCUMENT_SIZE = 5 * 1024 * 1024


@dataclass(frozen=True)
class DocumentConfig:
    """Where the offloaded pieces of a document live. Immutable after construction."""
    bucket_name: str
    content_path: str = DEFAULT_CONTENT_PATH
    s3_key_path: str = DEFAULT_S3_KEY_PATH
    path_path: str = DEFAULT_PATH_PATH
    max_document_size: int = DEFAULT_MAX_DOCUMENT_SIZE

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        if not self.bucket_name:
            raise ConfigurationError("bucket_name is required")
        for name in ("content_path", "s3_key_path", "path_path"):
            if not getattr(self, name):
                raise ConfigurationError(f"{name} must be a non-empty field path")
        if self.max_document_size <= 0:
            raise ConfigurationError("max_document_size must be positive")


@dataclass
class AwsConfig:
    """AWS client configuration."""
    region: Optional[str] = None
    endpoint_url: Optional[str] = None
    table_name: str = "documents"


@dataclass
class AppConfig:
    """Main application configuration."""
    document: DocumentConfig
    aws: AwsConfig
    log_level: str = "INFO"


# Singleton instance
_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration

    Raises:
        ConfigurationError: If OFFLOAD_BUCKET is missing or a size is not an integer
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    max_size_raw = os.getenv("OFFLOAD_MAX_DOCUMENT_SIZE", str(DEFAULT_MAX_DOCUMENT_SIZE))
    try:
        max_document_size = int(max_size_raw)
    except ValueError:
        raise ConfigurationError(
            f"OFFLOAD_MAX_DOCUMENT_SIZE must be an integer, got {max_size_raw!r}"
        )

    # Build document configuration
    document_config = DocumentConfig(
        bucket_name=os.getenv("OFFLOAD_BUCKET", ""),
        content_path=os.getenv("OFFLOAD_CONTENT_PATH", DEFAULT_CONTENT_PATH),
        s3_key_path=os.getenv("OFFLOAD_S3_KEY_PATH", DEFAULT_S3_KEY_PATH),
        path_path=os.getenv("OFFLOAD_PATH_PATH", DEFAULT_PATH_PATH),
        max_document_size=max_document_size,
    )

    # Build AWS configuration
    aws_config = AwsConfig(
        region=os.getenv("AWS_REGION") or None,
        endpoint_url=os.getenv("AWS_ENDPOINT_URL") or None,
        table_name=os.getenv("OFFLOAD_TABLE", "documents"),
    )

    _config_instance = AppConfig(
        document=document_config,
        aws=aws_config,
        log_level=os.getenv("OFFLOAD_LOG_LEVEL", "INFO"),
    )

    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration."""
    global _config_instance
    _config_instance = None
