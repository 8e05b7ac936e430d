"""
Name: Drive Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Derive the immutable S3DriverConfig consumed by the driver

Collaborators:
  - container.py: builds the driver from settings
  - crosscutting/logger.py: reads log_level / log_json

Constraints:
  - No business logic, pure configuration
  - Settings are read once; the driver never mutates them

Notes:
  - Env names mirror the deployment placeholders
    (S3_KEY, S3_SECRET, S3_BUCKET, S3_REGION, S3_ENDPOINT)
  - Singleton via lru_cache
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from ..infrastructure.storage.client import S3DriverConfig


class DriveSettings(BaseSettings):
    """
    Drive settings loaded from environment variables.

    Attributes:
        s3_key: Access key ID (optional, falls back to the boto3 chain)
        s3_secret: Secret access key (optional)
        s3_session_token: Session token for temporary credentials (optional)
        s3_bucket: Bucket name
        s3_region: Region name
        s3_endpoint: Custom endpoint (MinIO, R2, localstack...)
        s3_cdn_url: Base URL used by get_url when files are served by a CDN
        s3_force_path_style: Use path-style addressing (default: False)
        drive_visibility: Default visibility for writes (public|private)
        log_level: Logger level (default: INFO)
        log_json: Emit JSON logs (default: True)
    """

    # Credentials
    s3_key: str = ""
    s3_secret: str = ""
    s3_session_token: str = ""

    # Bucket / endpoint
    s3_bucket: str = ""
    s3_region: str = ""
    s3_endpoint: str = ""
    s3_cdn_url: str = ""
    s3_force_path_style: bool = False

    # Drive defaults
    drive_visibility: str = "private"

    # Observability
    log_level: str = "INFO"
    log_json: bool = True

    @field_validator("drive_visibility")
    @classmethod
    def drive_visibility_valid(cls, v: str) -> str:
        value = (v or "private").strip().lower()
        if value not in {"public", "private"}:
            raise ValueError("drive_visibility must be public or private")
        return value

    @field_validator("s3_cdn_url", "s3_endpoint")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return (v or "").strip().rstrip("/")

    def to_driver_config(self) -> "S3DriverConfig":
        """
        Derive the immutable driver config.

        Empty strings mean "not configured" and become None.
        """
        from ..domain.entities import Visibility
        from ..infrastructure.storage.client import S3DriverConfig

        return S3DriverConfig(
            bucket=self.s3_bucket.strip(),
            region=self.s3_region.strip() or None,
            endpoint=self.s3_endpoint or None,
            key=self.s3_key.strip() or None,
            secret=self.s3_secret.strip() or None,
            session_token=self.s3_session_token.strip() or None,
            visibility=Visibility.coerce(self.drive_visibility),
            cdn_url=self.s3_cdn_url or None,
            force_path_style=self.s3_force_path_style,
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> DriveSettings:
    """
    Get singleton DriveSettings instance.

    Raises:
        ValidationError: If env vars are invalid
    """
    return DriveSettings()
