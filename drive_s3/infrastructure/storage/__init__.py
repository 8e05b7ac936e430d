"""Adapters de infraestructura: Storage (S3)."""

from .client import S3DriverConfig, build_client_kwargs, create_s3_client
from .errors import http_status_of, is_not_found, provider_code_of
from .s3_driver import PUBLIC_GRANT_URI, S3Driver, parse_expires_in
from .streams import ObjectStream, SyncStreamReader

__all__ = [
    "ObjectStream",
    "PUBLIC_GRANT_URI",
    "S3Driver",
    "S3DriverConfig",
    "SyncStreamReader",
    "build_client_kwargs",
    "create_s3_client",
    "http_status_of",
    "is_not_found",
    "parse_expires_in",
    "provider_code_of",
]
