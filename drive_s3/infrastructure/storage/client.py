"""
===============================================================================
CRC CARD — infrastructure/storage/client.py
===============================================================================

Componentes:
  S3DriverConfig + build_client_kwargs() + create_s3_client()

Responsabilidades:
  - Describir la configuración inmutable del driver.
  - Derivar (sin mutar nada) los kwargs de boto3.client("s3", ...).
  - Construir el cliente boto3.

Colaboradores:
  - crosscutting/config.py (DriveSettings.to_driver_config)
  - infrastructure/storage/s3_driver.py

Decisiones de diseño:
  - Credenciales explícitas solo si hay key Y secret; si no, cadena default
    de boto3 (env, perfil, IAM role).
  - force_path_style / client_options se traducen a botocore Config.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import boto3
from botocore.config import Config

from ...domain.entities import Visibility


@dataclass(frozen=True)
class S3DriverConfig:
    """
    Configuración del driver S3-compatible.

    Nota:
      - endpoint permite MinIO, R2 u otros S3 compatibles.
      - cdn_url, si existe, gana en get_url() y se usa tal cual
        (DriveSettings ya quita la barra final).
      - client_options son kwargs extra de botocore.config.Config
        (ej: {"signature_version": "s3v4"}).
    """

    bucket: str
    region: Optional[str] = None
    endpoint: Optional[str] = None
    key: Optional[str] = None
    secret: Optional[str] = None
    session_token: Optional[str] = None
    visibility: Visibility = Visibility.PRIVATE
    cdn_url: Optional[str] = None
    force_path_style: bool = False
    client_options: Mapping[str, Any] = field(default_factory=dict)

    @property
    def has_static_credentials(self) -> bool:
        return bool(self.key and self.secret)


def build_client_kwargs(config: S3DriverConfig) -> dict[str, Any]:
    """Kwargs para boto3.client("s3", **kwargs). Función pura."""
    kwargs: dict[str, Any] = {}

    if config.region:
        kwargs["region_name"] = config.region
    if config.endpoint:
        kwargs["endpoint_url"] = config.endpoint

    if config.has_static_credentials:
        kwargs["aws_access_key_id"] = config.key
        kwargs["aws_secret_access_key"] = config.secret
        if config.session_token:
            kwargs["aws_session_token"] = config.session_token

    config_kwargs: dict[str, Any] = dict(config.client_options)
    if config.force_path_style:
        s3_opts = dict(config_kwargs.get("s3") or {})
        s3_opts["addressing_style"] = "path"
        config_kwargs["s3"] = s3_opts

    if config_kwargs:
        kwargs["config"] = Config(**config_kwargs)

    return kwargs


def create_s3_client(config: S3DriverConfig):
    """Crea el cliente boto3 (thread-safe; se comparte entre operaciones)."""
    return boto3.client("s3", **build_client_kwargs(config))
