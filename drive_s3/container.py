"""
===============================================================================
TARJETA CRC — drive_s3/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer el driver S3 a partir de DriveSettings.
  - Mantener el singleton con lru_cache (el cliente boto3 es pesado y
    thread-safe).
  - Exponer factories para el host (registro del driver "s3").

Colaboradores:
  - drive_s3.crosscutting.config.get_settings
  - drive_s3.domain.services.DriverContract (puerto)
  - drive_s3.infrastructure.storage.S3Driver (implementación)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - No depende de ningún framework web (solo expone factories).
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .crosscutting.config import get_settings
from .crosscutting.logger import logger
from .domain.services import DriverContract
from .infrastructure.storage import S3Driver, S3DriverConfig


@lru_cache(maxsize=1)
def get_drive_config() -> S3DriverConfig:
    """Config inmutable derivada de las settings (una sola vez)."""
    return get_settings().to_driver_config()


@lru_cache(maxsize=1)
def get_s3_driver() -> DriverContract:
    """Devuelve el driver S3 (singleton)."""
    config = get_drive_config()
    logger.info(
        "drive-s3 driver initialized",
        extra={
            "bucket": config.bucket,
            "region": config.region,
            "endpoint": config.endpoint,
            "cdn_url": config.cdn_url,
            "visibility": config.visibility.value,
        },
    )
    return S3Driver(config, logger)


def reset_container() -> None:
    """Limpia los singletons (tests / recarga de settings)."""
    get_s3_driver.cache_clear()
    get_drive_config.cache_clear()
    get_settings.cache_clear()
