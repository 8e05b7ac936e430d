"""
===============================================================================
CRC CARD — infrastructure/storage/errors.py
===============================================================================

Componente:
  Inspección de errores de boto3/botocore

Responsabilidades:
  - Leer el status HTTP y el código de S3 de un error del SDK.
  - Decidir si una falla es "not found" (único caso que exists() absorbe).

Colaboradores:
  - infrastructure/storage/s3_driver.py
  - S3Driver._failure (status_code / provider_code de DriveError)
===============================================================================
"""

from __future__ import annotations

from typing import Optional

from botocore.exceptions import ClientError

_NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NotFound"})


def http_status_of(exc: BaseException) -> Optional[int]:
    """Status HTTP de un ClientError (ResponseMetadata.HTTPStatusCode)."""
    if not isinstance(exc, ClientError):
        return None
    status = (exc.response.get("ResponseMetadata") or {}).get("HTTPStatusCode")
    try:
        return int(status) if status is not None else None
    except (TypeError, ValueError):
        return None


def provider_code_of(exc: BaseException) -> Optional[str]:
    """Código de error de S3 (ej: AccessDenied, NoSuchKey, SlowDown)."""
    if not isinstance(exc, ClientError):
        return None
    code = (exc.response.get("Error") or {}).get("Code")
    return str(code) if code else None


def is_not_found(exc: BaseException) -> bool:
    """
    True si S3 respondió 404.

    HeadObject no trae body: el código llega como "404", por eso se mira
    primero el status HTTP.
    """
    if http_status_of(exc) == 404:
        return True
    return provider_code_of(exc) in _NOT_FOUND_CODES
