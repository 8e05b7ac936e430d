# drive_s3/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Excepciones tipadas del drive (una por clase de operación)
===============================================================================

Objetivo
--------
Que quien usa el drive pueda loguear o ramificar por tipo de falla sin
inspeccionar la forma de los errores de boto3/botocore:
- error_code estable
- error_id para correlación con logs
- original_error con la causa del SDK (también en __cause__)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  DriveError + subclases

Responsabilidades:
  - Estandarizar las fallas de lectura/escritura/borrado/copia/movimiento,
    metadata y visibilidad
  - Exponer la location (o source/destination) involucrada
  - Transportar status HTTP y código del proveedor de la causa (si existen)

Colaboradores:
  - infrastructure/storage/s3_driver.py (wrapping de errores del SDK)
===============================================================================
"""

from __future__ import annotations

from typing import Optional
from uuid import uuid4


class DriveError(Exception):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      DriveError

    Responsabilidades:
      - Base de las fallas del drive
      - Proveer error_code + error_id + message + original_error

    Colaboradores:
      - S3Driver
    ----------------------------------------------------------------------------
    """

    error_code: str = "E_DRIVE_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: BaseException | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        # R: Los completa el driver desde la causa del SDK (403, 404, SlowDown...).
        self.status_code: Optional[int] = None
        self.provider_code: Optional[str] = None
        super().__init__(message)

    def with_cause_details(
        self, status_code: Optional[int], provider_code: Optional[str]
    ) -> "DriveError":
        """Adjunta status HTTP y código del proveedor leídos de la causa."""
        self.status_code = status_code
        self.provider_code = provider_code
        return self


class DriveConfigurationError(DriveError):
    """Configuración inválida o incompleta del driver."""

    error_code: str = "E_INVALID_CONFIG"


class CannotReadFileError(DriveError):
    """No se pudo leer el archivo (get / get_stream)."""

    error_code: str = "E_CANNOT_READ_FILE"

    def __init__(self, location: str, original_error: BaseException | None = None):
        super().__init__(
            f'Cannot read file from location "{location}"',
            original_error=original_error,
        )
        self.location = location


class CannotWriteFileError(DriveError):
    """No se pudo escribir el archivo (put / put_stream)."""

    error_code: str = "E_CANNOT_WRITE_FILE"

    def __init__(self, location: str, original_error: BaseException | None = None):
        super().__init__(
            f'Cannot write file at location "{location}"',
            original_error=original_error,
        )
        self.location = location


class CannotDeleteFileError(DriveError):
    error_code: str = "E_CANNOT_DELETE_FILE"

    def __init__(self, location: str, original_error: BaseException | None = None):
        super().__init__(
            f'Cannot delete file at location "{location}"',
            original_error=original_error,
        )
        self.location = location


class CannotCopyFileError(DriveError):
    error_code: str = "E_CANNOT_COPY_FILE"

    def __init__(
        self,
        source: str,
        destination: str,
        original_error: BaseException | None = None,
    ):
        super().__init__(
            f'Cannot copy file from "{source}" to "{destination}"',
            original_error=original_error,
        )
        self.source = source
        self.destination = destination


class CannotMoveFileError(DriveError):
    error_code: str = "E_CANNOT_MOVE_FILE"

    def __init__(
        self,
        source: str,
        destination: str,
        original_error: BaseException | None = None,
    ):
        super().__init__(
            f'Cannot move file from "{source}" to "{destination}"',
            original_error=original_error,
        )
        self.source = source
        self.destination = destination


class CannotGetMetaDataError(DriveError):
    """
    Falla de metadata.

    `operation` identifica qué se pidió: exists | stats | visibility | signedUrl.
    """

    error_code: str = "E_CANNOT_GET_METADATA"

    def __init__(
        self,
        location: str,
        operation: str,
        original_error: BaseException | None = None,
    ):
        super().__init__(
            f'Unable to retrieve the "{operation}" for file at location "{location}"',
            original_error=original_error,
        )
        self.location = location
        self.operation = operation


class CannotSetVisibilityError(DriveError):
    error_code: str = "E_CANNOT_SET_VISIBILITY"

    def __init__(self, location: str, original_error: BaseException | None = None):
        super().__init__(
            f'Unable to set visibility for file at location "{location}"',
            original_error=original_error,
        )
        self.location = location


def innermost_cause(error: BaseException) -> BaseException:
    """
    Devuelve la causa del SDK detrás de un DriveError (o el error mismo).

    copy/move envuelven errores que ya pueden venir envueltos (ej: la
    lectura de visibilidad previa a la copia); se conserva el detalle original.
    """
    if isinstance(error, DriveError) and error.original_error is not None:
        return error.original_error
    return error
