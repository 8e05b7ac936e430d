"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    API pública del dominio del drive (tipos + puerto)

Reglas:
    - Solo re-exporta símbolos; sin side effects.
===============================================================================
"""

from .entities import ContentHeaders, DriveFileStats, Visibility, WriteOptions
from .services import ByteStream, DriverContract

__all__ = [
    "ByteStream",
    "ContentHeaders",
    "DriveFileStats",
    "DriverContract",
    "Visibility",
    "WriteOptions",
]
