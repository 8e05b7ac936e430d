"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Tipos del contrato de drive (provider-agnostic)

Responsabilidades:
    - Visibility: enumeración cerrada public | private.
    - WriteOptions: overrides de escritura + mapa abierto de extras del proveedor.
    - ContentHeaders: overrides de headers de respuesta (URLs firmadas).
    - DriveFileStats: stats de un archivo.

Colaboradores:
    - domain/services.py (DriverContract)
    - infrastructure/storage/s3_driver.py (traducción a parámetros S3)

Reglas:
    - Inmutables (frozen dataclasses).
    - Sin dependencias de SDKs.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union


class Visibility(str, Enum):
    """Visibilidad de un archivo."""

    PUBLIC = "public"
    PRIVATE = "private"

    @classmethod
    def coerce(cls, value: Union["Visibility", str]) -> "Visibility":
        """Acepta el enum o su valor string; cualquier otra cosa es inválida."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f'Invalid visibility "{value}". Expected "public" or "private"'
            ) from None


@dataclass(frozen=True, slots=True)
class ContentHeaders:
    """
    Headers de contenido.

    En escritura describen el objeto almacenado; en URLs firmadas piden al
    storage que responda con esos headers.
    """

    content_type: Optional[str] = None
    content_disposition: Optional[str] = None
    content_encoding: Optional[str] = None
    content_language: Optional[str] = None
    cache_control: Optional[str] = None


@dataclass(frozen=True, slots=True)
class WriteOptions:
    """
    Opciones de escritura (put / put_stream / copy / move).

    Attributes:
        visibility: None => visibilidad default del driver
        content_type .. cache_control: headers del objeto almacenado
        extra: campos específicos del proveedor, pasados tal cual
               (ej: {"Metadata": {...}, "StorageClass": "STANDARD_IA"})
    """

    visibility: Optional[Visibility] = None
    content_type: Optional[str] = None
    content_disposition: Optional[str] = None
    content_encoding: Optional[str] = None
    content_language: Optional[str] = None
    cache_control: Optional[str] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.visibility is not None:
            object.__setattr__(self, "visibility", Visibility.coerce(self.visibility))
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    def with_visibility(self, visibility: Union[Visibility, str]) -> "WriteOptions":
        return replace(self, visibility=Visibility.coerce(visibility))

    @property
    def headers(self) -> ContentHeaders:
        return ContentHeaders(
            content_type=self.content_type,
            content_disposition=self.content_disposition,
            content_encoding=self.content_encoding,
            content_language=self.content_language,
            cache_control=self.cache_control,
        )


@dataclass(frozen=True, slots=True)
class DriveFileStats:
    """Stats de un archivo. Este contrato no tiene directorios: is_file es siempre True."""

    modified: datetime
    size: int
    is_file: bool = True
    etag: Optional[str] = None
