"""
===============================================================================
TARJETA CRC — domain/services.py
===============================================================================

Módulo:
    Puerto del drive (Protocol)

Responsabilidades:
    - Definir el contrato de operaciones de archivo que consume el host.
    - Mantener el contrato independiente de S3/boto3.

Colaboradores:
    - infrastructure/storage/s3_driver.py: implementación S3.
    - container.py: expone la implementación concreta.

Reglas:
    - SOLO interfaces: nada de implementación.
    - Todas las operaciones son async (I/O de red).
===============================================================================
"""

from __future__ import annotations

from typing import AsyncIterator, BinaryIO, Optional, Protocol, Union

from .entities import ContentHeaders, DriveFileStats, Visibility, WriteOptions


class ByteStream(Protocol):
    """Stream de bytes de lectura. Quien lo recibe debe consumirlo o cerrarlo."""

    def __aiter__(self) -> AsyncIterator[bytes]: ...

    async def read(self, amt: Optional[int] = None) -> bytes: ...

    async def close(self) -> None: ...


class DriverContract(Protocol):
    """Contrato de un driver de drive (S3, local, etc.)."""

    name: str

    async def get(self, location: str) -> bytes:
        """Contenido completo como bytes (el caller elige el encoding)."""
        ...

    async def get_stream(self, location: str) -> ByteStream: ...

    async def exists(self, location: str) -> bool:
        """False si el archivo no existe; nunca falla por 'not found'."""
        ...

    async def get_visibility(self, location: str) -> Visibility: ...

    async def get_stats(self, location: str) -> DriveFileStats: ...

    async def get_signed_url(
        self,
        location: str,
        headers: Optional[ContentHeaders] = None,
        *,
        expires_in: Union[int, str, None] = None,
    ) -> str: ...

    async def get_url(self, location: str) -> str:
        """URL estable; no hace I/O y no falla."""
        ...

    async def put(
        self,
        location: str,
        contents: Union[bytes, str],
        options: Optional[WriteOptions] = None,
    ) -> None: ...

    async def put_stream(
        self,
        location: str,
        contents: Union[BinaryIO, ByteStream],
        options: Optional[WriteOptions] = None,
    ) -> None: ...

    async def set_visibility(
        self, location: str, visibility: Union[Visibility, str]
    ) -> None: ...

    async def delete(self, location: str) -> None: ...

    async def copy(
        self,
        source: str,
        destination: str,
        options: Optional[WriteOptions] = None,
    ) -> None: ...

    async def move(
        self,
        source: str,
        destination: str,
        options: Optional[WriteOptions] = None,
    ) -> None:
        """copy + delete del source. No es atómico."""
        ...
