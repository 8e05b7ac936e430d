"""
===============================================================================
CRC CARD — infrastructure/storage/s3_driver.py
===============================================================================

Clase:
  S3Driver (Adapter / Facade)

Responsabilidades:
  - Implementar DriverContract contra S3-compatible (AWS S3 / MinIO / R2).
  - Encapsular boto3 (NO filtrar ClientError: todo sale como DriveError).
  - Traducir WriteOptions -> parámetros de PutObject/CopyObject y
    ContentHeaders -> parámetros Response* de GetObject (URLs firmadas).
  - Resolver visibilidad via ACL (grant READ al grupo AllUsers).
  - Construir URLs públicas (CDN / virtual-hosted / path-style).

Colaboradores:
  - domain.services.DriverContract (port)
  - crosscutting.exceptions (errores tipados)
  - crosscutting.metrics (latencia / conteo por llamada)
  - infrastructure.storage.client (config + cliente boto3)
  - infrastructure.storage.streams (ObjectStream)

Decisiones de diseño:
  - boto3 es bloqueante: cada llamada corre en asyncio.to_thread.
  - Sin retries propios: la política de reintentos/timeouts es del cliente.
  - delete() de una location inexistente no falla (DeleteObject es idempotente).
  - copy() re-aplica la visibilidad del source: S3 no copia ACLs.
  - move() = copy + delete; no es atómico y no hace rollback del destino.
===============================================================================
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, BinaryIO, Optional, Union

from ...crosscutting.exceptions import (
    CannotCopyFileError,
    CannotDeleteFileError,
    CannotGetMetaDataError,
    CannotMoveFileError,
    CannotReadFileError,
    CannotSetVisibilityError,
    CannotWriteFileError,
    DriveConfigurationError,
    DriveError,
    innermost_cause,
)
from ...crosscutting.logger import logger as default_logger
from ...crosscutting.metrics import observe_request
from ...domain.entities import (
    ContentHeaders,
    DriveFileStats,
    Visibility,
    WriteOptions,
)
from ...domain.services import ByteStream, DriverContract
from .client import S3DriverConfig, create_s3_client
from .errors import http_status_of, is_not_found, provider_code_of
from .streams import ObjectStream, SyncStreamReader, is_async_stream

# URI del grant aplicable al público
PUBLIC_GRANT_URI = "http://acs.amazonaws.com/groups/global/AllUsers"

# Default del presigner de S3 (15 minutos)
DEFAULT_SIGNED_URL_EXPIRY = 900

_ACL_BY_VISIBILITY = {
    Visibility.PUBLIC: "public-read",
    Visibility.PRIVATE: "private",
}

_WRITE_HEADER_PARAMS = (
    ("content_type", "ContentType"),
    ("content_disposition", "ContentDisposition"),
    ("content_encoding", "ContentEncoding"),
    ("content_language", "ContentLanguage"),
    ("cache_control", "CacheControl"),
)

_RESPONSE_HEADER_PARAMS = (
    ("content_type", "ResponseContentType"),
    ("content_disposition", "ResponseContentDisposition"),
    ("content_encoding", "ResponseContentEncoding"),
    ("content_language", "ResponseContentLanguage"),
    ("cache_control", "ResponseCacheControl"),
)

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([a-z]*)\s*$", re.IGNORECASE)
_DURATION_UNITS = {
    "": 1,
    "s": 1,
    "sec": 1,
    "secs": 1,
    "second": 1,
    "seconds": 1,
    "m": 60,
    "min": 60,
    "mins": 60,
    "minute": 60,
    "minutes": 60,
    "h": 3600,
    "hr": 3600,
    "hrs": 3600,
    "hour": 3600,
    "hours": 3600,
    "d": 86400,
    "day": 86400,
    "days": 86400,
}


def parse_expires_in(value: Union[int, str, None]) -> int:
    """
    Normaliza la expiración de una URL firmada a segundos.

    Acepta int (segundos) o strings tipo "30s", "15m", "2h", "1d", "3600".
    """
    if value is None:
        return DEFAULT_SIGNED_URL_EXPIRY
    if isinstance(value, bool):
        raise ValueError(f"Invalid expiry: {value!r}")
    if isinstance(value, (int, float)):
        seconds = int(value)
    else:
        match = _DURATION_RE.match(str(value))
        unit = match.group(2).lower() if match else None
        if match is None or unit not in _DURATION_UNITS:
            raise ValueError(f"Invalid expiry: {value!r}")
        seconds = int(match.group(1)) * _DURATION_UNITS[unit]

    if seconds <= 0:
        raise ValueError(f"Expiry must be positive, got {value!r}")
    return seconds


class S3Driver(DriverContract):
    """
    Driver S3 para el drive.

    Implementa:
      - get / get_stream / exists / get_visibility / get_stats
      - get_signed_url / get_url
      - put / put_stream / set_visibility / delete / copy / move
    """

    name = "s3"

    def __init__(
        self,
        config: S3DriverConfig,
        logger: Optional[logging.Logger] = None,
        *,
        client=None,
    ) -> None:
        self._config = config
        self._bucket = (config.bucket or "").strip()
        self._logger = logger or default_logger

        if not self._bucket:
            raise DriveConfigurationError("S3 bucket es requerido.")

        # Cliente: inyectable para tests (mocks).
        self.adapter = client if client is not None else create_s3_client(config)

    @property
    def config(self) -> S3DriverConfig:
        return self._config

    # =========================================================================
    # Lectura
    # =========================================================================

    async def get(self, location: str) -> bytes:
        """
        Contenido completo como bytes.

        Drena el stream entero antes de volver; para archivos grandes usar
        get_stream().
        """
        stream = await self.get_stream(location)
        try:
            return await stream.read()
        except Exception as exc:
            raise self._failure(CannotReadFileError(location, exc), "get") from exc
        finally:
            await stream.close()

    async def get_stream(self, location: str) -> ObjectStream:
        try:
            response = await self._send("get_object", Key=location, Bucket=self._bucket)
        except Exception as exc:
            raise self._failure(
                CannotReadFileError(location, exc), "get_stream"
            ) from exc

        return ObjectStream(response["Body"])

    async def exists(self, location: str) -> bool:
        try:
            await self._send("head_object", Key=location, Bucket=self._bucket)
            return True
        except Exception as exc:
            if is_not_found(exc):
                return False
            raise self._failure(
                CannotGetMetaDataError(location, "exists", exc), "exists"
            ) from exc

    async def get_visibility(self, location: str) -> Visibility:
        try:
            acl = await self._send("get_object_acl", Key=location, Bucket=self._bucket)
        except Exception as exc:
            raise self._failure(
                CannotGetMetaDataError(location, "visibility", exc), "get_visibility"
            ) from exc

        for grant in acl.get("Grants") or []:
            grantee = grant.get("Grantee") or {}
            if grantee.get("URI") == PUBLIC_GRANT_URI and grant.get("Permission") == "READ":
                return Visibility.PUBLIC
        return Visibility.PRIVATE

    async def get_stats(self, location: str) -> DriveFileStats:
        try:
            stats = await self._send("head_object", Key=location, Bucket=self._bucket)
        except Exception as exc:
            raise self._failure(
                CannotGetMetaDataError(location, "stats", exc), "get_stats"
            ) from exc

        return DriveFileStats(
            modified=stats["LastModified"],
            size=stats["ContentLength"],
            is_file=True,
            etag=stats.get("ETag"),
        )

    async def get_signed_url(
        self,
        location: str,
        headers: Optional[ContentHeaders] = None,
        *,
        expires_in: Union[int, str, None] = None,
    ) -> str:
        try:
            params = {
                "Key": location,
                "Bucket": self._bucket,
                **self._transform_content_headers(headers),
            }
            url = await self._send(
                "generate_presigned_url",
                ClientMethod="get_object",
                Params=params,
                ExpiresIn=parse_expires_in(expires_in),
            )
            return str(url)
        except Exception as exc:
            raise self._failure(
                CannotGetMetaDataError(location, "signedUrl", exc), "get_signed_url"
            ) from exc

    async def get_url(self, location: str) -> str:
        """
        URL estable del archivo. Sin I/O: el endpoint ya está resuelto en el
        cliente.
        """
        if self._config.cdn_url:
            return f"{self._config.cdn_url}/{location}"

        href = (self.adapter.meta.endpoint_url or "").rstrip("/")
        if href.startswith("https://s3.amazonaws"):
            return f"https://{self._bucket}.s3.amazonaws.com/{location}"

        return f"{href}/{self._bucket}/{location}"

    # =========================================================================
    # Escritura
    # =========================================================================

    async def put(
        self,
        location: str,
        contents: Union[bytes, str],
        options: Optional[WriteOptions] = None,
    ) -> None:
        body = contents.encode("utf-8") if isinstance(contents, str) else contents
        try:
            await self._send(
                "put_object",
                Key=location,
                Body=body,
                Bucket=self._bucket,
                **self._transform_write_options(options),
            )
        except Exception as exc:
            raise self._failure(CannotWriteFileError(location, exc), "put") from exc

    async def put_stream(
        self,
        location: str,
        contents: Union[BinaryIO, ByteStream],
        options: Optional[WriteOptions] = None,
    ) -> None:
        """
        Sube un file-like o un stream async sin cargarlo en memoria.

        upload_fileobj decide si hace multipart; ExtraArgs solo acepta los
        campos de S3Transfer.ALLOWED_UPLOAD_ARGS. Un stream async (ej: el
        ObjectStream de get_stream) se lee desde los threads de s3transfer via
        SyncStreamReader; el caller sigue siendo dueño del stream y lo cierra.
        """
        fileobj = contents
        if is_async_stream(contents):
            fileobj = SyncStreamReader(contents, asyncio.get_running_loop())

        try:
            await self._send(
                "upload_fileobj",
                Fileobj=fileobj,
                Bucket=self._bucket,
                Key=location,
                ExtraArgs=self._transform_write_options(options),
            )
        except Exception as exc:
            raise self._failure(
                CannotWriteFileError(location, exc), "put_stream"
            ) from exc

    async def set_visibility(
        self, location: str, visibility: Union[Visibility, str]
    ) -> None:
        try:
            acl = self._transform_write_options(WriteOptions(visibility=visibility))
            await self._send(
                "put_object_acl",
                Key=location,
                Bucket=self._bucket,
                ACL=acl["ACL"],
            )
        except Exception as exc:
            raise self._failure(
                CannotSetVisibilityError(location, exc), "set_visibility"
            ) from exc

    async def delete(self, location: str) -> None:
        try:
            await self._send("delete_object", Key=location, Bucket=self._bucket)
        except Exception as exc:
            raise self._failure(CannotDeleteFileError(location, exc), "delete") from exc

    async def copy(
        self,
        source: str,
        destination: str,
        options: Optional[WriteOptions] = None,
    ) -> None:
        options = options or WriteOptions()

        try:
            # S3 no conserva el ACL original en CopyObject:
            # https://docs.aws.amazon.com/AmazonS3/latest/API/API_CopyObject.html
            if options.visibility is None:
                options = options.with_visibility(await self.get_visibility(source))

            await self._send(
                "copy_object",
                Key=destination,
                CopySource={"Bucket": self._bucket, "Key": source},
                Bucket=self._bucket,
                **self._transform_write_options(options),
            )
        except Exception as exc:
            cause = innermost_cause(exc)
            raise self._failure(
                CannotCopyFileError(source, destination, cause), "copy"
            ) from cause

    async def move(
        self,
        source: str,
        destination: str,
        options: Optional[WriteOptions] = None,
    ) -> None:
        try:
            await self.copy(source, destination, options)
            await self.delete(source)
        except Exception as exc:
            cause = innermost_cause(exc)
            raise self._failure(
                CannotMoveFileError(source, destination, cause), "move"
            ) from cause

    # =========================================================================
    # Helpers privados
    # =========================================================================

    async def _send(self, method: str, **params: Any) -> Any:
        """Ejecuta un método del cliente boto3 fuera del event loop."""
        call = getattr(self.adapter, method)
        with observe_request(method):
            return await asyncio.to_thread(call, **params)

    def _transform_write_options(
        self, options: Optional[WriteOptions] = None
    ) -> dict[str, Any]:
        """WriteOptions -> parámetros S3. Los extras van primero: los campos tipados ganan."""
        options = options or WriteOptions()
        adapter_options: dict[str, Any] = dict(options.extra)

        headers = options.headers
        for attr, param in _WRITE_HEADER_PARAMS:
            value = getattr(headers, attr)
            if value:
                adapter_options[param] = value

        visibility = options.visibility or self._config.visibility
        adapter_options["ACL"] = _ACL_BY_VISIBILITY[Visibility.coerce(visibility)]

        self._logger.debug("drive-s3 write options", extra={"options": adapter_options})
        return adapter_options

    def _transform_content_headers(
        self, headers: Optional[ContentHeaders] = None
    ) -> dict[str, str]:
        """ContentHeaders -> parámetros Response* de GetObject."""
        content_headers: dict[str, str] = {}
        if headers is None:
            return content_headers

        for attr, param in _RESPONSE_HEADER_PARAMS:
            value = getattr(headers, attr)
            if value:
                content_headers[param] = value

        self._logger.debug(
            "drive-s3 content headers", extra={"headers": content_headers}
        )
        return content_headers

    def _failure(self, error: DriveError, operation: str) -> DriveError:
        cause = error.original_error
        if cause is not None:
            error.with_cause_details(http_status_of(cause), provider_code_of(cause))

        self._logger.warning(
            "drive-s3 operation failed",
            extra={
                "operation": operation,
                "error_code": error.error_code,
                "error_id": error.error_id,
                "provider_code": error.provider_code,
                "status_code": error.status_code,
                "location": getattr(error, "location", None)
                or getattr(error, "source", None),
            },
        )
        return error
