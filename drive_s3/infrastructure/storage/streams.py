"""
===============================================================================
CRC CARD — infrastructure/storage/streams.py
===============================================================================

Clases:
  ObjectStream, SyncStreamReader

Responsabilidades:
  - Exponer el Body de get_object como stream async de bytes.
  - Ejecutar cada read bloqueante de botocore en un worker thread.
  - Liberar la conexión HTTP al cerrar.
  - Adaptar un stream async a file-like síncrono para upload_fileobj
    (put_stream de un get_stream, u otro async iterable).

Colaboradores:
  - botocore.response.StreamingBody
  - infrastructure/storage/s3_driver.py (get_stream / get / put_stream)
===============================================================================
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, AsyncIterator, Optional

DEFAULT_CHUNK_SIZE = 64 * 1024


class ObjectStream:
    """
    Stream async sobre un StreamingBody.

    Uso:
      async with await driver.get_stream("a/b.txt") as stream:
          async for chunk in stream:
              ...
    """

    def __init__(self, body, *, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        self._body = body
        self._chunk_size = chunk_size
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def read(self, amt: Optional[int] = None) -> bytes:
        """Lee todo (amt=None) o hasta amt bytes. b"" => fin del stream."""
        if self._closed:
            raise ValueError("I/O operation on closed stream")
        return await asyncio.to_thread(self._body.read, amt)

    async def iter_chunks(
        self, chunk_size: Optional[int] = None
    ) -> AsyncIterator[bytes]:
        size = chunk_size or self._chunk_size
        while True:
            chunk = await self.read(size)
            if not chunk:
                break
            yield chunk

    def __aiter__(self) -> AsyncIterator[bytes]:
        return self.iter_chunks()

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await asyncio.to_thread(self._body.close)

    async def __aenter__(self) -> "ObjectStream":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()


def is_async_stream(contents: Any) -> bool:
    """True si contents es un ByteStream o un async iterable de bytes."""
    read = getattr(contents, "read", None)
    if read is not None:
        return inspect.iscoroutinefunction(read)
    return hasattr(contents, "__aiter__")


class SyncStreamReader:
    """
    File-like síncrono sobre un stream async (ByteStream / async iterable).

    upload_fileobj lee desde threads de s3transfer: cada read() agenda la
    corrutina en el event loop dueño del stream y bloquea ese thread hasta
    tener el resultado. Nunca debe leerse desde el thread del loop.

    No es seekable, así que s3transfer usa la subida sin seek. read(n) devuelve
    n bytes salvo al final: s3transfer toma una lectura corta como EOF.
    """

    def __init__(
        self,
        stream: Any,
        loop: asyncio.AbstractEventLoop,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self._stream = stream
        self._loop = loop
        self._chunk_size = chunk_size
        self._chunks: Optional[AsyncIterator[bytes]] = None
        self._buffer = bytearray()
        self._eof = False

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return False

    def read(self, amt: Optional[int] = -1) -> bytes:
        size = amt if amt is not None and amt >= 0 else None
        future = asyncio.run_coroutine_threadsafe(self._fill(size), self._loop)
        return future.result()

    async def _fill(self, size: Optional[int]) -> bytes:
        while not self._eof and (size is None or len(self._buffer) < size):
            chunk = await self._next_chunk(size)
            if chunk is None:
                self._eof = True
            else:
                self._buffer += chunk

        end = len(self._buffer) if size is None else size
        data = bytes(self._buffer[:end])
        del self._buffer[:end]
        return data

    async def _next_chunk(self, size: Optional[int]) -> Optional[bytes]:
        """Próximo bloque del stream; None => fin."""
        read = getattr(self._stream, "read", None)
        if read is not None:
            want = self._chunk_size
            if size is not None:
                want = max(size - len(self._buffer), 1)
            return (await read(want)) or None

        if self._chunks is None:
            self._chunks = self._stream.__aiter__()
        try:
            return bytes(await self._chunks.__anext__())
        except StopAsyncIteration:
            return None
