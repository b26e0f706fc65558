from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import AsyncIterator
from typing import Any, Literal

from ._host import HostFileHandle, PermissionBroker
from ._node import verify_permission
from ._typing import FileInfo, HashAlgorithm, PermissionMode, check_mode

logger = logging.getLogger(__name__)

HASH_ALGORITHMS: tuple[str, ...] = ("md5", "sha256", "sha512")
DEFAULT_CHUNK_SIZE = 64 * 1024


class FileNode:
    """A file handle whose permission has been verified."""

    __slots__ = ("_handle", "_broker", "_mode")

    kind: Literal["file"] = "file"

    def __init__(
        self, handle: HostFileHandle, broker: PermissionBroker, mode: PermissionMode
    ) -> None:
        self._handle = handle
        self._broker = broker
        self._mode = mode

    @classmethod
    async def create(
        cls,
        handle: HostFileHandle,
        broker: PermissionBroker,
        mode: PermissionMode = "read",
    ) -> FileNode | None:
        check_mode(mode)
        if not await verify_permission(broker, handle, mode):
            return None
        return cls(handle, broker, mode)

    @property
    def name(self) -> str:
        return self._handle.name

    @property
    def mode(self) -> PermissionMode:
        return self._mode

    @property
    def handle(self) -> HostFileHandle:
        return self._handle

    def __repr__(self) -> str:
        return f"FileNode(name={self.name!r}, mode={self._mode!r})"

    async def info(self) -> FileInfo:
        st = await self._handle.stat()
        return FileInfo(
            name=self.name,
            size=st["size"],
            mime_type=st["mime_type"],
            last_modified=st["last_modified"],
        )

    async def read_bytes(self) -> bytes:
        return await self._handle.read()

    async def text(self, encoding: str = "utf-8") -> str:
        """Decode the content; undecodable bytes become U+FFFD."""
        return (await self._handle.read()).decode(encoding, errors="replace")

    async def read_stream(
        self, chunk_size: int = DEFAULT_CHUNK_SIZE
    ) -> AsyncIterator[bytes]:
        """Yield the content in chunks of at most *chunk_size* bytes."""
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {chunk_size}.")
        data = await self._handle.read()
        for start in range(0, len(data), chunk_size):
            yield data[start : start + chunk_size]

    async def json(self) -> Any | None:
        """Parse the content as JSON; ``None`` if it cannot be read or parsed."""
        try:
            return json.loads(await self.text())
        except (OSError, ValueError):
            return None

    async def hash(self, algo: HashAlgorithm = "sha256") -> str:
        if algo not in HASH_ALGORITHMS:
            raise ValueError(
                f"Invalid hash algorithm: {algo!r}. Expected one of {HASH_ALGORITHMS}."
            )
        return hashlib.new(algo, await self._handle.read()).hexdigest()

    async def write(self, data: str | bytes) -> bool:
        """Replace the content with *data*."""
        return await self._write(data, append=False)

    async def append(self, data: str | bytes) -> bool:
        return await self._write(data, append=True)

    async def _write(self, data: str | bytes, append: bool) -> bool:
        if isinstance(data, str):
            data = data.encode("utf-8")
        try:
            await self._handle.write(data, append=append)
        except OSError:
            logger.debug("Write to %s failed", self.name, exc_info=True)
            return False
        return True

    def write_stream(self, *, keep_existing: bool = False) -> FileWriter:
        """Return a writer whose chunks are committed together on close.

        The content is replaced unless *keep_existing* is true, in which
        case the chunks are appended to it.
        """
        return FileWriter(self._handle, keep_existing)


class FileWriter:
    """Buffers written chunks and commits them to the host on :meth:`close`.

    Leaving an ``async with`` block by an exception discards the chunks.
    Host faults raised by the commit propagate.
    """

    __slots__ = ("_handle", "_append", "_chunks", "_closed")

    def __init__(self, handle: HostFileHandle, append: bool) -> None:
        self._handle = handle
        self._append = append
        self._chunks: list[bytes] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _assert_open(self) -> None:
        if self._closed:
            raise ValueError("I/O operation on closed writer.")

    async def write(self, data: str | bytes) -> int:
        self._assert_open()
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._chunks.append(bytes(data))
        return len(data)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        data = b"".join(self._chunks)
        self._chunks.clear()
        await self._handle.write(data, append=self._append)

    async def abort(self) -> None:
        self._closed = True
        self._chunks.clear()

    async def __aenter__(self) -> FileWriter:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # type: ignore[no-untyped-def]
        if exc_type is None:
            await self.close()
        else:
            await self.abort()
