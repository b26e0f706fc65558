"""Host provider backed by the local disk.

All blocking calls are delegated to :func:`asyncio.to_thread`, so the
event-loop is never blocked.
"""

from __future__ import annotations

import asyncio
import mimetypes
import os
import shutil
from collections.abc import AsyncIterator
from typing import Literal

from ._typing import HostFileStat, PermissionMode, PermissionState


def _child_path(base: str, name: str) -> str:
    if not name or name in (".", "..") or "/" in name or os.sep in name:
        raise OSError(f"Invalid entry name: {name!r}")
    return os.path.join(base, name)


class LocalFileHandle:
    __slots__ = ("_path",)

    kind: Literal["file"] = "file"

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = os.fspath(path)

    @property
    def name(self) -> str:
        return os.path.basename(self._path)

    @property
    def path(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"LocalFileHandle({self._path!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LocalFileHandle):
            return NotImplemented
        return self._path == other._path

    def __hash__(self) -> int:
        return hash(("file", self._path))

    async def stat(self) -> HostFileStat:
        st = await asyncio.to_thread(os.stat, self._path)
        mime_type, _ = mimetypes.guess_type(self._path)
        return HostFileStat(
            size=st.st_size, mime_type=mime_type or "", last_modified=st.st_mtime
        )

    async def read(self) -> bytes:
        return await asyncio.to_thread(self._read)

    def _read(self) -> bytes:
        with open(self._path, "rb") as f:
            return f.read()

    async def write(self, data: bytes, append: bool = False) -> None:
        await asyncio.to_thread(self._write, data, append)

    def _write(self, data: bytes, append: bool) -> None:
        with open(self._path, "ab" if append else "wb") as f:
            f.write(data)


class LocalDirectoryHandle:
    __slots__ = ("_path",)

    kind: Literal["directory"] = "directory"

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = os.path.abspath(os.fspath(path))

    @property
    def name(self) -> str:
        return os.path.basename(self._path) or self._path

    @property
    def path(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"LocalDirectoryHandle({self._path!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LocalDirectoryHandle):
            return NotImplemented
        return self._path == other._path

    def __hash__(self) -> int:
        return hash(("directory", self._path))

    async def values(self) -> AsyncIterator[LocalFileHandle | LocalDirectoryHandle]:
        entries = await asyncio.to_thread(self._scan)
        for path, is_dir in entries:
            yield LocalDirectoryHandle(path) if is_dir else LocalFileHandle(path)

    def _scan(self) -> list[tuple[str, bool]]:
        with os.scandir(self._path) as it:
            entries = [(entry.path, entry.is_dir()) for entry in it]
        return sorted(entries)

    async def get_file_handle(self, name: str, create: bool = False) -> LocalFileHandle:
        path = _child_path(self._path, name)
        await asyncio.to_thread(self._ensure_file, path, create)
        return LocalFileHandle(path)

    @staticmethod
    def _ensure_file(path: str, create: bool) -> None:
        if os.path.isdir(path):
            raise IsADirectoryError(f"Is a directory: '{path}'")
        if os.path.isfile(path):
            return
        if not create:
            raise FileNotFoundError(f"No such file: '{path}'")
        with open(path, "xb"):
            pass

    async def get_directory_handle(
        self, name: str, create: bool = False
    ) -> LocalDirectoryHandle:
        path = _child_path(self._path, name)
        await asyncio.to_thread(self._ensure_dir, path, create)
        return LocalDirectoryHandle(path)

    @staticmethod
    def _ensure_dir(path: str, create: bool) -> None:
        if os.path.isdir(path):
            return
        if os.path.exists(path):
            raise NotADirectoryError(f"Not a directory: '{path}'")
        if not create:
            raise FileNotFoundError(f"No such directory: '{path}'")
        os.mkdir(path)

    async def remove_entry(self, name: str, recursive: bool = False) -> None:
        path = _child_path(self._path, name)
        await asyncio.to_thread(self._remove, path, recursive)

    @staticmethod
    def _remove(path: str, recursive: bool) -> None:
        if os.path.isdir(path) and not os.path.islink(path):
            if recursive:
                shutil.rmtree(path)
            else:
                os.rmdir(path)
        else:
            os.remove(path)


class LocalPermissionBroker:
    """Answers from the process's own access rights; it cannot prompt."""

    async def query(
        self, handle: LocalFileHandle | LocalDirectoryHandle, mode: PermissionMode
    ) -> PermissionState:
        flags = os.R_OK if mode == "read" else os.R_OK | os.W_OK
        if handle.kind == "directory":
            flags |= os.X_OK
        granted = await asyncio.to_thread(os.access, handle.path, flags)
        return "granted" if granted else "denied"

    async def request(
        self, handle: LocalFileHandle | LocalDirectoryHandle, mode: PermissionMode
    ) -> PermissionState:
        return await self.query(handle, mode)
