"""Contracts consumed from the host platform.

A host exposes entries (files and directories) as handles, and a
:class:`PermissionBroker` that decides whether a handle may be used in a
given :data:`~scopedfs._typing.PermissionMode`.

Every failure (missing entry, name collision, denied access, quota, I/O)
must surface as an :class:`OSError` subclass.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Literal, Protocol, Union, runtime_checkable

from ._typing import HostFileStat, PermissionMode, PermissionState


@runtime_checkable
class HostFileHandle(Protocol):
    @property
    def name(self) -> str: ...

    @property
    def kind(self) -> Literal["file"]: ...

    async def stat(self) -> HostFileStat: ...

    async def read(self) -> bytes: ...

    async def write(self, data: bytes, append: bool = False) -> None: ...


@runtime_checkable
class HostDirectoryHandle(Protocol):
    @property
    def name(self) -> str: ...

    @property
    def kind(self) -> Literal["directory"]: ...

    def values(self) -> AsyncIterator[HostHandle]:
        """Yield the direct children, in host order. Re-queried on every call."""
        ...

    async def get_file_handle(
        self, name: str, create: bool = False
    ) -> HostFileHandle: ...

    async def get_directory_handle(
        self, name: str, create: bool = False
    ) -> HostDirectoryHandle: ...

    async def remove_entry(self, name: str, recursive: bool = False) -> None: ...


HostHandle = Union[HostFileHandle, HostDirectoryHandle]


class PermissionBroker(Protocol):
    async def query(self, handle: HostHandle, mode: PermissionMode) -> PermissionState:
        """Report the current grant without user interaction."""
        ...

    async def request(
        self, handle: HostHandle, mode: PermissionMode
    ) -> PermissionState:
        """Ask for a grant; may prompt the user."""
        ...
