"""Entry points that turn host handles into verified nodes.

Pickers are async callables supplied by the embedding platform: a file
picker receives ``multiple`` and returns the chosen file handles, a
directory picker returns one directory handle. A picker signals
cancellation by raising :class:`OSError` (or returning no handles).
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence

from ._directory import DirectoryNode
from ._file import FileNode
from ._file_list import FileNodeList
from ._host import HostDirectoryHandle, HostFileHandle, PermissionBroker
from ._store import HandleStore
from ._typing import PermissionMode, check_mode

logger = logging.getLogger(__name__)

FilePicker = Callable[[bool], Awaitable[Sequence[HostFileHandle]]]
DirectoryPicker = Callable[[], Awaitable[HostDirectoryHandle]]


def _persistent(id: str | None, store: HandleStore | None) -> bool:
    return id is not None and store is not None


async def _pick_file_handles(
    picker: FilePicker,
    multiple: bool,
    id: str | None,
    store: HandleStore | None,
) -> list[HostFileHandle]:
    if _persistent(id, store):
        stored = await store.get_file(id)  # type: ignore[union-attr, arg-type]
        if stored:
            return stored
    handles = list(await picker(multiple))
    if not handles:
        raise FileNotFoundError("No file was picked.")
    if _persistent(id, store):
        await store.set_file(id, handles)  # type: ignore[union-attr, arg-type]
    return handles


async def pick_file(
    picker: FilePicker,
    broker: PermissionBroker,
    *,
    mode: PermissionMode = "read",
    id: str | None = None,
    store: HandleStore | None = None,
) -> FileNode | None:
    check_mode(mode)
    try:
        handles = await _pick_file_handles(picker, False, id, store)
    except OSError:
        logger.debug("File picking failed", exc_info=True)
        return None
    return await FileNode.create(handles[0], broker, mode)


async def pick_files(
    picker: FilePicker,
    broker: PermissionBroker,
    *,
    mode: PermissionMode = "read",
    id: str | None = None,
    store: HandleStore | None = None,
) -> FileNodeList | None:
    check_mode(mode)
    try:
        handles = await _pick_file_handles(picker, True, id, store)
    except OSError:
        logger.debug("File picking failed", exc_info=True)
        return None
    return await FileNodeList.create(handles, broker, mode)


async def pick_directory(
    picker: DirectoryPicker,
    broker: PermissionBroker,
    *,
    mode: PermissionMode = "read",
    id: str | None = None,
    store: HandleStore | None = None,
) -> DirectoryNode | None:
    check_mode(mode)
    try:
        handle = None
        if _persistent(id, store):
            handle = await store.get_directory(id)  # type: ignore[union-attr, arg-type]
        if handle is None:
            handle = await picker()
            if _persistent(id, store):
                await store.set_directory(id, handle)  # type: ignore[union-attr, arg-type]
    except OSError:
        logger.debug("Directory picking failed", exc_info=True)
        return None
    return await DirectoryNode.create(handle, broker, mode)


async def mount_file(
    handle: HostFileHandle, broker: PermissionBroker, mode: PermissionMode = "read"
) -> FileNode | None:
    return await FileNode.create(handle, broker, mode)


async def mount_directory(
    handle: HostDirectoryHandle,
    broker: PermissionBroker,
    mode: PermissionMode = "read",
) -> DirectoryNode | None:
    return await DirectoryNode.create(handle, broker, mode)


async def unmount_file(id: str, store: HandleStore) -> None:
    """Forget the file handles persisted under *id*."""
    await store.del_file(id)


async def unmount_directory(id: str, store: HandleStore) -> None:
    await store.del_directory(id)
