from __future__ import annotations

import logging
from collections.abc import Iterable

from ._host import HostDirectoryHandle, HostHandle

logger = logging.getLogger(__name__)


async def walk_directories(
    root: HostDirectoryHandle, names: Iterable[str], create: bool = False
) -> HostDirectoryHandle:
    """Descend *names* one level at a time and return the last directory.

    Host errors propagate: a missing segment (with ``create=False``) or a
    segment that names a file ends the walk.
    """
    handle = root
    for name in names:
        handle = await handle.get_directory_handle(name, create=create)
    return handle


async def read_children(directory: HostDirectoryHandle) -> list[HostHandle] | None:
    """Enumerate *directory* once, or return ``None`` if the host fails.

    A ``None`` result means the caller skips this subtree; siblings are
    still traversed.
    """
    try:
        return [entry async for entry in directory.values()]
    except OSError:
        logger.debug("Skipping unreadable directory: %s", directory.name, exc_info=True)
        return None
