from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Union

from ._host import HostHandle, PermissionBroker
from ._typing import PermissionMode

if TYPE_CHECKING:
    from ._directory import DirectoryNode
    from ._file import FileNode

logger = logging.getLogger(__name__)


async def verify_permission(
    broker: PermissionBroker, handle: HostHandle, mode: PermissionMode
) -> bool:
    """Query the grant for *handle*, then ask for it interactively if needed.

    A broker fault counts as a denial.
    """
    try:
        if await broker.query(handle, mode) == "granted":
            return True
        if await broker.request(handle, mode) == "granted":
            return True
    except OSError:
        logger.debug("Permission check failed for %s", handle.name, exc_info=True)
        return False
    logger.debug("Permission %r denied for %s", mode, handle.name)
    return False


Node = Union["FileNode", "DirectoryNode"]
