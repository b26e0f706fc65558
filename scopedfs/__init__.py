from typing import TYPE_CHECKING

from ._directory import DirectoryNode
from ._exceptions import SFSPathPolicyError, SFSQuotaExceededError
from ._file import FileNode, FileWriter
from ._file_list import FileNodeList
from ._host import HostDirectoryHandle, HostFileHandle, HostHandle, PermissionBroker
from ._memory import MemoryDirectoryHandle, MemoryFileHandle, MemoryHost
from ._mount import (
    mount_directory,
    mount_file,
    pick_directory,
    pick_file,
    pick_files,
    unmount_directory,
    unmount_file,
)
from ._node import Node, verify_permission
from ._store import HandleStore
from ._typing import (
    EntryKind,
    FileInfo,
    FilterKind,
    PermissionMode,
    PermissionState,
    ResolvedPath,
    TreeNode,
    TreeResult,
)

if TYPE_CHECKING:
    from ._local import LocalDirectoryHandle, LocalFileHandle, LocalPermissionBroker

_LOCAL_NAMES = ("LocalDirectoryHandle", "LocalFileHandle", "LocalPermissionBroker")


def __getattr__(name: str):  # type: ignore[no-untyped-def]
    if name in _LOCAL_NAMES:
        from . import _local

        for local_name in _LOCAL_NAMES:
            globals()[local_name] = getattr(_local, local_name)
        return globals()[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "DirectoryNode",
    "FileNode",
    "FileWriter",
    "FileNodeList",
    "Node",
    "verify_permission",
    "HandleStore",
    "HostHandle",
    "HostFileHandle",
    "HostDirectoryHandle",
    "PermissionBroker",
    "MemoryHost",
    "MemoryFileHandle",
    "MemoryDirectoryHandle",
    "LocalDirectoryHandle",
    "LocalFileHandle",
    "LocalPermissionBroker",
    "mount_file",
    "mount_directory",
    "pick_file",
    "pick_files",
    "pick_directory",
    "unmount_file",
    "unmount_directory",
    "SFSPathPolicyError",
    "SFSQuotaExceededError",
    "EntryKind",
    "FileInfo",
    "FilterKind",
    "PermissionMode",
    "PermissionState",
    "ResolvedPath",
    "TreeNode",
    "TreeResult",
]
__version__ = "0.1.0"
