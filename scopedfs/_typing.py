from __future__ import annotations

from typing import TYPE_CHECKING, Literal, NamedTuple, TypedDict

if TYPE_CHECKING:
    from ._host import HostDirectoryHandle, HostHandle

EntryKind = Literal["file", "directory"]
PermissionMode = Literal["read", "readwrite"]
PermissionState = Literal["granted", "denied", "prompt"]
FilterKind = Literal["none", "file", "dir", "all"]
HashAlgorithm = Literal["md5", "sha256", "sha512"]

PERMISSION_MODES: tuple[str, ...] = ("read", "readwrite")


class ResolvedPath(NamedTuple):
    directories: tuple[str, ...]
    name: str


class TreeNode(TypedDict):
    handle: HostHandle
    children: list[TreeNode] | None


class TreeResult(TypedDict):
    handle: HostDirectoryHandle
    children: list[TreeNode]


class FileInfo(TypedDict):
    name: str
    size: int
    mime_type: str
    last_modified: float


class HostFileStat(TypedDict):
    size: int
    mime_type: str
    last_modified: float


def check_mode(mode: str) -> None:
    if mode not in PERMISSION_MODES:
        raise ValueError(
            f"Invalid permission mode: {mode!r}. Expected 'read' or 'readwrite'."
        )
