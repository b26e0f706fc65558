from __future__ import annotations

import logging
from typing import Literal

from ._exceptions import SFSPathPolicyError
from ._file import FileNode
from ._glob import glob_files
from ._host import HostDirectoryHandle, PermissionBroker
from ._node import verify_permission
from ._path import resolve_directory_path, resolve_file_path
from ._tree import build_tree, check_depth, flatten_tree, render_tree, to_filter_kind
from ._typing import PermissionMode, TreeNode, TreeResult, check_mode
from ._walk import walk_directories

logger = logging.getLogger(__name__)


class DirectoryNode:
    """A directory handle whose permission has been verified.

    Paths given to the lookup methods are relative to this directory; a
    leading ``/`` refers to this directory too, and ``..`` stops at it.
    Every operation returns an absent result (``None``, ``False`` or an
    empty list) instead of raising when the host fails.
    """

    __slots__ = ("_handle", "_broker", "_mode")

    kind: Literal["directory"] = "directory"

    def __init__(
        self,
        handle: HostDirectoryHandle,
        broker: PermissionBroker,
        mode: PermissionMode,
    ) -> None:
        self._handle = handle
        self._broker = broker
        self._mode = mode

    @classmethod
    async def create(
        cls,
        handle: HostDirectoryHandle,
        broker: PermissionBroker,
        mode: PermissionMode = "read",
    ) -> DirectoryNode | None:
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
    def handle(self) -> HostDirectoryHandle:
        return self._handle

    def __repr__(self) -> str:
        return f"DirectoryNode(name={self.name!r}, mode={self._mode!r})"

    # -- lookup --

    async def file(
        self, path: str, *, create: bool = False, mode: PermissionMode = "read"
    ) -> FileNode | None:
        check_mode(mode)
        try:
            resolved = resolve_file_path(path)
            parent = await walk_directories(self._handle, resolved.directories, create)
            handle = await parent.get_file_handle(resolved.name, create=create)
        except (OSError, SFSPathPolicyError):
            logger.debug("No file at %r in %s", path, self.name, exc_info=True)
            return None
        return await FileNode.create(handle, self._broker, mode)

    async def directory(
        self, path: str, *, create: bool = False, mode: PermissionMode = "read"
    ) -> DirectoryNode | None:
        check_mode(mode)
        try:
            names = resolve_directory_path(path)
            handle = await walk_directories(self._handle, names, create)
        except (OSError, SFSPathPolicyError):
            logger.debug("No directory at %r in %s", path, self.name, exc_info=True)
            return None
        return await DirectoryNode.create(handle, self._broker, mode)

    async def create_file(
        self, path: str, *, mode: PermissionMode = "read"
    ) -> FileNode | None:
        """Get the file at *path*, creating it and its parents if missing."""
        return await self.file(path, create=True, mode=mode)

    async def create_directory(
        self, path: str, *, mode: PermissionMode = "read"
    ) -> DirectoryNode | None:
        return await self.directory(path, create=True, mode=mode)

    async def remove(self, path: str) -> bool:
        """Remove the entry at *path*, with its descendants if it is a directory."""
        try:
            resolved = resolve_file_path(path)
            parent = await walk_directories(self._handle, resolved.directories)
            await parent.remove_entry(resolved.name, recursive=True)
        except (OSError, SFSPathPolicyError):
            logger.debug("Cannot remove %r in %s", path, self.name, exc_info=True)
            return False
        return True

    # -- listing --

    async def names(
        self, *, files: bool = True, dirs: bool = True, depth: int = 1
    ) -> list[str]:
        check_depth(depth)
        if not files and not dirs:
            return []
        tree = await build_tree(self._handle, to_filter_kind(files, dirs), depth)
        return [handle.name for handle in flatten_tree(tree)]

    async def list(
        self, *, files: bool = True, dirs: bool = True, depth: int = 1
    ) -> list[FileNode | DirectoryNode]:
        check_depth(depth)
        if not files and not dirs:
            return []
        tree = await build_tree(self._handle, to_filter_kind(files, dirs), depth)
        result: list[FileNode | DirectoryNode] = []
        for handle in flatten_tree(tree):
            node: FileNode | DirectoryNode | None
            if handle.kind == "file":
                node = await FileNode.create(handle, self._broker)
            else:
                node = await DirectoryNode.create(handle, self._broker)
            if node is not None:
                result.append(node)
        return result

    async def tree(
        self, *, files: bool = True, dirs: bool = True, depth: int = 1
    ) -> TreeResult:
        check_depth(depth)
        children: list[TreeNode] = await build_tree(
            self._handle, to_filter_kind(files, dirs), depth
        )
        return TreeResult(handle=self._handle, children=children)

    async def tree_string(
        self, *, files: bool = True, dirs: bool = True, depth: int = 1
    ) -> str:
        """Render the subtree, one entry per line.

        Example::

            babel/
            ├─ code-frame/
            │  ├─ lib/
            │  └─ README.md
            └─ package.json
        """
        check_depth(depth)
        lines = await render_tree(self._handle, to_filter_kind(files, dirs), depth)
        return "\n".join(lines)

    # -- search --

    async def glob(self, pattern: str) -> list[FileNode]:
        """Return the files whose path relative to this directory matches *pattern*."""
        handles = await glob_files(self._handle, pattern)
        result: list[FileNode] = []
        for handle in handles:
            node = await FileNode.create(handle, self._broker)
            if node is not None:
                result.append(node)
        return result
