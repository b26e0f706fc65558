from __future__ import annotations

import mimetypes
import posixpath
import threading
import time
from collections.abc import AsyncIterator, Callable
from typing import Literal

from ._exceptions import SFSQuotaExceededError
from ._path import normalize_path
from ._typing import HostFileStat, PermissionMode, PermissionState

# ---------------------------------------------------------------------------
#  Entry records
# ---------------------------------------------------------------------------


class DirRecord:
    __slots__ = ("node_id", "children", "modified_at")

    def __init__(self, node_id: int) -> None:
        self.node_id: int = node_id
        self.children: dict[str, int] = {}
        self.modified_at: float = time.time()


class FileRecord:
    __slots__ = ("node_id", "data", "modified_at")

    def __init__(self, node_id: int) -> None:
        self.node_id: int = node_id
        self.data: bytearray = bytearray()
        self.modified_at: float = time.time()


Record = DirRecord | FileRecord


# ---------------------------------------------------------------------------
#  MemoryHost
# ---------------------------------------------------------------------------


class MemoryHost:
    """An in-memory host entry provider and permission broker.

    Entries are enumerated in insertion order. Every entry is granted in
    both modes unless :meth:`set_permission` says otherwise; a ``"prompt"``
    state is resolved by the *prompt* callback, if any.
    """

    def __init__(
        self,
        max_quota: int = 256 * 1024 * 1024,
        root_name: str = "root",
        prompt: Callable[[str, PermissionMode], bool] | None = None,
    ) -> None:
        if not root_name or "/" in root_name:
            raise ValueError(f"Invalid root_name: {root_name!r}.")
        if max_quota < 0:
            raise ValueError(f"max_quota must be >= 0, got {max_quota}.")
        self._max_quota = max_quota
        self._used_bytes: int = 0
        self._global_lock = threading.RLock()
        self._nodes: dict[int, Record] = {}
        self._next_node_id: int = 0
        self._permissions: dict[tuple[int, str], PermissionState] = {}
        self._revoked: set[int] = set()
        self._prompt = prompt
        self.prompt_count: int = 0
        self.root_name = root_name
        self._root = self._alloc_dir()
        self.broker = MemoryPermissionBroker(self)

    @property
    def root(self) -> MemoryDirectoryHandle:
        return MemoryDirectoryHandle(self, self._root, self.root_name)

    # -- node allocation helpers --

    def _alloc_dir(self) -> DirRecord:
        nid = self._next_node_id
        self._next_node_id += 1
        node = DirRecord(nid)
        self._nodes[nid] = node
        return node

    def _alloc_file(self) -> FileRecord:
        nid = self._next_node_id
        self._next_node_id += 1
        node = FileRecord(nid)
        self._nodes[nid] = node
        return node

    # -- path helpers --

    def _resolve_path(self, npath: str) -> Record | None:
        if npath == "/":
            return self._root
        parts = [p for p in npath.split("/") if p]
        current: Record = self._root
        for part in parts:
            if not isinstance(current, DirRecord):
                return None
            child_id = current.children.get(part)
            if child_id is None:
                return None
            current = self._nodes[child_id]
        return current

    def _require(self, path: str) -> Record:
        node = self._resolve_path(normalize_path(path))
        if node is None:
            raise FileNotFoundError(f"No such file or directory: '{path}'")
        return node

    def _makedirs(self, npath: str) -> DirRecord:
        parts = [p for p in npath.split("/") if p]
        current = self._root
        for part in parts:
            child_id = current.children.get(part)
            if child_id is not None:
                child = self._nodes[child_id]
                if isinstance(child, DirRecord):
                    current = child
                else:
                    raise FileExistsError(f"A file exists at path component: '{part}'")
            else:
                new_dir = self._alloc_dir()
                current.children[part] = new_dir.node_id
                current.modified_at = time.time()
                current = new_dir
        return current

    # -- population helpers --

    def makedirs(self, path: str) -> None:
        with self._global_lock:
            self._makedirs(normalize_path(path))

    def import_tree(self, tree: dict[str, bytes]) -> None:
        """Create every file in *tree* (path -> content), with its parents."""
        with self._global_lock:
            for path, data in tree.items():
                npath = normalize_path(path)
                if npath == "/":
                    raise ValueError("Cannot import content as the root directory.")
                parent = self._makedirs(posixpath.dirname(npath))
                name = posixpath.basename(npath)
                child_id = parent.children.get(name)
                if child_id is None:
                    fnode = self._alloc_file()
                    parent.children[name] = fnode.node_id
                else:
                    existing = self._nodes[child_id]
                    if isinstance(existing, DirRecord):
                        raise IsADirectoryError(f"Is a directory: '{path}'")
                    fnode = existing
                self._store(fnode, bytes(data), append=False)

    def export_tree(self, prefix: str = "/") -> dict[str, bytes]:
        with self._global_lock:
            npath = normalize_path(prefix)
            result: dict[str, bytes] = {}
            self._collect_files(self._resolve_path(npath), npath, result)
            return result

    def _collect_files(
        self, node: Record | None, current_path: str, result: dict[str, bytes]
    ) -> None:
        if node is None:
            return
        if isinstance(node, FileRecord):
            result[current_path] = bytes(node.data)
        else:
            for name, child_id in node.children.items():
                child_path = current_path.rstrip("/") + "/" + name
                self._collect_files(self._nodes[child_id], child_path, result)

    def exists(self, path: str) -> bool:
        npath = normalize_path(path)
        with self._global_lock:
            return self._resolve_path(npath) is not None

    # -- permissions and faults --

    def set_permission(
        self, path: str, mode: PermissionMode, state: PermissionState
    ) -> None:
        with self._global_lock:
            node = self._require(path)
            self._permissions[(node.node_id, mode)] = state

    def revoke(self, path: str) -> None:
        """Make every later access to the entry at *path* fail with PermissionError."""
        with self._global_lock:
            self._revoked.add(self._require(path).node_id)

    def restore(self, path: str) -> None:
        with self._global_lock:
            self._revoked.discard(self._require(path).node_id)

    def _check_access(self, node: Record, name: str) -> None:
        if node.node_id in self._revoked:
            raise PermissionError(f"Access revoked: '{name}'")
        if node.node_id not in self._nodes:
            raise FileNotFoundError(f"Entry no longer exists: '{name}'")

    def _permission_state(self, node: Record, mode: PermissionMode) -> PermissionState:
        if node.node_id in self._revoked:
            return "denied"
        return self._permissions.get((node.node_id, mode), "granted")

    def _prompt_for(self, node: Record, name: str, mode: PermissionMode) -> PermissionState:
        state = self._permission_state(node, mode)
        if state != "prompt":
            return state
        self.prompt_count += 1
        if self._prompt is not None and self._prompt(name, mode):
            self._permissions[(node.node_id, mode)] = "granted"
            return "granted"
        self._permissions[(node.node_id, mode)] = "denied"
        return "denied"

    # -- storage --

    def _store(self, fnode: FileRecord, data: bytes, append: bool) -> None:
        # Callers hold _global_lock, which also guards _used_bytes.
        growth = len(data) if append else len(data) - len(fnode.data)
        available = self._max_quota - self._used_bytes
        if growth > available:
            raise SFSQuotaExceededError(requested=growth, available=available)
        if append:
            fnode.data.extend(data)
        else:
            fnode.data = bytearray(data)
        self._used_bytes += growth
        fnode.modified_at = time.time()

    def _release_subtree(self, node: Record) -> None:
        if isinstance(node, DirRecord):
            for child_id in list(node.children.values()):
                self._release_subtree(self._nodes[child_id])
            node.children.clear()
        else:
            self._used_bytes -= len(node.data)
        self._nodes.pop(node.node_id, None)
        self._revoked.discard(node.node_id)

    @property
    def used_bytes(self) -> int:
        with self._global_lock:
            return self._used_bytes


# ---------------------------------------------------------------------------
#  Handles
# ---------------------------------------------------------------------------


class MemoryFileHandle:
    __slots__ = ("_host", "_node", "_name")

    kind: Literal["file"] = "file"

    def __init__(self, host: MemoryHost, node: FileRecord, name: str) -> None:
        self._host = host
        self._node = node
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"MemoryFileHandle({self._name!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MemoryFileHandle):
            return NotImplemented
        return self._host is other._host and self._node is other._node

    def __hash__(self) -> int:
        return hash((id(self._host), self._node.node_id))

    async def stat(self) -> HostFileStat:
        with self._host._global_lock:
            self._host._check_access(self._node, self._name)
            mime_type, _ = mimetypes.guess_type(self._name)
            return HostFileStat(
                size=len(self._node.data),
                mime_type=mime_type or "",
                last_modified=self._node.modified_at,
            )

    async def read(self) -> bytes:
        with self._host._global_lock:
            self._host._check_access(self._node, self._name)
            return bytes(self._node.data)

    async def write(self, data: bytes, append: bool = False) -> None:
        with self._host._global_lock:
            self._host._check_access(self._node, self._name)
            self._host._store(self._node, data, append)


class MemoryDirectoryHandle:
    __slots__ = ("_host", "_node", "_name")

    kind: Literal["directory"] = "directory"

    def __init__(self, host: MemoryHost, node: DirRecord, name: str) -> None:
        self._host = host
        self._node = node
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"MemoryDirectoryHandle({self._name!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MemoryDirectoryHandle):
            return NotImplemented
        return self._host is other._host and self._node is other._node

    def __hash__(self) -> int:
        return hash((id(self._host), self._node.node_id))

    def _wrap(self, name: str, node: Record) -> MemoryFileHandle | MemoryDirectoryHandle:
        if isinstance(node, DirRecord):
            return MemoryDirectoryHandle(self._host, node, name)
        return MemoryFileHandle(self._host, node, name)

    async def values(self) -> AsyncIterator[MemoryFileHandle | MemoryDirectoryHandle]:
        host = self._host
        with host._global_lock:
            host._check_access(self._node, self._name)
            snapshot = list(self._node.children.items())
        for name, child_id in snapshot:
            child = host._nodes.get(child_id)
            if child is None:
                continue
            yield self._wrap(name, child)

    def _child(self, name: str) -> Record | None:
        if not name or "/" in name or name in (".", ".."):
            raise OSError(f"Invalid entry name: {name!r}")
        self._host._check_access(self._node, self._name)
        child_id = self._node.children.get(name)
        return None if child_id is None else self._host._nodes[child_id]

    async def get_file_handle(self, name: str, create: bool = False) -> MemoryFileHandle:
        with self._host._global_lock:
            child = self._child(name)
            if child is None:
                if not create:
                    raise FileNotFoundError(f"No such file: '{name}'")
                child = self._host._alloc_file()
                self._node.children[name] = child.node_id
                self._node.modified_at = time.time()
            elif isinstance(child, DirRecord):
                raise IsADirectoryError(f"Is a directory: '{name}'")
            return MemoryFileHandle(self._host, child, name)

    async def get_directory_handle(
        self, name: str, create: bool = False
    ) -> MemoryDirectoryHandle:
        with self._host._global_lock:
            child = self._child(name)
            if child is None:
                if not create:
                    raise FileNotFoundError(f"No such directory: '{name}'")
                child = self._host._alloc_dir()
                self._node.children[name] = child.node_id
                self._node.modified_at = time.time()
            elif isinstance(child, FileRecord):
                raise NotADirectoryError(f"Not a directory: '{name}'")
            return MemoryDirectoryHandle(self._host, child, name)

    async def remove_entry(self, name: str, recursive: bool = False) -> None:
        with self._host._global_lock:
            child = self._child(name)
            if child is None:
                raise FileNotFoundError(f"No such file or directory: '{name}'")
            if isinstance(child, DirRecord) and child.children and not recursive:
                raise OSError(f"Directory not empty: '{name}'")
            del self._node.children[name]
            self._node.modified_at = time.time()
            self._host._release_subtree(child)


# ---------------------------------------------------------------------------
#  Permission broker
# ---------------------------------------------------------------------------


class MemoryPermissionBroker:
    def __init__(self, host: MemoryHost) -> None:
        self._host = host

    def _node_of(self, handle: object) -> Record:
        if not isinstance(handle, (MemoryFileHandle, MemoryDirectoryHandle)):
            raise TypeError(f"Not a handle of this host: {handle!r}")
        if handle._host is not self._host:
            raise PermissionError(f"Handle belongs to another host: {handle!r}")
        return handle._node

    async def query(self, handle: object, mode: PermissionMode) -> PermissionState:
        with self._host._global_lock:
            return self._host._permission_state(self._node_of(handle), mode)

    async def request(self, handle: object, mode: PermissionMode) -> PermissionState:
        with self._host._global_lock:
            node = self._node_of(handle)
            return self._host._prompt_for(node, handle.name, mode)  # type: ignore[attr-defined]
