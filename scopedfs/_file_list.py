from __future__ import annotations

from collections.abc import Iterable, Iterator

from ._file import FileNode
from ._host import HostFileHandle, PermissionBroker
from ._typing import PermissionMode, check_mode


class FileNodeList:
    """Several files picked together, all verified for the same mode."""

    __slots__ = ("_nodes",)

    def __init__(self, nodes: list[FileNode]) -> None:
        self._nodes = nodes

    @classmethod
    async def create(
        cls,
        handles: Iterable[HostFileHandle],
        broker: PermissionBroker,
        mode: PermissionMode = "read",
    ) -> FileNodeList | None:
        """Verify every handle; ``None`` if any of them is refused."""
        check_mode(mode)
        nodes: list[FileNode] = []
        for handle in handles:
            node = await FileNode.create(handle, broker, mode)
            if node is None:
                return None
            nodes.append(node)
        return cls(nodes)

    def file(self, name: str) -> FileNode | None:
        for node in self._nodes:
            if node.name == name:
                return node
        return None

    def names(self) -> list[str]:
        return [node.name for node in self._nodes]

    def list(self) -> list[FileNode]:
        return list(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[FileNode]:
        return iter(self._nodes)

    def __repr__(self) -> str:
        return f"FileNodeList({self.names()!r})"
