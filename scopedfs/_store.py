"""Persistence of picked handles between sessions.

The store is an explicit object: build one and pass it to the pickers in
:mod:`scopedfs._mount`. Directory traversal never touches it.
"""

from __future__ import annotations

import shelve
from collections.abc import MutableMapping
from typing import Any

FILE_NAMESPACE = "scopedfs-file"
DIRECTORY_NAMESPACE = "scopedfs-directory"


class HandleStore:
    def __init__(self, mapping: MutableMapping[str, Any] | None = None) -> None:
        self._mapping: MutableMapping[str, Any] = {} if mapping is None else mapping

    @classmethod
    def open_shelf(cls, filename: str) -> HandleStore:
        """Back the store with a :mod:`shelve` file; handles must be picklable."""
        return cls(shelve.open(filename))

    def close(self) -> None:
        if isinstance(self._mapping, shelve.Shelf):
            self._mapping.close()

    def __enter__(self) -> HandleStore:
        return self

    def __exit__(self, *args) -> None:  # type: ignore[no-untyped-def]
        self.close()

    @staticmethod
    def _key(namespace: str, id: str) -> str:
        return f"{namespace}/{id}"

    async def get_file(self, id: str) -> list[Any] | None:
        return self._mapping.get(self._key(FILE_NAMESPACE, id))

    async def set_file(self, id: str, handles: list[Any]) -> None:
        self._mapping[self._key(FILE_NAMESPACE, id)] = list(handles)

    async def del_file(self, id: str) -> None:
        self._mapping.pop(self._key(FILE_NAMESPACE, id), None)

    async def get_directory(self, id: str) -> Any | None:
        return self._mapping.get(self._key(DIRECTORY_NAMESPACE, id))

    async def set_directory(self, id: str, handle: Any) -> None:
        self._mapping[self._key(DIRECTORY_NAMESPACE, id)] = handle

    async def del_directory(self, id: str) -> None:
        self._mapping.pop(self._key(DIRECTORY_NAMESPACE, id), None)
