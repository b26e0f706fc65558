from __future__ import annotations

from ._host import HostDirectoryHandle, HostFileHandle, HostHandle
from ._match import RECURSIVE_SEGMENT, match_path, match_segment
from ._walk import read_children


async def glob_files(
    root: HostDirectoryHandle, pattern: str
) -> list[HostFileHandle]:
    """Return every file below *root* whose relative path matches *pattern*.

    Only directories that can still contribute a match are entered. Results
    are in traversal order.
    """
    if pattern.startswith("/"):
        pattern = pattern[1:]
    if not pattern:
        return []
    segments = pattern.split("/")
    results: list[HostFileHandle] = []
    await _glob(segments, pattern, 0, root, "", results)
    return results


async def _glob(
    segments: list[str],
    pattern: str,
    index: int,
    directory: HostDirectoryHandle,
    prefix: str,
    results: list[HostFileHandle],
) -> None:
    entries = await read_children(directory)
    if entries is None:
        return

    if index == len(segments) - 1:
        _match_files(entries, pattern, prefix, results)
        return

    dirs = [entry for entry in entries if entry.kind == "directory"]
    segment = segments[index]
    if segment == RECURSIVE_SEGMENT:
        # Zero levels: the last segment is tried against this directory.
        _match_files(entries, pattern, prefix, results)
        # One or more levels: "**" stays unconsumed while descending.
        for child in dirs:
            await _glob(segments, pattern, index, child, f"{prefix}{child.name}/", results)
    else:
        for child in dirs:
            if match_segment(segment, child.name):
                await _glob(
                    segments, pattern, index + 1, child, f"{prefix}{child.name}/", results
                )


def _match_files(
    entries: list[HostHandle],
    pattern: str,
    prefix: str,
    results: list[HostFileHandle],
) -> None:
    results.extend(
        entry
        for entry in entries
        if entry.kind == "file" and match_path(pattern, prefix + entry.name)
    )
