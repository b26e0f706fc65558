"""Glob matching for ``/``-separated relative paths.

``*``, ``?`` and ``[seq]`` apply within a single segment; a segment that is
exactly ``**`` matches zero or more whole segments.
"""

import fnmatch
from functools import lru_cache

RECURSIVE_SEGMENT = "**"


def match_segment(pattern: str, name: str) -> bool:
    return fnmatch.fnmatchcase(name, pattern)


@lru_cache(maxsize=256)
def _split(pattern: str) -> tuple[str, ...]:
    return tuple(pattern.split("/"))


def match_path(pattern: str, candidate: str) -> bool:
    parts = _split(pattern)
    names = candidate.split("/")
    return _match_from(parts, 0, names, 0, {})


def _match_from(
    parts: tuple[str, ...],
    pi: int,
    names: list[str],
    ni: int,
    seen: dict[tuple[int, int], bool],
) -> bool:
    key = (pi, ni)
    if key in seen:
        return seen[key]
    if pi == len(parts):
        result = ni == len(names)
    elif parts[pi] == RECURSIVE_SEGMENT:
        # zero segments, or swallow one and stay on "**"
        result = _match_from(parts, pi + 1, names, ni, seen) or (
            ni < len(names) and _match_from(parts, pi, names, ni + 1, seen)
        )
    else:
        result = (
            ni < len(names)
            and match_segment(parts[pi], names[ni])
            and _match_from(parts, pi + 1, names, ni + 1, seen)
        )
    seen[key] = result
    return result
