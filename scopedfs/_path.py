import posixpath

from ._exceptions import SFSPathPolicyError
from ._typing import ResolvedPath


def normalize_path(path: str) -> str:
    """Resolve ``.`` and ``..`` against a synthetic root ``/``.

    ``..`` at the root stays at the root.
    """
    converted = path.replace("\\", "/")
    if not converted:
        return "/"
    # posixpath keeps a leading "//", so collapse leading separators first
    converted = "/" + converted.lstrip("/")
    return posixpath.normpath(converted)


def resolve_path(path: str) -> ResolvedPath:
    parts = normalize_path(path).split("/")[1:]
    name = parts.pop()
    return ResolvedPath(tuple(parts), name)


def resolve_file_path(path: str) -> ResolvedPath:
    resolved = resolve_path(path)
    if not resolved.name:
        raise SFSPathPolicyError(path, "does not name an entry")
    return resolved


def resolve_directory_path(path: str) -> tuple[str, ...]:
    """Return every directory segment to descend, the terminal one included."""
    resolved = resolve_path(path)
    if not resolved.directories and not resolved.name:
        raise SFSPathPolicyError(path, "does not name a directory")
    return (*resolved.directories, resolved.name)
