"""In-memory filesystem adapter (testing/dev)."""

from __future__ import annotations

from posixpath import normpath

from ..models import FileEntry


class MemoryFilesystem:
    """Files kept in a dict of path to bytes.

    Directories exist implicitly as prefixes of stored paths.
    """

    def __init__(self) -> None:
        self._files: dict[str, bytes] = {}

    def has(self, path: str) -> bool:
        return _normalize(path) in self._files

    def write(self, path: str, data: bytes) -> bool:
        key = _normalize(path)
        if key in self._files:
            raise FileExistsError(f"File already exists at path: {path}")
        self._files[key] = bytes(data)
        return True

    def update(self, path: str, data: bytes) -> bool:
        key = _normalize(path)
        if key not in self._files:
            raise FileNotFoundError(f"File not found at path: {path}")
        self._files[key] = bytes(data)
        return True

    def read(self, path: str) -> bytes | None:
        key = _normalize(path)
        if key not in self._files:
            raise FileNotFoundError(f"File not found at path: {path}")
        return self._files[key]

    def delete(self, path: str) -> bool:
        key = _normalize(path)
        if key not in self._files:
            raise FileNotFoundError(f"File not found at path: {path}")
        del self._files[key]
        return True

    def delete_dir(self, path: str) -> bool:
        prefix = _normalize(path) + "/"
        doomed = [key for key in self._files if key.startswith(prefix)]
        for key in doomed:
            del self._files[key]
        return bool(doomed)

    def list_contents(self, path: str) -> list[FileEntry]:
        prefix = _normalize(path) + "/"
        return [
            FileEntry.from_path(key)
            for key in sorted(self._files)
            if key.startswith(prefix) and "/" not in key[len(prefix) :]
        ]


def _normalize(path: str) -> str:
    return normpath(path).strip("/")
