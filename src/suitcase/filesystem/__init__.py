"""Filesystem adapters for Suitcase."""

from abc import abstractmethod
from typing import Protocol, runtime_checkable

from ..models import FileEntry
from .local import LocalFilesystem
from .memory import MemoryFilesystem


@runtime_checkable
class Filesystem(Protocol):
    """Protocol for the byte-level storage a store persists items through.

    Paths are POSIX-style and relative to the adapter's root, e.g.
    ``users/alice.json``.
    """

    @abstractmethod
    def has(self, path: str) -> bool:
        """Return whether a file exists at ``path``."""
        ...

    @abstractmethod
    def write(self, path: str, data: bytes) -> bool:
        """Create a new file.

        Raises:
            FileExistsError: If a file already exists at ``path``
        """
        ...

    @abstractmethod
    def update(self, path: str, data: bytes) -> bool:
        """Overwrite an existing file.

        Raises:
            FileNotFoundError: If no file exists at ``path``
        """
        ...

    @abstractmethod
    def read(self, path: str) -> bytes | None:
        """Return the contents of a file.

        Raises:
            FileNotFoundError: If no file exists at ``path``
        """
        ...

    @abstractmethod
    def delete(self, path: str) -> bool:
        """Delete a file.

        Raises:
            FileNotFoundError: If no file exists at ``path``
        """
        ...

    @abstractmethod
    def delete_dir(self, path: str) -> bool:
        """Delete a directory and everything below it.

        Returns False when there was nothing to delete.
        """
        ...

    @abstractmethod
    def list_contents(self, path: str) -> list[FileEntry]:
        """List the files directly inside a directory.

        Entry filenames have their extension stripped. A missing directory
        lists as empty.
        """
        ...


__all__ = ["Filesystem", "FileEntry", "LocalFilesystem", "MemoryFilesystem"]
