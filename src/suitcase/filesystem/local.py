"""Local directory filesystem adapter for Suitcase."""

import logging
import os
import shutil
import tempfile
from pathlib import Path

from ..models import FileEntry

logger = logging.getLogger(__name__)


class LocalFilesystem:
    """Files stored under a root directory on the local disk."""

    def __init__(self, root: Path | str):
        """Initialize the adapter with its root path."""
        self.root_path = Path(root)

    def has(self, path: str) -> bool:
        return self._resolve(path).is_file()

    def write(self, path: str, data: bytes) -> bool:
        """Create a new file, creating parent directories as needed."""
        target = self._resolve(path)
        if target.exists():
            raise FileExistsError(f"File already exists at path: {path}")

        target.parent.mkdir(parents=True, exist_ok=True)
        self._atomic_write(target, data)
        logger.debug(f"Wrote {len(data)} bytes to {target}")
        return True

    def update(self, path: str, data: bytes) -> bool:
        """Overwrite an existing file."""
        target = self._resolve(path)
        if not target.is_file():
            raise FileNotFoundError(f"File not found at path: {path}")

        self._atomic_write(target, data)
        logger.debug(f"Updated {target} with {len(data)} bytes")
        return True

    def read(self, path: str) -> bytes | None:
        target = self._resolve(path)
        if not target.is_file():
            raise FileNotFoundError(f"File not found at path: {path}")

        return target.read_bytes()

    def delete(self, path: str) -> bool:
        target = self._resolve(path)
        if not target.is_file():
            raise FileNotFoundError(f"File not found at path: {path}")

        target.unlink()
        logger.debug(f"Deleted {target}")
        return True

    def delete_dir(self, path: str) -> bool:
        """Delete a directory tree. Returns False if it does not exist."""
        target = self._resolve(path)
        if target == self.root_path.resolve() or not target.is_dir():
            return False

        shutil.rmtree(target)
        logger.debug(f"Deleted directory {target}")
        return True

    def list_contents(self, path: str) -> list[FileEntry]:
        """List the files directly inside a directory, sorted by name."""
        target = self._resolve(path)
        if not target.is_dir():
            return []

        root = self.root_path.resolve()
        return [
            FileEntry.from_path(child.relative_to(root).as_posix())
            for child in sorted(target.iterdir())
            if child.is_file() and not child.name.endswith(".tmp")
        ]

    def _resolve(self, path: str) -> Path:
        """Get the absolute path for a root-relative path."""
        root = self.root_path.resolve()
        target = (root / path).resolve()
        if target != root and root not in target.parents:
            raise ValueError(f"Path escapes the filesystem root: {path}")
        return target

    def _atomic_write(self, path: Path, content: bytes) -> None:
        """Write content to file atomically."""
        temp_fd = None
        temp_path = None

        try:
            temp_fd, temp_path_str = tempfile.mkstemp(
                dir=path.parent, prefix=f"{path.name}.", suffix=".tmp"
            )
            temp_path = Path(temp_path_str)

            with os.fdopen(temp_fd, "wb") as f:
                temp_fd = None  # closed by the file object from here on
                f.write(content)
                f.flush()
                os.fsync(f.fileno())

            temp_path.replace(path)

        finally:
            if temp_fd is not None:
                os.close(temp_fd)
            if temp_path and temp_path.exists():
                temp_path.unlink(missing_ok=True)
