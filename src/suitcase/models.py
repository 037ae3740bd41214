"""Data models for Suitcase."""

from pathlib import PurePosixPath

from pydantic import BaseModel, Field


class FileEntry(BaseModel):
    """A file found when listing a collection directory."""

    path: str = Field(..., description="Path relative to the filesystem root")
    filename: str = Field(..., description="File name without its extension")
    extension: str = Field(
        default="", description="File extension without the leading dot"
    )

    @classmethod
    def from_path(cls, path: str) -> "FileEntry":
        """Build an entry from a root-relative POSIX path."""
        pure = PurePosixPath(path)
        return cls(path=path, filename=pure.stem, extension=pure.suffix.lstrip("."))
