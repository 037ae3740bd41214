"""Suitcase - keyed document store backed by plain files."""

__version__ = "0.1.0"

from .exceptions import (
    CollectionNotEmptyError,
    CollectionNotSetError,
    DeleteError,
    FormatError,
    ReadError,
    SaveError,
    SuitcaseError,
)
from .filesystem import Filesystem, LocalFilesystem, MemoryFilesystem
from .formats import Format, FormatType, make_format
from .models import FileEntry
from .store import Store

__all__ = [
    "Store",
    "Format",
    "FormatType",
    "make_format",
    "Filesystem",
    "FileEntry",
    "LocalFilesystem",
    "MemoryFilesystem",
    "SuitcaseError",
    "CollectionNotSetError",
    "CollectionNotEmptyError",
    "SaveError",
    "ReadError",
    "DeleteError",
    "FormatError",
]
