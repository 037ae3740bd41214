"""Exceptions raised by Suitcase.

Every failure surfaced by a store is one of these types. Each carries a
human-readable ``message`` and an ``error`` string holding the diagnostic of
whatever caused it (an adapter exception, a codec error), which may be empty.

Exception hierarchy:
    SuitcaseError
    ├── CollectionError
    │   ├── CollectionNotSetError - item operation without a collection
    │   └── CollectionNotEmptyError - protected drop of a non-empty collection
    ├── SaveError
    ├── ReadError
    ├── DeleteError
    └── FormatError - encode/decode failure in a format
"""


class SuitcaseError(Exception):
    """Base exception for all Suitcase errors."""

    def __init__(self, message: str = "", error: str = ""):
        super().__init__(message)
        self.message = message
        self.error = error

    def __str__(self) -> str:
        return self.message


class CollectionError(SuitcaseError):
    """Base exception for collection-related errors."""


class CollectionNotSetError(CollectionError):
    """An item operation was attempted before a collection was selected."""


class CollectionNotEmptyError(CollectionError):
    """A protected collection drop found files in the collection."""


class SaveError(SuitcaseError):
    """Writing or updating an item failed."""


class ReadError(SuitcaseError):
    """Reading an item failed."""


class DeleteError(SuitcaseError):
    """Deleting an item or a collection failed."""


class FormatError(SuitcaseError):
    """Encoding or decoding failed in the serialization layer."""


__all__ = [
    "SuitcaseError",
    "CollectionError",
    "CollectionNotSetError",
    "CollectionNotEmptyError",
    "SaveError",
    "ReadError",
    "DeleteError",
    "FormatError",
]
