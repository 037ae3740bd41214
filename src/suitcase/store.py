"""Keyed document store on top of a filesystem adapter."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .exceptions import (
    CollectionNotEmptyError,
    CollectionNotSetError,
    DeleteError,
    FormatError,
    ReadError,
    SaveError,
)
from .filesystem import Filesystem, LocalFilesystem
from .formats import Format, FormatType, make_format

if TYPE_CHECKING:
    from .config import Config

logger = logging.getLogger(__name__)


class Store:
    """Items of a collection stored one file each.

    An item saved under ``key`` in collection ``users`` lives at
    ``users/<key><extension>``, the extension coming from the store's format.
    A collection must be selected with :meth:`set_collection` before any item
    operation.

    Every failure is raised as a :class:`~suitcase.exceptions.SuitcaseError`
    subclass, whether the adapter raised or returned a falsy result.
    Existence checks and writes are separate adapter calls, so a concurrent
    writer can make :meth:`save` fail with :class:`SaveError`; nothing is
    retried.
    """

    def __init__(
        self,
        filesystem: Filesystem,
        format_type: FormatType | str = FormatType.JSON,
    ):
        """Initialize the store.

        Args:
            filesystem: Adapter that performs byte-level I/O
            format_type: Serialization format for every item of this store
        """
        self.filesystem = filesystem
        self._format = make_format(format_type)
        self._collection: str | None = None

    @classmethod
    def from_config(cls, config: Config) -> Store:
        """Create a store on the local disk from configuration."""
        return cls(LocalFilesystem(config.root_path), config.format_type)

    @property
    def format(self) -> Format:
        """The format items are encoded with."""
        return self._format

    @property
    def collection(self) -> str | None:
        """The current collection, or None if none is set."""
        return self._collection

    def set_collection(self, collection: str) -> Store:
        """Select the collection item operations apply to."""
        self._collection = collection
        return self

    def get_file_path(self, key: str) -> str:
        """Get the path of an item in the current collection.

        Raises:
            CollectionNotSetError: If no collection is set
        """
        collection = self._require_collection()
        return f"{collection}/{key}{self._format.extension}"

    def save(self, key: str, data: Any) -> Store:
        """Save an item, creating or overwriting its file.

        Raises:
            CollectionNotSetError: If no collection is set
            FormatError: If the data cannot be encoded
            SaveError: If writing fails
        """
        path = self.get_file_path(key)
        encoded = self._format.encode(data)
        try:
            payload = encoded.encode("utf-8")
        except UnicodeEncodeError as e:
            raise FormatError("Error encoding data.", str(e)) from e

        if self.filesystem.has(path):
            logger.debug(f"Updating existing item at {path}")
            self._update(path, payload)
        else:
            logger.debug(f"Writing new item at {path}")
            self._write(path, payload)

        return self

    def read(self, key: str) -> Any:
        """Read an item.

        Raises:
            CollectionNotSetError: If no collection is set
            ReadError: If the file is missing or empty
            FormatError: If the file cannot be decoded
        """
        path = self.get_file_path(key)

        try:
            raw = self.filesystem.read(path)
        except FileNotFoundError as e:
            raise ReadError("Unable to read data. File not found.", str(e)) from e

        if not raw:
            raise ReadError("Unable to read data.")

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FormatError("Error decoding data.", str(e)) from e

        return self._format.decode(text)

    def read_all(self) -> dict[str, Any]:
        """Read every item in the current collection, keyed by item key.

        The first failing item aborts the whole read.
        """
        collection = self._require_collection()

        return {
            entry.filename: self.read(entry.filename)
            for entry in self.filesystem.list_contents(collection)
        }

    def delete(self, key: str) -> Store:
        """Delete an item.

        Raises:
            CollectionNotSetError: If no collection is set
            DeleteError: If the file is missing or could not be deleted
        """
        path = self.get_file_path(key)

        try:
            deleted = self.filesystem.delete(path)
        except FileNotFoundError as e:
            raise DeleteError("Unable to delete data. File not found.", str(e)) from e

        if not deleted:
            raise DeleteError("Unable to delete data.")

        logger.debug(f"Deleted item at {path}")
        return self

    def delete_all(self) -> Store:
        """Delete every item in the current collection.

        Stops at the first failure; items deleted before it stay deleted.
        """
        collection = self._require_collection()

        for entry in self.filesystem.list_contents(collection):
            self.delete(entry.filename)

        return self

    def delete_collection(self, collection: str, empty: bool = True) -> Store:
        """Delete a collection directory.

        Args:
            collection: Name of the collection to delete
            empty: Delete the collection's files along with it. When False,
                a collection that still holds files is left untouched.

        Raises:
            CollectionNotEmptyError: If ``empty`` is False and the collection
                holds files
            DeleteError: If the directory could not be deleted
        """
        if not empty:
            entries = self.filesystem.list_contents(collection)
            if entries:
                logger.warning(
                    f"Refusing to delete collection '{collection}' "
                    f"holding {len(entries)} items"
                )
                raise CollectionNotEmptyError("Collection is not empty.")

        if not self.filesystem.delete_dir(collection):
            raise DeleteError("Unable to delete collection.")

        logger.debug(f"Deleted collection '{collection}'")
        return self

    def _write(self, path: str, data: bytes) -> None:
        try:
            written = self.filesystem.write(path, data)
        except FileExistsError as e:
            raise SaveError(
                "Unable to write data. File already exists.", str(e)
            ) from e

        if not written:
            raise SaveError("Unable to write data.")

    def _update(self, path: str, data: bytes) -> None:
        try:
            updated = self.filesystem.update(path, data)
        except FileNotFoundError as e:
            raise SaveError("Unable to update data. File not found.", str(e)) from e

        if not updated:
            raise SaveError("Unable to update data.")

    def _require_collection(self) -> str:
        if not self._collection:
            raise CollectionNotSetError("Collection not set.")
        return self._collection
