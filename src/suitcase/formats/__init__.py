"""Serialization formats for Suitcase."""

from enum import Enum
from typing import Any, Protocol, runtime_checkable

from .csv_format import CsvFormat
from .json_format import JsonFormat
from .xml_format import XmlFormat
from .yaml_format import YamlFormat


@runtime_checkable
class Format(Protocol):
    """Protocol for serialization formats."""

    extension: str

    def encode(self, value: Any) -> str:
        """Encode a structured value.

        Args:
            value: Mapping, sequence or scalar to encode

        Returns:
            The encoded text

        Raises:
            FormatError: If the value cannot be represented in this format
        """
        ...

    def decode(self, data: str) -> Any:
        """Decode text produced by ``encode``.

        Args:
            data: Encoded text

        Returns:
            The structured value

        Raises:
            FormatError: If the text is not valid for this format
        """
        ...


class FormatType(str, Enum):
    """Supported serialization formats."""

    JSON = "json"
    XML = "xml"
    YAML = "yaml"
    CSV = "csv"


_FORMATS: dict[FormatType, type] = {
    FormatType.JSON: JsonFormat,
    FormatType.XML: XmlFormat,
    FormatType.YAML: YamlFormat,
    FormatType.CSV: CsvFormat,
}


def make_format(format_type: FormatType | str = FormatType.JSON) -> Format:
    """Factory function to create a Format.

    Args:
        format_type: Format member or its value, e.g. ``"yaml"``

    Returns:
        A new Format instance

    Raises:
        ValueError: If the format is not supported
    """
    try:
        if not isinstance(format_type, FormatType):
            format_type = FormatType(format_type.lower())
    except ValueError as e:
        supported = ", ".join(f.value for f in FormatType)
        raise ValueError(
            f"Unknown format '{format_type}'. Supported formats: {supported}"
        ) from e

    return _FORMATS[format_type]()


__all__ = [
    "Format",
    "FormatType",
    "make_format",
    "JsonFormat",
    "XmlFormat",
    "YamlFormat",
    "CsvFormat",
]
