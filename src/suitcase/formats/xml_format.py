"""XML format.

Mappings become one child element per key under a ``<result>`` root::

    <?xml version="1.0" encoding="UTF-8"?>
    <result>
        <foo>
            <bar>baz</bar>
        </foo>
    </result>

Plain strings need no markup. Everything else carries a ``type`` attribute
(``list``, ``dict`` for an empty mapping, ``null``, ``bool``, ``int``,
``float``) so decoding restores the original value. XML parsers turn carriage
returns in text into ``\\n``, so a string holding one is written JSON-quoted
with ``type="str"``. Sequence members are ``<item>`` elements, and keys that
are not valid XML names are written as ``<entry key="...">``.
"""

import json
import re
import xml.etree.ElementTree as ET
from typing import Any

from ..exceptions import FormatError

ROOT_TAG = "result"
ITEM_TAG = "item"
ENTRY_TAG = "entry"

_XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'
_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_.-]*")
_ILLEGAL_CHARS_RE = re.compile(
    "[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]"
)


class XmlFormat:
    """XML with type annotations for non-string values."""

    extension = ".xml"

    def encode(self, value: Any) -> str:
        root = ET.Element(ROOT_TAG)
        self._fill(root, value)
        ET.indent(root, space="    ")
        return _XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"

    def decode(self, data: str) -> Any:
        try:
            root = ET.fromstring(data)
        except ET.ParseError as e:
            raise FormatError("Error decoding data.", str(e)) from e

        return self._parse(root)

    def _fill(self, element: ET.Element, value: Any) -> None:
        """Write ``value`` into ``element`` as text, attributes and children."""
        if value is None:
            element.set("type", "null")
        elif isinstance(value, bool):
            element.set("type", "bool")
            element.text = "true" if value else "false"
        elif isinstance(value, int):
            element.set("type", "int")
            element.text = str(value)
        elif isinstance(value, float):
            element.set("type", "float")
            element.text = repr(value)
        elif isinstance(value, str):
            element.text = _check_text(value)
            if "\r" in value:
                element.set("type", "str")
                element.text = json.dumps(value, ensure_ascii=False)
        elif isinstance(value, dict):
            if not value:
                element.set("type", "dict")
            for key, child_value in value.items():
                key = _check_text(str(key))
                if _NAME_RE.fullmatch(key):
                    child = ET.SubElement(element, key)
                else:
                    child = ET.SubElement(element, ENTRY_TAG, key=key)
                self._fill(child, child_value)
        elif isinstance(value, (list, tuple)):
            element.set("type", "list")
            for item in value:
                self._fill(ET.SubElement(element, ITEM_TAG), item)
        else:
            raise FormatError(
                "Error encoding data.",
                f"Object of type {type(value).__name__} is not XML serializable",
            )

    def _parse(self, element: ET.Element) -> Any:
        """Rebuild the value stored in ``element``."""
        value_type = element.get("type")
        text = element.text or ""

        if value_type == "null":
            return None
        elif value_type == "str":
            try:
                value = json.loads(text)
            except ValueError as e:
                raise FormatError("Error decoding data.", str(e)) from e
            if not isinstance(value, str):
                raise FormatError(
                    "Error decoding data.",
                    f"Invalid string {text!r} in <{element.tag}>",
                )
            return value
        elif value_type == "bool":
            if text not in ("true", "false"):
                raise FormatError(
                    "Error decoding data.",
                    f"Invalid boolean '{text}' in <{element.tag}>",
                )
            return text == "true"
        elif value_type in ("int", "float"):
            try:
                return int(text) if value_type == "int" else float(text)
            except ValueError as e:
                raise FormatError("Error decoding data.", str(e)) from e
        elif value_type == "list":
            return [self._parse(child) for child in element]
        elif value_type == "dict" or (value_type is None and len(element)):
            return {self._key(child): self._parse(child) for child in element}
        elif value_type is not None:
            raise FormatError(
                "Error decoding data.",
                f"Unknown type '{value_type}' in <{element.tag}>",
            )

        return text

    def _key(self, element: ET.Element) -> str:
        if element.tag == ENTRY_TAG and "key" in element.attrib:
            return element.attrib["key"]
        return element.tag


def _check_text(text: str) -> str:
    match = _ILLEGAL_CHARS_RE.search(text)
    if match:
        raise FormatError(
            "Error encoding data.",
            f"Character {match.group()!r} at position {match.start()} "
            "is not allowed in XML",
        )
    return text

