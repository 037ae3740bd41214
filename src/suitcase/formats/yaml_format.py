"""YAML format.

Strings holding a Unicode line break (NEL, LS, PS) are written double-quoted so
the emitter escapes the break instead of folding it into a space.
"""

from io import StringIO
from typing import Any

import ruamel.yaml
from ruamel.yaml.error import YAMLError
from ruamel.yaml.scalarstring import DoubleQuotedScalarString

from ..exceptions import FormatError

_UNICODE_BREAKS = ("\x85", "\u2028", "\u2029")


class YamlFormat:
    """Block-style YAML."""

    extension = ".yml"

    def __init__(self) -> None:
        self.yaml = ruamel.yaml.YAML()
        self.yaml.indent(mapping=2, sequence=4, offset=2)

    def encode(self, value: Any) -> str:
        stream = StringIO()
        try:
            self.yaml.dump(_quote_breaks(value), stream)
        except YAMLError as e:
            raise FormatError("Error encoding data.", str(e)) from e

        return stream.getvalue()

    def decode(self, data: str) -> Any:
        try:
            loaded = self.yaml.load(data)
        except YAMLError as e:
            raise FormatError("Error decoding data.", str(e)) from e

        return _to_builtin(loaded)


def _quote_breaks(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {_quote_breaks(k): _quote_breaks(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [_quote_breaks(item) for item in obj]
    elif isinstance(obj, str) and any(ch in obj for ch in _UNICODE_BREAKS):
        return DoubleQuotedScalarString(obj)
    else:
        return obj


def _to_builtin(obj: Any) -> Any:
    """Convert round-trip containers and scalar wrappers to plain values."""
    if isinstance(obj, dict):
        return {str(k): _to_builtin(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_to_builtin(item) for item in obj]
    elif isinstance(obj, bool) or obj is None:
        return obj
    elif isinstance(obj, int):
        return int(obj)
    elif isinstance(obj, float):
        return float(obj)
    elif isinstance(obj, str):
        return str(obj)
    else:
        return obj
