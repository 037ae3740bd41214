"""JSON format."""

import json
from typing import Any

from ..exceptions import FormatError


class JsonFormat:
    """Pretty-printed JSON with unescaped slashes and unicode."""

    extension = ".json"

    def encode(self, value: Any) -> str:
        try:
            encoded = json.dumps(value, indent=4, ensure_ascii=False, allow_nan=False)
            # Lone surrogates survive dumps but cannot be written as UTF-8
            encoded.encode("utf-8")
        except (TypeError, ValueError) as e:
            raise FormatError("Error encoding data.", str(e)) from e

        return encoded

    def decode(self, data: str) -> Any:
        try:
            return json.loads(data)
        except json.JSONDecodeError as e:
            raise FormatError("Error decoding data.", str(e)) from e
