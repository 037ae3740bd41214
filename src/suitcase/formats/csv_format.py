"""CSV format.

A mapping is flattened into dot-notated column names and written as a header
row followed by a single value row::

    {"foo": {"bar": "baz"}, "tags": ["a", "b"], "count": 2}

    foo.bar,tags.0,tags.1,count
    baz,a,b,2

Strings are written as-is. Numbers, booleans, null and empty containers are
written as JSON literals, and a string that would read back as such a literal
(``"2"``, ``"true"``) or that holds a carriage return is written JSON-quoted, so
cell types survive a round trip. Keys may not contain ``.`` or a carriage
return. An empty mapping is written as a single blank line. A nested mapping
whose keys are exactly ``"0"`` to ``"n-1"`` reads back as a sequence.
"""

import csv
import io
import json
from typing import Any

from ..exceptions import FormatError

SEPARATOR = "."


class CsvFormat:
    """Single-record CSV with flattened keys."""

    extension = ".csv"

    def encode(self, value: Any) -> str:
        if not isinstance(value, dict):
            raise FormatError(
                "Error encoding data.",
                f"CSV can only encode a mapping, not {type(value).__name__}",
            )

        if not value:
            # The store reads empty content as a failed read.
            return "\n"

        columns: dict[str, str] = {}
        _flatten(value, (), columns)

        stream = io.StringIO()
        writer = csv.writer(stream, lineterminator="\n")
        writer.writerow(columns.keys())
        writer.writerow(columns.values())
        return stream.getvalue()

    def decode(self, data: str) -> Any:
        try:
            rows = [row for row in csv.reader(io.StringIO(data), strict=True) if row]
        except csv.Error as e:
            raise FormatError("Error decoding data.", str(e)) from e

        if not rows:
            return {}
        if len(rows) != 2:
            raise FormatError(
                "Error decoding data.",
                f"Expected a header row and one value row, found {len(rows)} rows",
            )

        header, values = rows
        if len(header) != len(values):
            raise FormatError(
                "Error decoding data.",
                f"Header has {len(header)} columns but the value row has "
                f"{len(values)}",
            )

        result: dict[str, Any] = {}
        for column, cell in zip(header, values):
            _insert(result, column, _from_cell(cell))

        return {key: _restore_sequences(child) for key, child in result.items()}


def _flatten(value: Any, path: tuple[str, ...], columns: dict[str, str]) -> None:
    if isinstance(value, dict) and value:
        for key, child in value.items():
            key = str(key)
            if SEPARATOR in key:
                raise FormatError(
                    "Error encoding data.",
                    f"Key '{key}' contains the column separator '{SEPARATOR}'",
                )
            if "\r" in key:
                raise FormatError(
                    "Error encoding data.", f"Key {key!r} contains a carriage return"
                )
            _flatten(child, path + (key,), columns)
    elif isinstance(value, (list, tuple)) and value:
        for index, item in enumerate(value):
            _flatten(item, path + (str(index),), columns)
    else:
        columns[SEPARATOR.join(path)] = _to_cell(value)


def _is_literal(value: Any) -> bool:
    """Whether a decoded JSON value is one that cells store as a literal."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return True
    return isinstance(value, (dict, list)) and not value


def _to_cell(value: Any) -> str:
    if isinstance(value, str):
        # The reader rejects a bare carriage return in an unquoted field.
        if "\r" in value:
            return json.dumps(value, ensure_ascii=False)
        try:
            looks_literal = _is_literal(json.loads(value))
        except ValueError:
            looks_literal = False
        return json.dumps(value, ensure_ascii=False) if looks_literal else value

    if not _is_literal(value) and not isinstance(value, tuple):
        raise FormatError(
            "Error encoding data.",
            f"Object of type {type(value).__name__} is not CSV serializable",
        )

    try:
        return json.dumps(value, allow_nan=False)
    except ValueError as e:
        raise FormatError("Error encoding data.", str(e)) from e


def _from_cell(cell: str) -> Any:
    try:
        value = json.loads(cell)
    except ValueError:
        return cell
    return value if _is_literal(value) else cell


def _insert(result: dict[str, Any], column: str, value: Any) -> None:
    *parents, last = column.split(SEPARATOR)
    target = result
    for part in parents:
        target = target.setdefault(part, {})
        if not isinstance(target, dict):
            raise FormatError(
                "Error decoding data.", f"Column '{column}' conflicts with '{part}'"
            )

    if last in target:
        raise FormatError("Error decoding data.", f"Duplicate column '{column}'")
    target[last] = value


def _restore_sequences(value: Any) -> Any:
    if not isinstance(value, dict) or not value:
        return value

    value = {key: _restore_sequences(child) for key, child in value.items()}
    if set(value) == {str(index) for index in range(len(value))}:
        return [value[str(index)] for index in range(len(value))]
    return value
