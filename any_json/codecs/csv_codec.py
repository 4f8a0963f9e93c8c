"""CSV codec: rows of objects keyed by the header line.

WHY: CSV is the lowest common denominator for tabular data. It has no
types and no nesting, so the codec defines one simple mapping: the first
row names the columns and every later row becomes an object.

HOW: decode uses csv.reader; encode uses csv.writer with the module's
default dialect except for the line terminator ("\\n"). The header of
an encoded document is the union of all row keys, in order of first
appearance.

RULES:
- Decoded values are always strings; no type inference
- Blank lines are skipped; short rows are padded with ""
- A row with more cells than the header is a decode error
- encode requires an array of objects; anything else is an EncodingError
- None -> empty cell, booleans -> "true"/"false", nested values -> compact JSON
"""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Mapping
from typing import Any, Dict, List

from any_json.codecs.base import BaseCodec, Payload
from any_json.core.errors import EncodingError
from any_json.core.values import json_default

LINE_TERMINATOR = "\n"


def _collect_headers(rows: List[Mapping]) -> List[str]:
    headers: Dict[str, None] = {}
    for row in rows:
        for key in row:
            headers.setdefault(str(key), None)
    return list(headers)


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=json_default)
    return str(value)


class CsvCodec(BaseCodec):

    @property
    def name(self) -> str:
        return "csv"

    async def decode(self, text: Payload) -> List[Dict[str, str]]:
        reader = csv.reader(io.StringIO(self.as_text(text), newline=""))
        records = [row for row in reader if row]
        if not records:
            return []

        headers = records[0]
        result = []
        for line_number, record in enumerate(records[1:], start=2):
            if len(record) > len(headers):
                raise ValueError(
                    "CSV row {} has {} fields but the header has {}".format(
                        line_number, len(record), len(headers)
                    )
                )
            padded = record + [""] * (len(headers) - len(record))
            result.append(dict(zip(headers, padded)))
        return result

    async def encode(self, value: Any) -> str:
        if not isinstance(value, (list, tuple)):
            raise EncodingError("CSV encoding requires the object be an array.")
        for index, row in enumerate(value):
            if not isinstance(row, Mapping):
                raise EncodingError(
                    "CSV encoding requires every row be an object (row {} is {}).".format(
                        index, type(row).__name__
                    )
                )
        if not value:
            return ""

        headers = _collect_headers(value)
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator=LINE_TERMINATOR)
        writer.writerow(headers)
        for row in value:
            lookup = {str(key): item for key, item in row.items()}
            writer.writerow([_cell(lookup.get(header)) for header in headers])
        return buffer.getvalue()
