"""JSON codec with comment tolerance.

WHY: Hand-edited JSON files (editor settings, tsconfig-style configs)
often carry // and /* */ comments. Standard JSON parsers reject them, so
comments are removed before parsing.

HOW: ``strip_json_comments`` walks the text once, tracking whether it is
inside a string literal, and replaces every comment character with a
space (newlines are kept). Line and column numbers in parser errors
therefore still point at the original text. Encoding uses json.dumps
with a 4-space indent.

Parsing with json5 would accept comments too, but it would also accept
trailing commas, single quotes, unquoted keys and hex numbers. Only
comments are tolerated here; everything else stays strict JSON, and
documents that need more are decoded with the json5 format.

RULES:
- Comment markers inside string literals are left alone
- An unterminated block comment blanks out the rest of the text
- Output keeps non-ASCII characters as-is
- Trailing commas and single quotes are rejected
"""

from __future__ import annotations

import json
from typing import Any

from any_json.codecs.base import BaseCodec, Payload
from any_json.core.values import json_default


def _blank(segment: str) -> str:
    return "".join(ch if ch in "\r\n" else " " for ch in segment)


def strip_json_comments(text: str) -> str:
    """Replace // line comments and /* block */ comments with whitespace."""
    out = []
    i = 0
    length = len(text)
    in_string = False

    while i < length:
        ch = text[i]

        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < length:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
            out.append(ch)
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            if end == -1:
                end = length
            out.append(_blank(text[i:end]))
            i = end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            end = length if end == -1 else end + 2
            out.append(_blank(text[i:end]))
            i = end
        else:
            out.append(ch)
            i += 1

    return "".join(out)


class JsonCodec(BaseCodec):
    """Plain JSON, pretty-printed with four spaces."""

    @property
    def name(self) -> str:
        return "json"

    async def decode(self, text: Payload) -> Any:
        return json.loads(strip_json_comments(self.as_text(text)))

    async def encode(self, value: Any) -> str:
        return json.dumps(value, indent=4, ensure_ascii=False, default=json_default)
