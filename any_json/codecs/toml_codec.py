"""TOML codec backed by the ``toml`` package.

WHY: A TOML document is always a table at the top level. Values such as
a bare array have no TOML representation, so they are rejected up front
with a clear message instead of failing deep inside the library.

RULES:
- encode requires a mapping at the top level
- ``None`` values are dropped by the library (TOML has no null)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import toml

from any_json.codecs.base import BaseCodec, Payload
from any_json.core.errors import EncodingError
from any_json.core.values import to_plain


class TomlCodec(BaseCodec):

    @property
    def name(self) -> str:
        return "toml"

    async def decode(self, text: Payload) -> Any:
        return to_plain(toml.loads(self.as_text(text)))

    async def encode(self, value: Any) -> str:
        if not isinstance(value, Mapping):
            raise EncodingError(
                "TOML encoding requires the object be a table, got {}.".format(
                    type(value).__name__
                )
            )
        return toml.dumps(value)
