"""CSON (CoffeeScript Object Notation) codec backed by ``cson``."""

from __future__ import annotations

from typing import Any

import cson

from any_json.codecs.base import BaseCodec, Payload
from any_json.core.values import to_plain


class CsonCodec(BaseCodec):
    """CSON with a two-space indent."""

    @property
    def name(self) -> str:
        return "cson"

    async def decode(self, text: Payload) -> Any:
        return to_plain(cson.loads(self.as_text(text)))

    async def encode(self, value: Any) -> str:
        return cson.dumps(to_plain(value), indent=2)
