"""JSON5 codec backed by the ``json5`` package."""

from __future__ import annotations

from typing import Any

import json5

from any_json.codecs.base import BaseCodec, Payload
from any_json.core.values import json_default, to_plain


class Json5Codec(BaseCodec):
    """JSON5: unquoted keys where legal, four-space indent, no trailing commas."""

    @property
    def name(self) -> str:
        return "json5"

    async def decode(self, text: Payload) -> Any:
        return to_plain(json5.loads(self.as_text(text)))

    async def encode(self, value: Any) -> str:
        return json5.dumps(
            value, indent=4, ensure_ascii=False, trailing_commas=False, default=json_default
        )
