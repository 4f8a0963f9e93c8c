"""Hjson codec backed by ``hjson``.

hjson.loads returns OrderedDict instances; they are flattened to plain
dicts so the value can be handed to encoders such as PyYAML's safe
dumper, which refuses OrderedDict.
"""

from __future__ import annotations

from typing import Any

import hjson

from any_json.codecs.base import BaseCodec, Payload
from any_json.core.values import json_default, to_plain


class HjsonCodec(BaseCodec):

    @property
    def name(self) -> str:
        return "hjson"

    async def decode(self, text: Payload) -> Any:
        return to_plain(hjson.loads(self.as_text(text)))

    async def encode(self, value: Any) -> str:
        return hjson.dumps(value, default=json_default)
