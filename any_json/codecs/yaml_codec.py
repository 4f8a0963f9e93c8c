"""YAML codec using PyYAML's safe loader and dumper.

RULES:
- Only the safe subset is accepted (no arbitrary Python objects)
- Key order is preserved on output (sort_keys=False)
- Timestamps decode as ISO-8601 strings
"""

from __future__ import annotations

from typing import Any

import yaml

from any_json.codecs.base import BaseCodec, Payload
from any_json.core.values import to_plain


class YamlCodec(BaseCodec):

    @property
    def name(self) -> str:
        return "yaml"

    async def decode(self, text: Payload) -> Any:
        return to_plain(yaml.safe_load(self.as_text(text)))

    async def encode(self, value: Any) -> str:
        return yaml.safe_dump(value, sort_keys=False, allow_unicode=True)
