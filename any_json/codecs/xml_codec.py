"""XML codec backed by ``xmltodict``.

WHY: XML has no native notion of arrays, numbers or of "this is an
attribute". xmltodict maps attributes to ``@name`` keys, mixed text to
``#text`` and repeated elements to lists, which is the closest a generic
converter can get. Round-trips through XML are therefore not guaranteed
to reproduce the input: scalars come back as strings and single-element
lists come back as scalars.

HOW: decode calls xmltodict.parse and normalizes the result to plain
containers. encode needs exactly one root element: a mapping with a
single non-list entry is used as-is, anything else is wrapped in a
``<root>`` element (lists become repeated ``<item>`` children).

RULES:
- Output is pretty-printed with the XML declaration
- Entity expansion stays disabled (xmltodict default)
- A list inside a list becomes an <item> element holding its own <item>s
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import xmltodict

from any_json.codecs.base import BaseCodec, Payload
from any_json.core.values import to_plain

_ROOT_ELEMENT = "root"
_ITEM_ELEMENT = "item"


def _prepare(value: Any) -> Any:
    """Nest inner lists as ``<item>`` children; xmltodict would print their repr."""
    if isinstance(value, Mapping):
        return {str(key): _prepare(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [
            {_ITEM_ELEMENT: _prepare(item)} if isinstance(item, (list, tuple)) else _prepare(item)
            for item in value
        ]
    return to_plain(value)


def _as_document(value: Any) -> Mapping:
    value = _prepare(value)
    if isinstance(value, Mapping) and len(value) == 1:
        (only,) = value.values()
        if not isinstance(only, list):
            return value
    if isinstance(value, list):
        return {_ROOT_ELEMENT: {_ITEM_ELEMENT: value}}
    return {_ROOT_ELEMENT: value}


class XmlCodec(BaseCodec):

    @property
    def name(self) -> str:
        return "xml"

    async def decode(self, text: Payload) -> Any:
        return to_plain(xmltodict.parse(self.as_text(text)))

    async def encode(self, value: Any) -> str:
        return xmltodict.unparse(_as_document(value), pretty=True)
