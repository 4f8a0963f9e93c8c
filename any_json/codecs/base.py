"""Abstract base codec.

WHY: Every format wraps a different library, but the registry, the
facade, the CLI and the HTTP service must treat them all the same way.
This base class fixes the two-method shape every codec implements.

HOW: BaseCodec is an ABC with a ``name`` property and two coroutines,
``decode`` and ``encode``. Helpers normalize the payload type: text
codecs accept bytes (decoded as UTF-8, BOM tolerated) and binary codecs
accept str (taken as a latin-1 "binary string").

RULES:
- Codecs are stateless; one instance serves every call
- ``name`` is the lowercase format identifier the codec is registered under
- decode returns a plain StructuredValue (see core.values.to_plain)
- encode returns str for text formats and bytes for binary formats
- Contract violations raise EncodingError; library errors propagate and
  are wrapped by the facade

To add a new format:
1. Create a module in codecs/
2. Subclass BaseCodec, implement ``name``, ``decode`` and ``encode``
3. Add an instance to CODECS in codecs/__init__.py
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Union

from any_json.config import media_type_for

Payload = Union[str, bytes]


class BaseCodec(ABC):
    """Abstract base for all format codecs."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Format identifier, e.g. 'json'."""

    @property
    def media_type(self) -> str:
        return media_type_for(self.name)

    @abstractmethod
    async def decode(self, text: Payload) -> Any:
        """Parse a document into a structured value."""

    @abstractmethod
    async def encode(self, value: Any) -> Payload:
        """Serialize a structured value into a document."""

    @staticmethod
    def as_text(text: Payload) -> str:
        if isinstance(text, (bytes, bytearray)):
            return bytes(text).decode("utf-8-sig")
        return text

    @staticmethod
    def as_bytes(text: Payload) -> bytes:
        if isinstance(text, str):
            return text.encode("latin-1")
        return bytes(text)

    def __repr__(self) -> str:
        return "<{} {!r}>".format(type(self).__name__, self.name)
