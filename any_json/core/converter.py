"""Conversion facade: ``decode`` and ``encode`` by format name.

WHY: Callers think in format names ("yaml", ".xlsx"), not codec objects.
The facade turns a raw name into a codec and gives every codec the same
failure semantics, so the CLI and the HTTP service only ever handle the
exception types from core.errors.

HOW: Converter holds a CodecRegistry. Each operation normalizes the
format (strip one leading dot, lower-case), looks up the codec and awaits
it. Library exceptions are re-raised as DecodeError / EncodingError with
the original exception chained.

RULES:
- Missing format -> MissingFormatError, before any lookup
- Unknown format -> UnknownFormatError, no codec is touched
- Library failures during decode -> DecodeError(format, cause)
- Library failures during encode -> EncodingError chained to the cause
- ConversionErrors raised by a codec pass through unchanged
- No logging, retries or partial results
"""

from __future__ import annotations

from typing import Any, List, Optional

from any_json.codecs.base import BaseCodec, Payload
from any_json.core.errors import (
    ConversionError,
    DecodeError,
    EncodingError,
    MissingFormatError,
    UnknownFormatError,
)
from any_json.core.formats import normalize_format
from any_json.core.registry import CodecRegistry


class Converter:
    """Decode and encode documents through a fixed codec registry."""

    def __init__(self, registry: CodecRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> CodecRegistry:
        return self._registry

    @property
    def formats(self) -> List[str]:
        return self._registry.names()

    def codec_for(self, format_name: Optional[str]) -> BaseCodec:
        """Resolve a raw format name to its codec.

        Raises:
            MissingFormatError: the name is empty (or only a dot).
            UnknownFormatError: no codec is registered for the name.
        """
        key = normalize_format(format_name)
        if not key:
            raise MissingFormatError()
        codec = self._registry.lookup(key)
        if codec is None:
            raise UnknownFormatError(format_name)
        return codec

    async def decode(self, text: Payload, format_name: Optional[str]) -> Any:
        """Parse ``text`` as ``format_name`` into a structured value."""
        codec = self.codec_for(format_name)
        try:
            return await codec.decode(text)
        except ConversionError:
            raise
        except Exception as exc:
            raise DecodeError(codec.name, exc) from exc

    async def encode(self, value: Any, format_name: Optional[str]) -> Payload:
        """Serialize ``value`` as ``format_name`` (bytes for binary formats)."""
        codec = self.codec_for(format_name)
        try:
            return await codec.encode(value)
        except ConversionError:
            raise
        except Exception as exc:
            raise EncodingError(
                "Could not encode {}: {}".format(codec.name, exc)
            ) from exc
