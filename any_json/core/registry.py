"""Immutable registry of format codecs.

WHY: The registry is the single answer to "which formats exist". Keeping
it an explicitly constructed, read-only value (rather than a module-level
dict that anything may mutate) makes lookups safe to share between
concurrent conversions.

HOW: Built once from an iterable of codec instances. The table is stored
behind a MappingProxyType so it cannot be changed after construction.

RULES:
- At most one codec per identifier; duplicates fail at construction
- lookup() is case-sensitive; callers normalize first
- lookup() returns None for unknown identifiers (never raises)
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, Optional

if TYPE_CHECKING:
    from any_json.codecs.base import BaseCodec


class CodecRegistry:
    """Read-only mapping from format identifier to codec."""

    def __init__(self, codecs: Iterable[BaseCodec]) -> None:
        table: Dict[str, BaseCodec] = {}
        for codec in codecs:
            if codec.name in table:
                raise ValueError("Duplicate codec for format {!r}".format(codec.name))
            table[codec.name] = codec
        self._codecs = MappingProxyType(table)

    def lookup(self, format_name: str) -> Optional[BaseCodec]:
        return self._codecs.get(format_name)

    def names(self) -> List[str]:
        """Registered identifiers, sorted."""
        return sorted(self._codecs)

    def __contains__(self, format_name: object) -> bool:
        return format_name in self._codecs

    def __iter__(self) -> Iterator[BaseCodec]:
        return iter(self._codecs.values())

    def __len__(self) -> int:
        return len(self._codecs)

    def __repr__(self) -> str:
        return "CodecRegistry({})".format(", ".join(self.names()))
