"""INI codec built on ``configparser``, with the array-likeness heuristic.

WHY: INI files carry only sections of string keys and values, with no
arrays and no nesting. Two widespread conventions fill the gap: dotted
section names (``[server.tls]``) for nesting, and sections or keys named
``0``, ``1``, ``2``... for arrays. Decoding honours both so such files
come back as the structure their authors meant.

HOW: The text is parsed with a ConfigParser that preserves key case,
disables interpolation and accepts bare keys. Keys before the first
section header go to the top level (a hidden header is prepended to
capture them). Dotted section names are nested. Afterwards, and only at
the top level, ``looks_like_array`` decides whether the mapping is really
an array; if so ``array_from_mapping`` converts it.

RULES:
- Values stay strings; a bare key (no "=") decodes to None
- The heuristic fires only when the keys are exactly "0".."N-1":
  an empty mapping stays a mapping, gaps or other keys keep the mapping,
  and "01" is not the same key as "1"
- encode: lists become index-keyed sections/keys, nested mappings become
  dotted sections, booleans are "true"/"false", None is a bare key
- encode rejects scalars at the top level
"""

from __future__ import annotations

import configparser
import io
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from any_json.codecs.base import BaseCodec, Payload
from any_json.core.errors import EncodingError

# Section names that cannot appear in real files (NUL is not valid INI text).
_ROOT_SECTION = "\x00root"
_NO_DEFAULTS_SECTION = "\x00defaults"


def _new_parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(
        interpolation=None,
        allow_no_value=True,
        strict=False,
        default_section=_NO_DEFAULTS_SECTION,
    )
    parser.optionxform = str  # keep key case
    return parser


def looks_like_array(mapping: Mapping) -> bool:
    """Return True when the keys are exactly the strings "0" .. "N-1".

    Order does not matter; the empty mapping is not array-like.
    """
    if not mapping:
        return False
    return set(mapping) == {str(index) for index in range(len(mapping))}


def array_from_mapping(mapping: Mapping) -> List[Any]:
    """Convert an array-like mapping into a list ordered by index."""
    return [mapping[str(index)] for index in range(len(mapping))]


def _section_target(result: Dict[str, Any], section: str) -> Dict[str, Any]:
    node = result
    for part in section.split("."):
        child = node.setdefault(part, {})
        if not isinstance(child, dict):
            raise ValueError(
                "Section [{}] conflicts with the value of key {!r}".format(section, part)
            )
        node = child
    return node


def _indexed(items: List[Any]) -> Dict[str, Any]:
    return {str(index): item for index, item in enumerate(items)}


def _is_container(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple))


def _scalar(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _format_option(key: str, value: Optional[str]) -> str:
    # Same layout ConfigParser.write uses for section entries.
    if value is None:
        return key
    return "{} = {}".format(key, value.replace("\n", "\n\t"))


class IniCodec(BaseCodec):

    @property
    def name(self) -> str:
        return "ini"

    async def decode(self, text: Payload) -> Any:
        parser = _new_parser()
        parser.read_string("[{}]\n{}".format(_ROOT_SECTION, self.as_text(text)))

        result: Dict[str, Any] = {}
        for section in parser.sections():
            target = result if section == _ROOT_SECTION else _section_target(result, section)
            for key, value in parser.items(section, raw=True):
                target[key] = value

        if looks_like_array(result):
            return array_from_mapping(result)
        return result

    async def encode(self, value: Any) -> str:
        if isinstance(value, (list, tuple)):
            value = _indexed(list(value))
        if not isinstance(value, Mapping):
            raise EncodingError(
                "INI encoding requires the object be a mapping or an array."
            )

        parser = _new_parser()
        root_lines: List[str] = []
        for key, item in value.items():
            if _is_container(item):
                self._add_section(parser, str(key), item)
            else:
                root_lines.append(_format_option(str(key), _scalar(item)))

        buffer = io.StringIO()
        if root_lines:
            buffer.write("\n".join(root_lines))
            buffer.write("\n")
            if parser.sections():
                buffer.write("\n")
        parser.write(buffer)
        return buffer.getvalue()

    def _add_section(self, parser: configparser.ConfigParser, name: str, section: Any) -> None:
        if not isinstance(section, Mapping):
            section = _indexed(list(section))
        parser.add_section(name)

        children = []
        for key, item in section.items():
            if _is_container(item):
                children.append((str(key), item))
            else:
                parser.set(name, str(key), _scalar(item))

        for key, item in children:
            self._add_section(parser, "{}.{}".format(name, key), item)
