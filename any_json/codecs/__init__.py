"""Format codec registry: one codec per supported format.

WHY: The facade, CLI and HTTP service need a single list of the formats
this package speaks. Adding a format means writing one codec module,
importing it here and adding one line to CODECS.

HOW: CODECS holds one instance of each codec (codecs are stateless, so a
single instance is shared). ``build_registry`` wraps them in an
immutable CodecRegistry.

RULES:
- Every codec listed here must be importable without side effects
- Identifiers are lowercase; each appears once
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from any_json.codecs.base import BaseCodec
from any_json.codecs.cson_codec import CsonCodec
from any_json.codecs.csv_codec import CsvCodec
from any_json.codecs.hjson_codec import HjsonCodec
from any_json.codecs.ini_codec import IniCodec
from any_json.codecs.json5_codec import Json5Codec
from any_json.codecs.json_codec import JsonCodec
from any_json.codecs.toml_codec import TomlCodec
from any_json.codecs.workbook import XlsCodec, XlsxCodec
from any_json.codecs.xml_codec import XmlCodec
from any_json.codecs.yaml_codec import YamlCodec
from any_json.core.registry import CodecRegistry

CODECS: Tuple[BaseCodec, ...] = (
    CsonCodec(),
    CsvCodec(),
    HjsonCodec(),
    IniCodec(),
    JsonCodec(),
    Json5Codec(),
    TomlCodec(),
    XlsCodec(),
    XlsxCodec(),
    XmlCodec(),
    YamlCodec(),
)


def build_registry(codecs: Optional[Iterable[BaseCodec]] = None) -> CodecRegistry:
    """Build the registry from ``codecs`` (default: every bundled codec)."""
    return CodecRegistry(CODECS if codecs is None else codecs)
