"""any-json: convert (almost) anything to JSON, and back.

WHY: Configuration and data files come in a dozen structured-text
formats. Converting between them by hand is tedious and error-prone; most
of them share the same JSON-like data model, so one intermediate value
lets any format be converted to any other.

HOW: Each format has a codec (codecs/) that decodes text into a plain
Python value and encodes such a value back to text. A Converter looks
codecs up by format name in an immutable registry. ``decode`` and
``encode`` below are bound to a default converter holding every bundled
codec.

RULES:
- Supported formats: cson, csv, hjson, ini, json, json5, toml, xls, xlsx,
  xml, yaml
- decode/encode are coroutines: ``await any_json.decode(text, "yaml")``
- Binary formats (xls, xlsx) take and return bytes; see encoding_for()
"""

from any_json.codecs import build_registry
from any_json.core.converter import Converter
from any_json.core.errors import (
    ConversionError,
    DecodeError,
    EncodingError,
    MissingFormatError,
    UnknownFormatError,
)
from any_json.core.formats import encoding_for

__version__ = "0.1.0"

default_converter = Converter(build_registry())

decode = default_converter.decode
encode = default_converter.encode

__all__ = [
    "ConversionError",
    "Converter",
    "DecodeError",
    "EncodingError",
    "MissingFormatError",
    "UnknownFormatError",
    "decode",
    "default_converter",
    "encode",
    "encoding_for",
]
