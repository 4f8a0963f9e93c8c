"""Format identifier normalization and the byte/text encoding policy.

WHY: Format names arrive from flags ("YAML"), file extensions (".yml")
and API form fields. Codecs are keyed by one canonical lowercase token, so
every caller must agree on how a raw name becomes that token, and on
whether the document is read as bytes or as UTF-8 text.

HOW: Small pure functions over strings. ``encoding_for`` consults
BINARY_FORMATS from config; ``format_from_filename`` applies
EXTENSION_ALIASES (".yml" -> "yaml").

RULES:
- Only a single leading dot is stripped
- encoding_for never fails; unknown formats are "utf8"
- Extension aliases apply to filenames only, not to normalize_format
"""

from __future__ import annotations

from pathlib import PurePath
from typing import Optional

from any_json.config import BINARY_FORMATS, EXTENSION_ALIASES

BINARY = "binary"
UTF8 = "utf8"


def strip_leading_dot(format_name: Optional[str]) -> str:
    """Remove one leading dot, so ".json" and "json" are the same name."""
    if not format_name:
        return ""
    if format_name[0] == ".":
        return format_name[1:]
    return format_name


def normalize_format(format_name: Optional[str]) -> str:
    """Return the canonical lookup key: no leading dot, lower-cased.

    An empty result means no format was given.
    """
    return strip_leading_dot(format_name).lower()


def encoding_for(format_name: Optional[str]) -> str:
    """Return "binary" for spreadsheet formats and "utf8" for everything else."""
    if normalize_format(format_name) in BINARY_FORMATS:
        return BINARY
    return UTF8


def format_from_filename(filename: Optional[str]) -> Optional[str]:
    """Guess a format identifier from a file name's extension.

    Returns None when there is no filename or it has no extension.
    """
    if not filename:
        return None
    extension = normalize_format(PurePath(filename).suffix)
    if not extension:
        return None
    return EXTENSION_ALIASES.get(extension, extension)
