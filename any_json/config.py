"""Configuration constants, format tables, and .env loading.

WHY: Centralizes the values that decide how formats are resolved and how
the CLI and HTTP service behave, so they are easy to find and override.
Format tables are plain data structures, not buried in logic.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level dicts, sets, and strings; runtime settings read from
environment variables with sensible defaults.

RULES:
- BINARY_FORMATS lists formats whose content is bytes, not UTF-8 text
- EXTENSION_ALIASES only applies to file extensions, never to explicit
  format names passed to decode/encode
- MEDIA_TYPES falls back to "application/octet-stream" for unknown keys
- All runtime defaults can be overridden via environment variables
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# Format tables
# ---------------------------------------------------------------------------

BINARY_FORMATS: frozenset[str] = frozenset({"xls", "xlsx"})
"""Formats read and written as raw bytes (spreadsheet containers)."""

EXTENSION_ALIASES: dict[str, str] = {
    "yml": "yaml",
}
"""File extensions that name a format under a different identifier."""

MEDIA_TYPES: dict[str, str] = {
    "cson": "text/plain",
    "csv": "text/csv",
    "hjson": "application/hjson",
    "ini": "text/plain",
    "json": "application/json",
    "json5": "application/json5",
    "toml": "application/toml",
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "xml": "application/xml",
    "yaml": "application/yaml",
}

DEFAULT_MEDIA_TYPE = "application/octet-stream"


def media_type_for(format_name: str) -> str:
    """Return the MIME type used when serving a document of this format."""
    return MEDIA_TYPES.get(format_name, DEFAULT_MEDIA_TYPE)


# ---------------------------------------------------------------------------
# Runtime settings
# ---------------------------------------------------------------------------

DEFAULT_OUTPUT_FORMAT = os.getenv("ANY_JSON_DEFAULT_OUTPUT_FORMAT", "json").strip().lower() or "json"
LOG_LEVEL = os.getenv("ANY_JSON_LOG_LEVEL", "WARNING").upper()

API_HOST = os.getenv("ANY_JSON_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("ANY_JSON_API_PORT", "8000"))
MAX_UPLOAD_BYTES = int(os.getenv("ANY_JSON_MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))
