"""Exception hierarchy for decode/encode failures.

WHY: Callers (CLI, HTTP service, library users) need to tell apart "no
format given", "format not supported", "the input is malformed" and "the
value cannot be written in that format". Each gets its own type so
handlers can map them to exit codes or HTTP statuses.

HOW: All errors derive from ConversionError. DecodeError keeps the
library's original exception as ``cause`` (and as ``__cause__`` when
raised with ``from``).

RULES:
- Never raised for partial success; a failure means no result at all
- DecodeError is about malformed external input
- EncodingError is about a value that breaks a codec's contract
"""

from __future__ import annotations


class ConversionError(Exception):
    """Base class for every error raised by decode/encode."""


class MissingFormatError(ConversionError):
    """Raised when no format identifier was supplied (or it was just a dot)."""

    def __init__(self) -> None:
        super().__init__("Missing format!")


class UnknownFormatError(ConversionError):
    """Raised when a format identifier has no registered codec.

    RULES:
    - ``format_name`` is the identifier exactly as the caller supplied it
    """

    def __init__(self, format_name: str) -> None:
        self.format_name = format_name
        super().__init__("Unknown format {}!".format(format_name))


class DecodeError(ConversionError):
    """Raised when a codec's library rejects the input text.

    WHY: The facade never reinterprets library errors; it only tags them
    with the format so the message says what was being parsed. The
    library's own message (usually with line/column) is kept verbatim.
    """

    def __init__(self, format_name: str, cause: BaseException) -> None:
        self.format_name = format_name
        self.cause = cause
        super().__init__("Could not decode {}: {}".format(format_name, cause))


class EncodingError(ConversionError):
    """Raised when a value cannot be encoded in the requested format.

    Examples: CSV given a non-array, TOML given a top-level array.
    """
