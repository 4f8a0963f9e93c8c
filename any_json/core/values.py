"""The structured value model shared by every codec.

WHY: Decoders and encoders never talk to each other directly; they meet
at one in-memory representation with the same shape as a JSON document.
Keeping that model explicit (and normalized) means a value produced by
any decoder can be handed to any encoder.

HOW: StructuredValue is a type alias over plain Python containers and
scalars. ``to_plain`` rebuilds library-specific containers (OrderedDict,
tuples, mapping subclasses) as plain dicts and lists, keeping key order,
and renders the date/time objects some parsers produce (YAML, TOML,
spreadsheets) as ISO-8601 strings. ``json_default`` does the same for
values handed straight to an encoder.

RULES:
- Mapping keys are strings; insertion order is significant
- Codecs return plain dict/list trees, never library container types
- Decoded values never contain date/time objects
- Workbook = sheet name -> list of row-objects
"""

from __future__ import annotations

import datetime
from collections.abc import Mapping
from typing import Any, Dict, List, Union

StructuredValue = Union[
    None,
    bool,
    int,
    float,
    str,
    List["StructuredValue"],
    Dict[str, "StructuredValue"],
]

Row = Dict[str, Any]
Workbook = Dict[str, List[Row]]


_TEMPORAL = (datetime.datetime, datetime.date, datetime.time)


def to_plain(value: Any) -> Any:
    """Rebuild ``value`` from plain dicts, lists and scalars, preserving order.

    Dates and times become ISO-8601 strings.
    """
    if isinstance(value, Mapping):
        return {str(key): to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    if isinstance(value, _TEMPORAL):
        return value.isoformat()
    return value


def json_default(value: Any) -> Any:
    """``default=`` hook for json.dumps: dates and times become ISO strings."""
    if isinstance(value, _TEMPORAL):
        return value.isoformat()
    raise TypeError(
        "Object of type {} is not JSON serializable".format(type(value).__name__)
    )
