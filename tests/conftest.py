"""Shared test fixtures for the any_json test suite.

WHY: Most codec and CLI tests convert the same small product catalogue,
which exercises strings, numbers, arrays and nested objects in one
document. Centralizing it here keeps every test on the same data.

HOW: Pytest fixtures return fresh copies of the catalogue and of a flat,
string-only table that survives the tabular formats unchanged. Tests
drive the async facade with asyncio.run.

RULES:
- PRODUCT_SET contains only JSON-compatible values (no dates)
- FLAT_ROWS values are strings, so CSV round-trips are exact
"""

import copy
from typing import Any, Dict, List

import pytest

from any_json import Converter
from any_json.codecs import build_registry


# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------

PRODUCT_SET: List[Dict[str, Any]] = [
    {
        "id": 2,
        "name": "An ice sculpture",
        "price": 12.5,
        "tags": ["cold", "ice"],
        "dimensions": {"length": 7.0, "width": 12.0, "height": 9.5},
        "warehouseLocation": {"latitude": -78.75, "longitude": 20.4},
    },
    {
        "id": 3,
        "name": "A blue mouse",
        "price": 25.5,
        "dimensions": {"length": 3.1, "width": 1.0, "height": 1.0},
        "warehouseLocation": {"latitude": 54.4, "longitude": -32.7},
    },
]

FLAT_ROWS: List[Dict[str, str]] = [
    {"id": "1", "name": "A", "city": "Oslo"},
    {"id": "2", "name": "B", "city": "Bergen"},
]


@pytest.fixture
def product_set():
    """The product catalogue as a fresh list of nested objects."""
    return copy.deepcopy(PRODUCT_SET)


@pytest.fixture
def flat_rows():
    """A small string-only table."""
    return copy.deepcopy(FLAT_ROWS)


@pytest.fixture
def converter():
    """A converter over a freshly built registry of every bundled codec."""
    return Converter(build_registry())
