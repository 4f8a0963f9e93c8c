"""Spreadsheet workbook codecs (xlsx via openpyxl, xls via xlrd/xlwt).

WHY: Spreadsheets are the tabular format most people actually exchange.
A workbook holds several named sheets, each a grid of cells, while most
documents being converted are either one list of records or a mapping of
sheet name to records. This module maps between the two shapes.

HOW: AbstractWorkbookCodec holds everything format-independent:

  encode: value -> [(sheet name, header + value grid)] -> library writer
  decode: library reader -> [(sheet name, cell grid)] -> row-objects

Subclasses only implement ``_read_grids`` and ``_write_grids`` against
their library.

RULES:
- encode accepts a list of row-objects (one sheet, "Sheet1") or a mapping
  of sheet name -> list of row-objects; sheet order follows the mapping
- Single-sheet collapse: a one-sheet workbook decodes to its rows, two or
  more sheets decode to {sheet name: rows}
- First row is the header; blank header cells become "__EMPTY",
  "__EMPTY_1", ...; repeated headers get "_1", "_2" suffixes
- Blank rows are skipped; missing cells are None
- Integral numbers are returned as int; dates as ISO-8601 strings
- Nested values are written as compact JSON text
- Strings are always written as text, even when they start with "="
- Payloads are bytes (see core.formats.encoding_for)
"""

from __future__ import annotations

import datetime
import io
import json
from abc import abstractmethod
from collections.abc import Mapping
from typing import Any, Dict, List, Sequence, Tuple

import openpyxl
import xlrd
import xlwt

from any_json.codecs.base import BaseCodec, Payload
from any_json.core.errors import EncodingError
from any_json.core.values import json_default, to_plain

DEFAULT_SHEET_NAME = "Sheet1"
EMPTY_HEADER = "__EMPTY"

Grid = List[List[Any]]
Sheets = List[Tuple[str, Grid]]


# ---------------------------------------------------------------------------
# Value <-> grid
# ---------------------------------------------------------------------------


def _sheets_from_value(value: Any) -> List[Tuple[str, Sequence[Any]]]:
    if isinstance(value, (list, tuple)):
        return [(DEFAULT_SHEET_NAME, value)]
    if isinstance(value, Mapping):
        sheets = []
        for name, rows in value.items():
            if not isinstance(rows, (list, tuple)):
                raise EncodingError(
                    "Sheet {!r} must be an array of rows, got {}.".format(
                        name, type(rows).__name__
                    )
                )
            sheets.append((str(name), rows))
        return sheets or [(DEFAULT_SHEET_NAME, [])]
    raise EncodingError(
        "Workbook encoding requires an array of rows or an object of sheets."
    )


def _grid_from_rows(sheet_name: str, rows: Sequence[Any]) -> Grid:
    headers: Dict[str, None] = {}
    for index, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise EncodingError(
                "Row {} of sheet {!r} must be an object, got {}.".format(
                    index, sheet_name, type(row).__name__
                )
            )
        for key in row:
            headers.setdefault(str(key), None)
    if not headers:
        return []

    grid: Grid = [list(headers)]
    for row in rows:
        lookup = {str(key): item for key, item in row.items()}
        grid.append([_cell_value(lookup.get(header)) for header in headers])
    return grid


def _cell_value(value: Any) -> Any:
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=json_default)
    return value


def _header_names(cells: Sequence[Any]) -> List[str]:
    names: List[str] = []
    seen: Dict[str, int] = {}
    for cell in cells:
        base = EMPTY_HEADER if cell is None or cell == "" else str(cell)
        count = seen.get(base, 0)
        seen[base] = count + 1
        names.append(base if count == 0 else "{}_{}".format(base, count))
    return names


def _is_blank(row: Sequence[Any]) -> bool:
    return all(cell is None or cell == "" for cell in row)


def _normalize_cell(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return to_plain(value)


def _rows_from_grid(grid: Grid) -> List[Dict[str, Any]]:
    rows = [row for row in grid if not _is_blank(row)]
    if not rows:
        return []

    width = 0
    for row in rows:
        for index, cell in enumerate(row):
            if cell is not None and cell != "":
                width = max(width, index + 1)

    header_cells = list(rows[0][:width]) + [None] * (width - len(rows[0][:width]))
    headers = _header_names(header_cells)

    result = []
    for row in rows[1:]:
        cells = list(row[:width]) + [None] * (width - len(row[:width]))
        result.append(
            {header: _normalize_cell(cell) for header, cell in zip(headers, cells)}
        )
    return result


def _collapse(sheets: Sheets) -> Any:
    decoded = {name: _rows_from_grid(grid) for name, grid in sheets}
    if len(decoded) == 1:
        (rows,) = decoded.values()
        return rows
    return decoded


# ---------------------------------------------------------------------------
# Codecs
# ---------------------------------------------------------------------------


class AbstractWorkbookCodec(BaseCodec):
    """Shared encode/decode flow for spreadsheet formats.

    Subclasses read a workbook into (sheet name, cell grid) pairs and
    write such pairs back out; everything else happens here.
    """

    async def decode(self, text: Payload) -> Any:
        return _collapse(self._read_grids(self.as_bytes(text)))

    async def encode(self, value: Any) -> bytes:
        sheets = [
            (name, _grid_from_rows(name, rows))
            for name, rows in _sheets_from_value(value)
        ]
        return self._write_grids(sheets)

    @abstractmethod
    def _read_grids(self, data: bytes) -> Sheets:
        """Return every sheet of the workbook as (name, rows of cell values)."""

    @abstractmethod
    def _write_grids(self, sheets: Sheets) -> bytes:
        """Write (name, rows of cell values) pairs as a workbook file."""


class XlsxCodec(AbstractWorkbookCodec):
    """Office Open XML workbooks (.xlsx) through openpyxl."""

    @property
    def name(self) -> str:
        return "xlsx"

    def _read_grids(self, data: bytes) -> Sheets:
        book = openpyxl.load_workbook(io.BytesIO(data), read_only=True, data_only=True)
        try:
            return [
                (sheet.title, [list(row) for row in sheet.iter_rows(values_only=True)])
                for sheet in book.worksheets
            ]
        finally:
            book.close()

    def _write_grids(self, sheets: Sheets) -> bytes:
        book = openpyxl.Workbook()
        book.remove(book.active)
        for name, grid in sheets:
            sheet = book.create_sheet(title=name)
            for row_index, row in enumerate(grid, start=1):
                for col_index, value in enumerate(row, start=1):
                    if value is None:
                        continue
                    cell = sheet.cell(row=row_index, column=col_index, value=value)
                    # openpyxl treats a leading "=" as a formula
                    if isinstance(value, str) and value.startswith("="):
                        cell.data_type = "s"

        buffer = io.BytesIO()
        book.save(buffer)
        return buffer.getvalue()


class XlsCodec(AbstractWorkbookCodec):
    """Legacy BIFF8 workbooks (.xls): read with xlrd, written with xlwt."""

    @property
    def name(self) -> str:
        return "xls"

    def _read_grids(self, data: bytes) -> Sheets:
        book = xlrd.open_workbook(file_contents=data)
        try:
            return [
                (
                    sheet.name,
                    [
                        [self._xlrd_value(cell, book.datemode) for cell in sheet.row(index)]
                        for index in range(sheet.nrows)
                    ],
                )
                for sheet in book.sheets()
            ]
        finally:
            book.release_resources()

    @staticmethod
    def _xlrd_value(cell: Any, datemode: int) -> Any:
        if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK, xlrd.XL_CELL_ERROR):
            return None
        if cell.ctype == xlrd.XL_CELL_BOOLEAN:
            return bool(cell.value)
        if cell.ctype == xlrd.XL_CELL_DATE:
            return xlrd.xldate_as_datetime(cell.value, datemode)
        return cell.value

    def _write_grids(self, sheets: Sheets) -> bytes:
        book = xlwt.Workbook(encoding="utf-8")
        for name, grid in sheets:
            sheet = book.add_sheet(name)
            for row_index, row in enumerate(grid):
                for col_index, cell in enumerate(row):
                    if cell is None:
                        continue
                    if isinstance(cell, (datetime.date, datetime.time)):
                        cell = cell.isoformat()
                    sheet.write(row_index, col_index, cell)

        buffer = io.BytesIO()
        book.save(buffer)
        return buffer.getvalue()
