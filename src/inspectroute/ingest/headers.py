"""Header-row extraction from uploaded CSV/XLSX inspection exports."""

from __future__ import annotations

import csv
import io
import logging
import zipfile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from inspectroute.core.exceptions import UnreadableFileError

logger = logging.getLogger(__name__)

EXCEL_SUFFIXES = (".xlsx", ".xlsm")


def parse_csv_headers(content: str) -> list[str]:
    """First record of a CSV, with cells trimmed and empty cells dropped.

    Quoted cells may hold commas, escaped quotes and line breaks.
    """
    try:
        first_row = next(csv.reader(io.StringIO(content, newline="")), [])
    except csv.Error as exc:
        raise UnreadableFileError(f"Malformed CSV header row: {exc}") from exc
    return [cell.strip() for cell in first_row if cell.strip()]


def _read_xlsx_headers(data: bytes) -> list[str]:
    try:
        workbook = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, OSError, KeyError, ValueError) as exc:
        raise UnreadableFileError(f"Could not open workbook: {exc}") from exc

    try:
        sheet = workbook.worksheets[0]
        first_row = next(sheet.iter_rows(max_row=1, values_only=True), None)
    finally:
        workbook.close()

    if not first_row:
        return []
    return [str(cell).strip() for cell in first_row if cell is not None and str(cell).strip()]


def read_headers(filename: str, data: bytes) -> list[str]:
    """Header row of an uploaded export, chosen by file extension."""
    if filename.lower().endswith(EXCEL_SUFFIXES):
        headers = _read_xlsx_headers(data)
    else:
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise UnreadableFileError(f"{filename!r} is not UTF-8 text") from exc
        headers = parse_csv_headers(text)

    logger.debug("Read %d headers from %s", len(headers), filename)
    return headers
