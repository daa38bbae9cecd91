"""Read an uploaded roster file into header-keyed row dicts.

CSV files go through ``pandas.read_csv``; anything else is treated as an
Excel workbook and only its first sheet is read. The first row is always the
header row. Header cells carry inline hints in the templates, e.g.
``"rollNumber (REQUIRED, must be unique)"``; only the text before the first
parenthesis is used as the field name. Values in columns past the last
header cell are ignored.
"""
import csv
import logging
import os
import re
from datetime import date, datetime

import pandas as pd

from .helpers import cell_text, is_blank

logger = logging.getLogger(__name__)

# Instruction lines in the downloadable templates; they never count as data
INSTRUCTION_RE = re.compile(r"\b(IMPORTANT|NOTE|INSTRUCTIONS?)\b", re.IGNORECASE)

IDENTITY_FIELDS = ("firstName", "lastName", "email")
# A row carrying one of these is a person record, whatever its wording
KEY_FIELDS = ("rollNumber", "employeeId")

CSV_DIALECT = {"quotechar": '"', "escapechar": "\\", "skipinitialspace": True}

NO_DATA_ROWS = "File must contain a header row and at least one data row"


class ImportFileError(Exception):
    """The upload cannot be read as a roster; nothing was imported."""


def header_name(raw) -> str:
    return cell_text(raw).split("(", 1)[0].strip()


def _csv_width(path: str) -> int:
    with open(path, newline="", encoding="utf-8") as fh:
        return max((len(fields) for fields in csv.reader(fh, **CSV_DIALECT)), default=0)


def _read_frame(path: str) -> pd.DataFrame:
    ext = os.path.splitext(path)[1].lower()
    if ext == ".csv":
        width = _csv_width(path)
        if not width:
            raise pd.errors.EmptyDataError("No columns to parse from file")
        # rows may be wider than the header line (e.g. a trailing comma)
        return pd.read_csv(
            path,
            header=None,
            names=list(range(width)),
            dtype=str,
            keep_default_na=False,
            na_values=[""],
            skip_blank_lines=True,
            encoding="utf-8",
            **CSV_DIALECT,
        )
    return pd.read_excel(path, sheet_name=0, header=None)


def _header_span(raw_headers: list) -> range:
    """Column positions that belong to the table.

    Empty columns before the first header cell are margin and dropped; the
    span ends at the last non-empty header cell.
    """
    filled = [pos for pos, raw in enumerate(raw_headers) if not is_blank(raw)]
    if not filled:
        raise ImportFileError(NO_DATA_ROWS)
    return range(filled[0], filled[-1] + 1)


def _cell_value(val):
    if isinstance(val, pd.Timestamp):
        return val.to_pydatetime().date()
    if isinstance(val, datetime):
        return val.date()
    if isinstance(val, date):
        return val
    return cell_text(val)


def _is_instruction(val) -> bool:
    return isinstance(val, str) and bool(INSTRUCTION_RE.search(val))


def _is_data_row(row: dict) -> bool:
    keyed = any(not is_blank(row.get(field)) for field in KEY_FIELDS)
    meaningful = [v for v in row.values() if not is_blank(v) and (keyed or not _is_instruction(v))]
    if not meaningful:
        return False
    return any(not is_blank(row.get(field)) for field in IDENTITY_FIELDS)


def parse_upload(path: str) -> list:
    """Return the data rows of ``path`` as ``[{header: value}, ...]``.

    Raises ImportFileError for a missing/unreadable file, a file without a
    header plus at least one data row, or an empty header cell anywhere
    between the first and last header. A blank header is fatal even when
    its column holds no data.
    """
    if not path or not os.path.exists(path):
        raise ImportFileError("File not found. Please upload the file again.")

    try:
        frame = _read_frame(path)
    except pd.errors.EmptyDataError:
        raise ImportFileError(NO_DATA_ROWS)
    except Exception as exc:
        logger.warning("Could not parse upload %s: %s", path, exc)
        raise ImportFileError(f"Error parsing file: {exc}") from exc

    # all-empty rows (formatted but blank spreadsheet cells)
    frame = frame.dropna(how="all")
    if len(frame.index) < 2:
        raise ImportFileError(NO_DATA_ROWS)

    raw_headers = list(frame.iloc[0])
    span = _header_span(raw_headers)
    leading = frame.iloc[:, :span.start]
    if leading.notna().to_numpy().any():
        # data under a blank leading header
        span = range(0, span.stop)

    headers = []
    for pos in span:
        name = header_name(raw_headers[pos])
        if not name:
            raise ImportFileError(f"Empty column header in column {pos + 1}")
        headers.append(name)

    rows = []
    table = frame.iloc[1:, span.start:span.stop]
    for values in table.itertuples(index=False, name=None):
        row = {header: _cell_value(val) for header, val in zip(headers, values)}
        if _is_data_row(row):
            rows.append(row)

    if not rows:
        raise ImportFileError("The uploaded file contains no data")
    return rows
