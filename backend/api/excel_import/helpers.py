# Cell-level cleaning helpers shared by the roster importers
import re
from datetime import datetime, date, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any

import pandas as pd

EXCEL_EPOCH = datetime(1899, 12, 30)


def is_blank(val: Any) -> bool:
    if val is None:
        return True
    if isinstance(val, str):
        return val.strip() == ""
    try:
        return bool(pd.isna(val))
    except (TypeError, ValueError):
        return False


def cell_text(val: Any) -> str:
    """Render a spreadsheet cell as a stripped string ('' for empty cells).

    Integral floats lose their trailing ``.0`` so roll numbers and phone
    numbers typed as numbers in Excel come through as ``"101"``.
    """
    if is_blank(val):
        return ""
    if isinstance(val, bool):
        return str(val).lower()
    if isinstance(val, float) and val.is_integer():
        return str(int(val))
    return str(val).strip()


def parse_excel_date(val: Any):
    """Parse a spreadsheet date cell into a ``date`` (or None).

    Accepts date/datetime/Timestamp objects, Excel serial numbers and the
    usual Y-m-d, d-m-Y, d/m/Y, m/d/Y spellings.
    """
    if is_blank(val):
        return None
    if isinstance(val, pd.Timestamp):
        return val.to_pydatetime().date()
    if isinstance(val, datetime):
        return val.date()
    if isinstance(val, date):
        return val
    if isinstance(val, (int, float)) and not isinstance(val, bool):
        # Excel serial day numbers (anything after ~1968)
        if val > 25000:
            return (EXCEL_EPOCH + timedelta(days=int(val))).date()
        return None
    sval = str(val).strip()
    # ISO timestamps like 2024-04-01T00:00:00
    sval = sval.split("T")[0].split(" ")[0]
    for fmt in ("%Y-%m-%d", "%d-%m-%Y", "%d/%m/%Y", "%Y/%m/%d", "%m/%d/%Y", "%d.%m.%Y"):
        try:
            return datetime.strptime(sval, fmt).date()
        except ValueError:
            continue
    return None


def parse_number(val: Any, default=Decimal("0")) -> Decimal:
    """Numeric cell to Decimal; unparseable input yields ``default``."""
    text = cell_text(val).replace(",", "")
    if not text:
        return default
    try:
        number = Decimal(text)
    except InvalidOperation:
        return default
    if not number.is_finite():
        return default
    return number


def parse_int(val: Any, default=0) -> int:
    number = parse_number(val, default=None)
    if number is None:
        return default
    return int(number)


def split_list(val: Any) -> list:
    """Comma-separated cell to a list of trimmed, non-empty items."""
    text = cell_text(val)
    if not text:
        return []
    return [item.strip() for item in text.split(",") if item.strip()]


def clean_name_part(val: Any) -> str:
    """Lowercase and keep only a-z / 0-9 (``"O'Brien"`` -> ``"obrien"``)."""
    return re.sub(r"[^a-z0-9]", "", cell_text(val).lower())
