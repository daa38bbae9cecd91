"""Bulk roster import (students, teachers, admin staff, support staff)."""
from .parser import ImportFileError, parse_upload  # noqa: F401
from .pipeline import ImportResult, import_file, import_rows, store_upload  # noqa: F401
