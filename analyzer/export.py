# analyzer/export.py
"""
CSV export of a finding sequence.

- One fixed header row plus one row per record, in the order given; no filtering here.
- Rows are separated by "\n"; the last row has no trailing newline.
- Every field is double-quoted and embedded quotes are doubled. Newlines inside
  text fields are kept verbatim inside the quotes.
"""

import csv
import io
from datetime import date, datetime, timezone
from typing import Iterable, List, Optional

from config import CSV_COLUMNS, CSV_FILENAME_PREFIX
from models import Record


def compliance_cell(record: Record) -> str:
    """Render the compliance map as "key: v1, v2; key2: v3"."""
    if not record.compliance:
        return ""
    entries = []
    for key, values in record.compliance.items():
        text = values if isinstance(values, str) else ", ".join(values)
        entries.append(f"{key}: {text}")
    return "; ".join(entries)


def record_to_row(record: Record) -> List[str]:
    return [
        record.status_code or "",
        record.severity or "",
        record.service_name or "",
        record.region or "",
        record.title or "",
        record.description or "",
        record.resource_id or "",
        compliance_cell(record),
    ]


def to_csv(records: Iterable[Record]) -> bytes:
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for record in records:
        writer.writerow(record_to_row(record))
    # rows are joined by "\n" with no terminator after the last one
    return buf.getvalue()[:-1].encode("utf-8")


def csv_filename(day: Optional[date] = None) -> str:
    """security_report_<YYYY-MM-DD>.csv, dated today (UTC) unless a day is given."""
    day = day or datetime.now(timezone.utc).date()
    return f"{CSV_FILENAME_PREFIX}_{day.isoformat()}.csv"
