# landing_api/services/export.py
import csv
import io
from typing import Iterable

from landing_api.db.models.inquiry import INQUIRY_COLUMNS, Inquiry


def inquiries_to_csv(rows: Iterable[Inquiry]) -> str:
    """
    Header line is always the fixed column set, even for zero rows.
    Data fields are all quoted, inner quotes doubled (RFC 4180).
    """
    buf = io.StringIO()
    buf.write(",".join(INQUIRY_COLUMNS) + "\n")

    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for row in rows:
        writer.writerow(["" if getattr(row, col) is None else getattr(row, col) for col in INQUIRY_COLUMNS])
    return buf.getvalue()
