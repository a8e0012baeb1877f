"""CSV export of job applications."""

from __future__ import annotations

import csv
import io
import logging
from datetime import date
from typing import Iterable, Optional

from api.services.application_store import ApplicationRecord

logger = logging.getLogger(__name__)

# Column order for the exported CSV
COLUMNS = [
    "Company",
    "Position",
    "Location",
    "Status",
    "Priority",
    "Applied Date",
    "Deadline",
    "Salary",
    "Job Type",
    "Work Location",
]


def _format_date(value: Optional[date]) -> str:
    return value.isoformat() if value else ""


def _enum_value(value) -> str:
    return value.value if value is not None else ""


def application_to_row(record: ApplicationRecord) -> dict:
    return {
        "Company": record.company,
        "Position": record.position,
        "Location": record.location or "",
        "Status": record.status.value,
        "Priority": record.priority.value,
        "Applied Date": _format_date(record.applied_date),
        "Deadline": _format_date(record.deadline),
        "Salary": record.salary or "",
        "Job Type": _enum_value(record.job_type),
        "Work Location": _enum_value(record.work_location),
    }


def render_csv(records: Iterable[ApplicationRecord]) -> str:
    """Serialise applications to CSV text with every field quoted."""

    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=COLUMNS, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writeheader()
    count = 0
    for record in records:
        writer.writerow(application_to_row(record))
        count += 1
    logger.info("Exported %d applications to CSV", count)
    return buffer.getvalue()


def export_filename(today: Optional[date] = None) -> str:
    return f"job-applications-{(today or date.today()).isoformat()}.csv"
