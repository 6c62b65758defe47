"""CSV export of enrollments."""

import csv
import io
from collections.abc import Iterable
from datetime import datetime

from enrollments.domain import Enrollment

CSV_HEADERS = (
    "Student Name",
    "Email",
    "Phone",
    "WhatsApp",
    "Training",
    "Status",
    "Source",
    "Notes",
    "Admin Notes",
    "Enrolled By",
    "Created At",
    "Approved At",
    "Completed At",
)


def _date(value: datetime | None) -> str:
    return value.date().isoformat() if value else ""


def enrollment_row(enrollment: Enrollment) -> list[str]:
    return [
        enrollment.student_name,
        enrollment.email.value,
        enrollment.phone,
        enrollment.whatsapp_number,
        enrollment.training.title if enrollment.training else "",
        enrollment.status.value,
        enrollment.source.value,
        enrollment.notes,
        enrollment.admin_notes,
        enrollment.enrolled_by.name if enrollment.enrolled_by else "",
        _date(enrollment.created_at),
        _date(enrollment.approved_at),
        _date(enrollment.completed_at),
    ]


def write_enrollments_csv(enrollments: Iterable[Enrollment]) -> str:
    """Render enrollments as CSV with a header row.

    Values containing a comma, quote or newline are quoted, quotes doubled.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    writer.writerows(enrollment_row(e) for e in enrollments)
    return buffer.getvalue()
