"""Read-model projection from enrollments to students.

Students are never stored. They are enrollments grouped by email, recomputed
on every query.
"""

from collections.abc import Iterable

from enrollments.domain.models import (
    Enrollment,
    EnrollmentStatus,
    EnrollmentSummary,
    StudentView,
)


def _newest_first(enrollment: Enrollment) -> tuple:
    return (enrollment.created_at, str(enrollment.id))


def project_students(enrollments: Iterable[Enrollment]) -> list[StudentView]:
    """Group enrollments by email, most recently active student first.

    Contact details come from the student's most recent enrollment, so a
    changed name or phone number wins over older submissions.
    """
    groups: dict[str, list[Enrollment]] = {}
    for enrollment in sorted(enrollments, key=_newest_first, reverse=True):
        groups.setdefault(enrollment.email.value, []).append(enrollment)

    students = []
    for records in groups.values():
        latest = records[0]
        students.append(
            StudentView(
                email=latest.email,
                student_name=latest.student_name,
                phone=latest.phone,
                whatsapp_number=latest.whatsapp_number,
                total_enrollments=len(records),
                approved=sum(
                    1 for r in records if r.status is EnrollmentStatus.APPROVED
                ),
                completed=sum(
                    1 for r in records if r.status is EnrollmentStatus.COMPLETED
                ),
                last_enrolled=latest.created_at,
                enrollments=tuple(
                    EnrollmentSummary(
                        id=r.id,
                        training_id=r.training_id,
                        status=r.status,
                        source=r.source,
                        created_at=r.created_at,
                        training=r.training,
                    )
                    for r in records
                ),
            )
        )

    # Stable sort keeps email groups with equal timestamps in newest-id order.
    students.sort(key=lambda s: s.last_enrolled, reverse=True)
    return students
