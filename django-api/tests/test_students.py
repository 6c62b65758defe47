"""Unit tests for the student projection."""

import uuid
from datetime import datetime, timedelta, timezone

from enrollments.domain import (
    Email,
    Enrollment,
    EnrollmentId,
    EnrollmentSource,
    EnrollmentStatus,
    TrainingId,
    TrainingRef,
)
from enrollments.domain.students import project_students

BASE = datetime(2025, 1, 1, tzinfo=timezone.utc)
TRAINING = TrainingId(uuid.uuid4())


def record(email, status, minutes, name="Student", phone="9000000000", training=None):
    return Enrollment(
        id=EnrollmentId(uuid.uuid4()),
        student_name=name,
        email=Email(email),
        phone=phone,
        training_id=TRAINING,
        status=status,
        source=EnrollmentSource.WEBSITE,
        created_at=BASE + timedelta(minutes=minutes),
        updated_at=BASE + timedelta(minutes=minutes),
        training=training,
    )


def test_groups_by_email_with_status_counts():
    students = project_students(
        [
            record("a@x.com", EnrollmentStatus.APPROVED, 1),
            record("a@x.com", EnrollmentStatus.APPROVED, 2),
            record("a@x.com", EnrollmentStatus.PENDING, 3),
            record("b@y.com", EnrollmentStatus.COMPLETED, 4),
        ]
    )

    by_email = {s.email.value: s for s in students}
    assert len(students) == 2
    assert by_email["a@x.com"].total_enrollments == 3
    assert by_email["a@x.com"].approved == 2
    assert by_email["a@x.com"].completed == 0
    assert by_email["b@y.com"].total_enrollments == 1
    assert by_email["b@y.com"].completed == 1


def test_most_recently_enrolled_student_first():
    students = project_students(
        [
            record("old@x.com", EnrollmentStatus.PENDING, 50),
            record("new@x.com", EnrollmentStatus.PENDING, 10),
            record("new@x.com", EnrollmentStatus.PENDING, 90),
        ]
    )

    assert [s.email.value for s in students] == ["new@x.com", "old@x.com"]
    assert students[0].last_enrolled == BASE + timedelta(minutes=90)


def test_contact_details_come_from_latest_enrollment_regardless_of_input_order():
    older = record("a@x.com", EnrollmentStatus.PENDING, 1, name="A. Sharma", phone="111")
    newer = record("a@x.com", EnrollmentStatus.PENDING, 2, name="Anita Sharma", phone="222")

    for ordering in ([older, newer], [newer, older]):
        (student,) = project_students(ordering)
        assert student.student_name == "Anita Sharma"
        assert student.phone == "222"


def test_enrollment_summaries_keep_training_reference():
    ref = TrainingRef(id=TRAINING, title="Saffron Basics", slug="saffron-basics")
    (student,) = project_students(
        [
            record("a@x.com", EnrollmentStatus.APPROVED, 1, training=ref),
            record("a@x.com", EnrollmentStatus.PENDING, 2, training=None),
        ]
    )

    assert [e.status for e in student.enrollments] == [
        EnrollmentStatus.PENDING,
        EnrollmentStatus.APPROVED,
    ]
    assert student.enrollments[0].training is None
    assert student.enrollments[1].training == ref


def test_empty_input():
    assert project_students([]) == []
