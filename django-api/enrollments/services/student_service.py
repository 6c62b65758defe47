"""Student roll-up over enrollments."""

from enrollments.domain import EnrollmentFilter, Page, Pagination, StudentView
from enrollments.domain.students import project_students
from enrollments.stores.interfaces import EnrollmentStore


class StudentService:
    """Service for the derived student view."""

    def __init__(self, store: EnrollmentStore) -> None:
        self._store = store

    def list_students(self, search: str, pagination: Pagination) -> Page[StudentView]:
        """Return a page of students, most recently enrolled first.

        Nothing is cached: every call regroups all enrollments matching `search`.
        """
        matched = self._store.list_enrollments(EnrollmentFilter(search=search.strip()))
        students = project_students(matched.items)
        window = students[pagination.offset : pagination.offset + pagination.limit]
        return Page(items=tuple(window), total=len(students), pagination=pagination)
