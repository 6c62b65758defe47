from enrollments.services.enrollment_service import EnrollmentService
from enrollments.services.seat_ledger import SeatLedger
from enrollments.services.student_service import StudentService
from enrollments.services.training_service import TrainingService

__all__ = ["EnrollmentService", "SeatLedger", "StudentService", "TrainingService"]
