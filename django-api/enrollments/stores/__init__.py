from enrollments.stores.interfaces import EnrollmentStore, TrainingStore, UnitOfWork

__all__ = ["EnrollmentStore", "TrainingStore", "UnitOfWork"]
