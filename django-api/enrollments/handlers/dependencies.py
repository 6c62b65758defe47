"""Wire services to the Django stores."""

from django.db import transaction

from enrollments.cache import invalidate_training
from enrollments.domain import TrainingId
from enrollments.services import EnrollmentService, SeatLedger, StudentService, TrainingService
from enrollments.stores.django_store import (
    DjangoEnrollmentStore,
    DjangoTrainingStore,
    DjangoUnitOfWork,
)


def _seat_ledger(trainings: DjangoTrainingStore) -> SeatLedger:
    def on_change(training_id: TrainingId) -> None:
        training = trainings.get_training(training_id)
        slugs = (training.slug,) if training else ()
        # Deferred until commit; dropped on rollback.
        transaction.on_commit(lambda: invalidate_training(str(training_id), slugs))

    return SeatLedger(trainings, on_change=on_change)


def enrollment_service() -> EnrollmentService:
    trainings = DjangoTrainingStore()
    return EnrollmentService(
        DjangoEnrollmentStore(trainings),
        trainings,
        DjangoUnitOfWork,
        ledger=_seat_ledger(trainings),
    )


def student_service() -> StudentService:
    return StudentService(DjangoEnrollmentStore())


def training_service() -> TrainingService:
    trainings = DjangoTrainingStore()
    return TrainingService(trainings, DjangoEnrollmentStore(trainings))
