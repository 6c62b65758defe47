"""Capacity accounting.

Every change to a program's seat counter goes through SeatLedger.apply, so
the rules deciding when a seat is taken or released live in one place
(enrollments.domain.lifecycle.seat_delta) and are applied in one place.
"""

import logging
from collections.abc import Callable

from enrollments.domain import Training, TrainingId
from enrollments.stores.interfaces import TrainingStore

logger = logging.getLogger(__name__)


class SeatLedger:
    """Applies seat deltas to training programs."""

    def __init__(
        self,
        store: TrainingStore,
        on_change: Callable[[TrainingId], None] | None = None,
    ) -> None:
        self._store = store
        self._on_change = on_change

    @staticmethod
    def has_room(training: Training) -> bool:
        return training.max_participants.has_room(training.current_enrollments)

    def apply(self, training_id: TrainingId, delta: int) -> None:
        if delta == 0:
            return
        self._store.adjust_enrollments(training_id, delta)
        logger.debug("Seat counter of training %s adjusted by %+d", training_id, delta)
        if self._on_change is not None:
            self._on_change(training_id)
