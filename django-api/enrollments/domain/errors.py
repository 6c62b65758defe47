"""Domain error codes for the enrollments module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_ID = "INVALID_ID"
    ENROLLMENT_NOT_FOUND = "ENROLLMENT_NOT_FOUND"
    TRAINING_NOT_FOUND = "TRAINING_NOT_FOUND"
    CAPACITY_FULL = "CAPACITY_FULL"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    ALREADY_APPROVED = "ALREADY_APPROVED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Raised when required input is missing or malformed."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.VALIDATION_ERROR, message=message)


class InvalidIdError(DomainError):
    """Raised when an ID is not a valid UUID."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_ID,
            message="Invalid ID format",
        )


class EnrollmentNotFoundError(DomainError):
    """Raised when an enrollment is not found."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ENROLLMENT_NOT_FOUND,
            message="Enrollment not found",
        )


class TrainingNotFoundError(DomainError):
    """Raised when a training program is not found or not available."""

    def __init__(self, message: str = "Training program not found") -> None:
        super().__init__(code=ErrorCode.TRAINING_NOT_FOUND, message=message)


class CapacityFullError(DomainError):
    """Raised on public submission when every seat is taken."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.CAPACITY_FULL,
            message="This training program is fully booked",
        )


class CapacityExceededError(DomainError):
    """Raised on admin creation when every seat is taken."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.CAPACITY_EXCEEDED,
            message="Training program is full",
        )


class AlreadyApprovedError(DomainError):
    """Raised when approving an enrollment that is already approved."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ALREADY_APPROVED,
            message="Enrollment is already approved",
        )
