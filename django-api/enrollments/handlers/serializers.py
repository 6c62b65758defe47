"""Serializers for transforming domain models to API responses and parsing input.

Field names follow the public JSON contract (camelCase); `source` maps them
onto the snake_case domain attributes.
"""

from rest_framework import serializers

from enrollments.models import Training as TrainingModel


class TrainingRefSerializer(serializers.Serializer):
    """Serializer for TrainingRef domain model."""

    id = serializers.CharField()
    title = serializers.CharField()
    slug = serializers.CharField()


class AdminRefSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    email = serializers.CharField()


class TrainingSerializer(serializers.Serializer):
    """Serializer for Training domain model."""

    id = serializers.CharField()
    title = serializers.CharField()
    slug = serializers.CharField()
    description = serializers.CharField()
    level = serializers.CharField()
    category = serializers.CharField()
    mode = serializers.CharField()
    language = serializers.CharField()
    duration = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2, coerce_to_string=False)
    originalPrice = serializers.DecimalField(
        source="original_price", max_digits=10, decimal_places=2, coerce_to_string=False
    )
    maxParticipants = serializers.SerializerMethodField()
    currentEnrollments = serializers.IntegerField(source="current_enrollments")
    seatsLeft = serializers.IntegerField(source="seats_left")
    startDate = serializers.CharField(source="start_date")
    endDate = serializers.CharField(source="end_date")
    instructor = serializers.CharField()
    location = serializers.CharField()
    isActive = serializers.BooleanField(source="is_active")
    isPublished = serializers.BooleanField(source="is_published")
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")

    def get_maxParticipants(self, obj) -> int | None:
        return obj.max_participants.value or None


class EnrollmentSerializer(serializers.Serializer):
    """Serializer for Enrollment domain model."""

    id = serializers.CharField()
    studentName = serializers.CharField(source="student_name")
    email = serializers.CharField()
    phone = serializers.CharField()
    whatsappNumber = serializers.CharField(source="whatsapp_number")
    trainingId = TrainingRefSerializer(source="training", allow_null=True)
    status = serializers.CharField(source="status.value")
    source = serializers.CharField(source="source.value")
    notes = serializers.CharField()
    adminNotes = serializers.CharField(source="admin_notes")
    enrolledBy = AdminRefSerializer(source="enrolled_by", allow_null=True)
    approvedAt = serializers.DateTimeField(source="approved_at")
    completedAt = serializers.DateTimeField(source="completed_at")
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")


class EnrollmentSummarySerializer(serializers.Serializer):
    id = serializers.CharField()
    trainingId = TrainingRefSerializer(source="training", allow_null=True)
    status = serializers.CharField(source="status.value")
    source = serializers.CharField(source="source.value")
    createdAt = serializers.DateTimeField(source="created_at")


class StudentSerializer(serializers.Serializer):
    """Serializer for the derived StudentView."""

    id = serializers.CharField(source="email")
    studentName = serializers.CharField(source="student_name")
    email = serializers.CharField()
    phone = serializers.CharField()
    whatsappNumber = serializers.CharField(source="whatsapp_number")
    totalEnrollments = serializers.IntegerField(source="total_enrollments")
    approved = serializers.IntegerField()
    completed = serializers.IntegerField()
    lastEnrolled = serializers.DateTimeField(source="last_enrolled")
    enrollments = EnrollmentSummarySerializer(many=True)


class EnrollmentStatsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    pending = serializers.IntegerField()
    approved = serializers.IntegerField()
    completed = serializers.IntegerField()


class TrainingStatsSerializer(serializers.Serializer):
    totalTrainings = serializers.IntegerField(source="total_trainings")
    activeTrainings = serializers.IntegerField(source="active_trainings")
    totalEnrollments = serializers.IntegerField(source="total_enrollments")
    pendingEnrollments = serializers.IntegerField(source="pending_enrollments")


def _text(**kwargs):
    return serializers.CharField(required=False, allow_blank=True, allow_null=True, **kwargs)


class EnrollmentInputSerializer(serializers.Serializer):
    """Request body for enrollment create/update.

    Only formats are checked here; required fields are enforced by the service.
    """

    studentName = _text(source="student_name")
    email = _text()
    phone = _text()
    whatsappNumber = _text(source="whatsapp_number")
    trainingId = _text(source="training_id")
    status = _text()
    source = _text()
    notes = _text()
    adminNotes = _text(source="admin_notes")


class TransitionInputSerializer(serializers.Serializer):
    adminNotes = _text(source="admin_notes")


class TrainingInputSerializer(serializers.Serializer):
    """Request body for training create/update. currentEnrollments is not accepted."""

    title = serializers.CharField(required=False, max_length=100)
    description = serializers.CharField(required=False)
    level = serializers.ChoiceField(choices=TrainingModel.Level.choices, required=False)
    category = serializers.ChoiceField(choices=TrainingModel.Category.choices, required=False)
    mode = serializers.ChoiceField(choices=TrainingModel.Mode.choices, required=False)
    language = serializers.CharField(required=False)
    duration = serializers.CharField(required=False)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    originalPrice = serializers.DecimalField(
        source="original_price",
        max_digits=10,
        decimal_places=2,
        required=False,
        allow_null=True,
    )
    maxParticipants = serializers.IntegerField(
        source="max_participants", min_value=0, required=False, allow_null=True
    )
    startDate = serializers.CharField(source="start_date", required=False, allow_blank=True)
    endDate = serializers.CharField(source="end_date", required=False, allow_blank=True)
    instructor = serializers.CharField(required=False, allow_blank=True)
    location = serializers.CharField(required=False, allow_blank=True)
    isActive = serializers.BooleanField(source="is_active", required=False)
    isPublished = serializers.BooleanField(source="is_published", required=False)
