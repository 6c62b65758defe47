"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
"""

import uuid

from django.conf import settings
from django.db import models


class Training(models.Model):
    """Persistence model for training programs."""

    class Level(models.TextChoices):
        BEGINNER = "Beginner"
        INTERMEDIATE = "Intermediate"
        ADVANCED = "Advanced"
        PROFESSIONAL = "Professional"

    class Category(models.TextChoices):
        SAFFRON_CULTIVATION = "Saffron Cultivation"
        ADVANCED_TECHNIQUES = "Advanced Techniques"
        BUSINESS_MARKETING = "Business & Marketing"
        RESEARCH = "R&D"
        CUSTOM = "Custom"

    class Mode(models.TextChoices):
        OFFLINE = "Offline"
        ONLINE = "Online"
        HYBRID = "Hybrid"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=100)
    slug = models.SlugField(max_length=120, unique=True)
    description = models.TextField()
    level = models.CharField(max_length=20, choices=Level.choices, default=Level.BEGINNER)
    category = models.CharField(
        max_length=40, choices=Category.choices, default=Category.SAFFRON_CULTIVATION
    )
    mode = models.CharField(max_length=20, choices=Mode.choices, default=Mode.OFFLINE)
    language = models.CharField(max_length=100, default="Hindi & English")
    duration = models.CharField(max_length=100)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    original_price = models.DecimalField(
        max_digits=10, decimal_places=2, blank=True, null=True
    )
    max_participants = models.PositiveIntegerField(blank=True, null=True)
    current_enrollments = models.PositiveIntegerField(default=0)
    start_date = models.CharField(max_length=50, blank=True, default="")
    end_date = models.CharField(max_length=50, blank=True, default="")
    instructor = models.CharField(max_length=255, blank=True, default="")
    location = models.CharField(max_length=255, blank=True, default="")
    is_active = models.BooleanField(default=True)
    is_published = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="enrollments_created_7d0b1f_idx"),
            models.Index(
                fields=["is_active", "is_published"], name="enrollments_is_acti_3c9e2a_idx"
            ),
        ]

    def __str__(self) -> str:
        return self.title


class Enrollment(models.Model):
    """Persistence model for enrollment requests."""

    class Status(models.TextChoices):
        PENDING = "pending"
        APPROVED = "approved"
        REJECTED = "rejected"
        COMPLETED = "completed"

    class Source(models.TextChoices):
        WHATSAPP = "whatsapp"
        SOCIAL_MEDIA = "social_media"
        WEBSITE = "website"
        MANUAL = "manual"
        PHONE = "phone"
        REFERRAL = "referral"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    student_name = models.CharField(max_length=255)
    email = models.CharField(max_length=254, db_index=True)
    phone = models.CharField(max_length=50)
    whatsapp_number = models.CharField(max_length=50, blank=True, default="")
    # Enrollments outlive their program; a deleted program resolves to None.
    training = models.ForeignKey(
        Training,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="enrollments",
    )
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    source = models.CharField(max_length=20, choices=Source.choices, default=Source.MANUAL)
    notes = models.TextField(blank=True, default="")
    admin_notes = models.TextField(blank=True, default="")
    enrolled_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name="manual_enrollments",
    )
    approved_at = models.DateTimeField(blank=True, null=True)
    completed_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="enrollments_created_a41f6e_idx"),
            models.Index(fields=["status"], name="enrollments_status_5e8d2c_idx"),
            models.Index(
                fields=["training", "status"], name="enrollments_trainin_9b7c40_idx"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.student_name} - {self.status}"
