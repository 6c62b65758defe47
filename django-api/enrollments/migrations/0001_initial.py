import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Training",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=100)),
                ("slug", models.SlugField(max_length=120, unique=True)),
                ("description", models.TextField()),
                (
                    "level",
                    models.CharField(
                        choices=[
                            ("Beginner", "Beginner"),
                            ("Intermediate", "Intermediate"),
                            ("Advanced", "Advanced"),
                            ("Professional", "Professional"),
                        ],
                        default="Beginner",
                        max_length=20,
                    ),
                ),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("Saffron Cultivation", "Saffron Cultivation"),
                            ("Advanced Techniques", "Advanced Techniques"),
                            ("Business & Marketing", "Business Marketing"),
                            ("R&D", "Research"),
                            ("Custom", "Custom"),
                        ],
                        default="Saffron Cultivation",
                        max_length=40,
                    ),
                ),
                (
                    "mode",
                    models.CharField(
                        choices=[("Offline", "Offline"), ("Online", "Online"), ("Hybrid", "Hybrid")],
                        default="Offline",
                        max_length=20,
                    ),
                ),
                ("language", models.CharField(default="Hindi & English", max_length=100)),
                ("duration", models.CharField(max_length=100)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("original_price", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("max_participants", models.PositiveIntegerField(blank=True, null=True)),
                ("current_enrollments", models.PositiveIntegerField(default=0)),
                ("start_date", models.CharField(blank=True, default="", max_length=50)),
                ("end_date", models.CharField(blank=True, default="", max_length=50)),
                ("instructor", models.CharField(blank=True, default="", max_length=255)),
                ("location", models.CharField(blank=True, default="", max_length=255)),
                ("is_active", models.BooleanField(default=True)),
                ("is_published", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["-created_at"], name="enrollments_created_7d0b1f_idx"),
                    models.Index(fields=["is_active", "is_published"], name="enrollments_is_acti_3c9e2a_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Enrollment",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("student_name", models.CharField(max_length=255)),
                ("email", models.CharField(db_index=True, max_length=254)),
                ("phone", models.CharField(max_length=50)),
                ("whatsapp_number", models.CharField(blank=True, default="", max_length=50)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("approved", "Approved"),
                            ("rejected", "Rejected"),
                            ("completed", "Completed"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                (
                    "source",
                    models.CharField(
                        choices=[
                            ("whatsapp", "Whatsapp"),
                            ("social_media", "Social Media"),
                            ("website", "Website"),
                            ("manual", "Manual"),
                            ("phone", "Phone"),
                            ("referral", "Referral"),
                        ],
                        default="manual",
                        max_length=20,
                    ),
                ),
                ("notes", models.TextField(blank=True, default="")),
                ("admin_notes", models.TextField(blank=True, default="")),
                ("approved_at", models.DateTimeField(blank=True, null=True)),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "enrolled_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="manual_enrollments",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "training",
                    models.ForeignKey(
                        db_constraint=False,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="enrollments",
                        to="enrollments.training",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["-created_at"], name="enrollments_created_a41f6e_idx"),
                    models.Index(fields=["status"], name="enrollments_status_5e8d2c_idx"),
                    models.Index(fields=["training", "status"], name="enrollments_trainin_9b7c40_idx"),
                ],
            },
        ),
    ]
