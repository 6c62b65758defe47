from django import forms
from django.contrib import admin, messages

from enrollments.domain import Email
from enrollments.domain.errors import DomainError
from enrollments.handlers import dependencies
from enrollments.models import Enrollment, Training


class EnrollmentInline(admin.TabularInline):
    model = Enrollment
    fk_name = "training"
    extra = 0
    fields = ["student_name", "email", "phone", "status", "source", "created_at"]
    readonly_fields = fields
    can_delete = False
    show_change_link = True


@admin.register(Training)
class TrainingAdmin(admin.ModelAdmin):
    list_display = [
        "title",
        "category",
        "max_participants",
        "current_enrollments",
        "is_active",
        "is_published",
        "created_at",
    ]
    list_filter = ["category", "mode", "level", "is_active", "is_published"]
    search_fields = ["title", "description"]
    prepopulated_fields = {"slug": ("title",)}
    # The seat counter is owned by the enrollment lifecycle.
    readonly_fields = ["current_enrollments"]
    inlines = [EnrollmentInline]


def _transition(label, method_name):
    @admin.action(description=f"{label} selected enrollments")
    def action(modeladmin, request, queryset):
        service = dependencies.enrollment_service()
        done = 0
        for pk in queryset.values_list("pk", flat=True):
            try:
                getattr(service, method_name)(str(pk))
                done += 1
            except DomainError as exc:
                modeladmin.message_user(request, f"{pk}: {exc.message}", messages.WARNING)
        modeladmin.message_user(request, f"{label}: {done} enrollment(s) updated")

    action.__name__ = method_name
    return action


class EnrollmentAdminForm(forms.ModelForm):
    class Meta:
        model = Enrollment
        fields = "__all__"

    def clean_email(self):
        try:
            return Email(self.cleaned_data["email"]).value
        except ValueError as exc:
            raise forms.ValidationError(str(exc)) from None


@admin.register(Enrollment)
class EnrollmentAdmin(admin.ModelAdmin):
    form = EnrollmentAdminForm
    list_display = ["student_name", "email", "training", "status", "source", "created_at"]
    list_filter = ["status", "source", "training"]
    search_fields = ["student_name", "email", "phone"]
    readonly_fields = ["status", "approved_at", "completed_at", "enrolled_by"]
    actions = [
        _transition("Approve", "approve_enrollment"),
        _transition("Reject", "reject_enrollment"),
        _transition("Complete", "complete_enrollment"),
    ]

    def get_readonly_fields(self, request, obj=None):
        # Moving a seat between programs goes through the API.
        if obj is not None:
            return [*self.readonly_fields, "training"]
        return self.readonly_fields

    def has_delete_permission(self, request, obj=None):
        # Deletes must release seats; use the API.
        return False
