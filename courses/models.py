from django.conf import settings
from django.db import models


class TimeStampedModel(models.Model):
    """Reusable timestamped base model for course entities."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Course(models.Model):
    slug = models.SlugField(unique=True, db_index=True)
    title = models.CharField(max_length=255)
    short_name = models.CharField(max_length=100, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("title",)

    def __str__(self) -> str:
        return self.title


class CourseEnrollment(models.Model):
    class Role(models.TextChoices):
        STUDENT = "student", "Student"
        NON_EDITING_TEACHER = "teacher", "Non-editing teacher"
        TEACHER = "editingteacher", "Teacher"
        MANAGER = "manager", "Manager"

    class Status(models.TextChoices):
        ACTIVE = "active", "Active"
        SUSPENDED = "suspended", "Suspended"

    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name="enrollments",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="course_enrollments",
    )
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.STUDENT,
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.ACTIVE,
    )
    enrolled_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ("course", "user")
        verbose_name = "Course enrollment"
        verbose_name_plural = "Course enrollments"

    def __str__(self) -> str:
        return f"{self.user} → {self.course} ({self.role})"

    @property
    def is_active(self) -> bool:
        return self.status == self.Status.ACTIVE

    @property
    def can_view_hidden_groups(self) -> bool:
        return role_can_view_hidden_groups(self.role)


HIDDEN_GROUP_ROLES = frozenset(
    {
        CourseEnrollment.Role.NON_EDITING_TEACHER.value,
        CourseEnrollment.Role.TEACHER.value,
        CourseEnrollment.Role.MANAGER.value,
    }
)


def role_can_view_hidden_groups(role: str | None) -> bool:
    """Return True if the course role sees every group regardless of visibility."""

    return role is not None and str(role) in HIDDEN_GROUP_ROLES
