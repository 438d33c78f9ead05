from django.db import models

from courses.models import Course, TimeStampedModel


class GradeItem(TimeStampedModel):
    """A gradable column of a course gradebook."""

    class ItemType(models.TextChoices):
        COURSE = "course", "Course total"
        CATEGORY = "category", "Category total"
        MANUAL = "manual", "Manual item"
        MOD = "mod", "Activity"

    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name="grade_items",
    )
    name = models.CharField(max_length=255)
    item_type = models.CharField(
        max_length=20,
        choices=ItemType.choices,
        default=ItemType.MANUAL,
    )
    sort_order = models.PositiveIntegerField(default=0)
    is_hidden = models.BooleanField(default=False)

    class Meta:
        ordering = ("course", "sort_order", "id")
        indexes = [
            models.Index(fields=["course", "sort_order"], name="grades_item_course_sort_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.course}: {self.name}"
