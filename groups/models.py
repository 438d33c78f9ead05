"""Models for course groups and their memberships."""

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from courses.models import Course, TimeStampedModel


class Group(TimeStampedModel):
    """A group of course participants.

    ``visibility`` controls who may see that a user belongs to the group;
    ``participation`` controls whether the group is offered when grouping or
    filtering the participants list.
    """

    class Visibility(models.IntegerChoices):
        ALL = 0, "Visible to everyone"
        MEMBERS = 1, "Only visible to members"
        OWN = 2, "Only see own membership"
        NONE = 3, "Membership is hidden"

    # Groups with these visibilities are never offered for participation.
    NON_PARTICIPATION_VISIBILITIES = frozenset({Visibility.OWN.value, Visibility.NONE.value})

    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name="groups",
    )
    name = models.CharField(max_length=254)
    id_number = models.CharField(max_length=100, blank=True)
    description = models.TextField(blank=True)
    visibility = models.PositiveSmallIntegerField(
        choices=Visibility.choices,
        default=Visibility.ALL,
    )
    participation = models.BooleanField(default=True)
    members = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through="GroupMembership",
        related_name="course_groups",
        blank=True,
    )

    class Meta:
        ordering = ("course", "name", "id")
        constraints = [
            models.UniqueConstraint(
                fields=("course", "id_number"),
                condition=~models.Q(id_number=""),
                name="groups_group_course_idnumber_unique",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return self.name

    def clean(self):
        super().clean()

        if self.pk:
            stored_visibility = (
                Group.objects.filter(pk=self.pk).values_list("visibility", flat=True).first()
            )
            if (
                stored_visibility is not None
                and stored_visibility != self.visibility
                and self.memberships.exists()
            ):
                raise ValidationError(
                    {
                        "visibility": (
                            "Group visibility cannot be changed once the group has members."
                        )
                    }
                )

    def save(self, *args, **kwargs):
        if self.visibility in self.NON_PARTICIPATION_VISIBILITIES:
            self.participation = False
        super().save(*args, **kwargs)


class GroupMembership(models.Model):
    group = models.ForeignKey(
        Group,
        on_delete=models.CASCADE,
        related_name="memberships",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="group_memberships",
    )
    added_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ("group", "user")
        indexes = [
            models.Index(fields=["user"], name="groups_membership_user_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover - representation only
        return f"{self.user} -> {self.group}"
