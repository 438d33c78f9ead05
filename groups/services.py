"""Group membership management."""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from courses.models import CourseEnrollment

from .models import Group, GroupMembership

logger = logging.getLogger("groups")


@transaction.atomic
def add_member(group: Group, user) -> GroupMembership:
    """Add ``user`` to ``group``; the user must be enrolled in the group's course."""

    if not CourseEnrollment.objects.filter(course_id=group.course_id, user=user).exists():
        raise ValidationError(
            f"{user.get_username()} is not enrolled in {group.course} and cannot join {group.name}."
        )

    membership, created = GroupMembership.objects.get_or_create(group=group, user=user)
    if created:
        logger.info(
            "Added group member",
            extra={"group_id": group.pk, "user_id": user.pk},
        )
    return membership


def remove_member(group: Group, user) -> bool:
    deleted, _ = GroupMembership.objects.filter(group=group, user=user).delete()
    if deleted:
        logger.info(
            "Removed group member",
            extra={"group_id": group.pk, "user_id": user.pk},
        )
    return bool(deleted)
