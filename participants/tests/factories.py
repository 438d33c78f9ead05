from __future__ import annotations

from uuid import uuid4

from django.contrib.auth import get_user_model

from courses.models import Course, CourseEnrollment
from groups.models import Group, GroupMembership


def create_user(username: str | None = None, **extra):
    username = username or f"user_{uuid4().hex[:8]}"
    return get_user_model().objects.create_user(username=username, password="pass", **extra)


def create_course(*, slug: str | None = None, title: str | None = None) -> Course:
    slug = slug or f"course-{uuid4().hex[:8]}"
    return Course.objects.create(slug=slug, title=title or f"Course {slug}")


def enroll(
    *,
    course: Course,
    user,
    role: str = CourseEnrollment.Role.STUDENT,
    status: str = CourseEnrollment.Status.ACTIVE,
) -> CourseEnrollment:
    return CourseEnrollment.objects.create(course=course, user=user, role=role, status=status)


def create_group(
    *,
    course: Course,
    name: str | None = None,
    visibility: int = Group.Visibility.ALL,
    participation: bool = True,
    id_number: str = "",
    description: str = "",
    members=(),
) -> Group:
    group = Group.objects.create(
        course=course,
        name=name or f"Group {uuid4().hex[:6]}",
        description=description,
        visibility=visibility,
        participation=participation,
        id_number=id_number,
    )
    for member in members:
        GroupMembership.objects.create(group=group, user=member)
    return group


__all__ = [
    "create_user",
    "create_course",
    "enroll",
    "create_group",
]
