from __future__ import annotations

import logging
from dataclasses import dataclass

from django.db.models import QuerySet

from courses.models import Course, CourseEnrollment, role_can_view_hidden_groups
from groups.models import Group, GroupMembership

from .exceptions import NotFoundError
from .visibility import GroupInfo, Viewer, VisibilityFilter, format_group_labels

logger = logging.getLogger("participants")


@dataclass(frozen=True)
class ParticipantRow:
    user_id: int
    username: str
    full_name: str
    role: str
    role_label: str
    status: str
    groups: tuple[GroupInfo, ...]

    @property
    def group_names(self) -> list[str]:
        return [group.name for group in self.groups]

    @property
    def groups_label(self) -> str:
        return format_group_labels(self.group_names)


@dataclass(frozen=True)
class Roster:
    course: Course
    viewer: Viewer
    rows: tuple[ParticipantRow, ...]
    group_options: tuple[GroupInfo, ...]
    selected_group: GroupInfo | None = None


def get_course(*, slug: str | None = None, course_id: int | None = None) -> Course:
    lookup = {"slug": slug} if slug is not None else {"pk": course_id}
    try:
        return Course.objects.get(is_active=True, **lookup)
    except (Course.DoesNotExist, ValueError):
        raise NotFoundError(f"Course {slug or course_id} does not exist") from None


def _display_name(user) -> str:
    return user.get_full_name() or user.get_username()


def _course_enrollments(course: Course) -> QuerySet[CourseEnrollment]:
    return (
        CourseEnrollment.objects.filter(course=course)
        .select_related("user")
        .order_by("user__first_name", "user__last_name", "user__username", "user_id")
    )


def build_viewer(user, course: Course) -> Viewer:
    """Return the ``Viewer`` for ``user`` in ``course``.

    Staff see the course as a teacher would even without an enrolment. Anyone
    else needs an active enrolment, otherwise the course does not exist for
    them.
    """

    enrollment = CourseEnrollment.objects.filter(course=course, user=user).first()
    if user.is_staff or user.is_superuser:
        role = enrollment.role if enrollment else None
        return Viewer(user_id=user.pk, role=role, can_view_hidden_groups=True)

    if enrollment is None or not enrollment.is_active:
        logger.info(
            "Participants access denied",
            extra={"course_id": course.pk, "user_id": user.pk},
        )
        raise NotFoundError(f"User {user.pk} is not enrolled in course {course.pk}")

    return Viewer(
        user_id=user.pk,
        role=enrollment.role,
        can_view_hidden_groups=role_can_view_hidden_groups(enrollment.role),
    )


def load_visibility_filter(course: Course, *, user_ids=None) -> VisibilityFilter:
    """Snapshot the course groups and memberships into a ``VisibilityFilter``."""

    groups = [GroupInfo.from_model(group) for group in Group.objects.filter(course=course)]
    memberships = GroupMembership.objects.filter(group__course=course).values_list(
        "user_id", "group_id"
    )
    if user_ids is None:
        user_ids = CourseEnrollment.objects.filter(course=course).values_list(
            "user_id", flat=True
        )
    return VisibilityFilter(groups, memberships, user_ids=user_ids)


def build_roster(*, course: Course, user, group_id: int | None = None) -> Roster:
    """Build the participants list of ``course`` as seen by ``user``.

    ``group_id`` restricts the list to members of one of the participation
    groups offered to the viewer.
    """

    viewer = build_viewer(user, course)
    enrollments = list(_course_enrollments(course))
    if not viewer.can_view_hidden_groups:
        enrollments = [enrollment for enrollment in enrollments if enrollment.is_active]

    visibility_filter = load_visibility_filter(
        course, user_ids=[enrollment.user_id for enrollment in enrollments]
    )
    group_options = tuple(visibility_filter.participation_groups_for(viewer))

    selected_group = None
    if group_id is not None:
        selected_group = next((g for g in group_options if g.id == group_id), None)
        if selected_group is None:
            raise NotFoundError(f"Group {group_id} is not available in course {course.pk}")
        member_ids = visibility_filter.member_ids(group_id)
        enrollments = [e for e in enrollments if e.user_id in member_ids]

    rows = tuple(
        ParticipantRow(
            user_id=enrollment.user_id,
            username=enrollment.user.get_username(),
            full_name=_display_name(enrollment.user),
            role=enrollment.role,
            role_label=enrollment.get_role_display(),
            status=enrollment.status,
            groups=tuple(visibility_filter.visible_group_records(viewer, enrollment.user_id)),
        )
        for enrollment in enrollments
    )

    logger.debug(
        "Built participants roster",
        extra={
            "course_id": course.pk,
            "viewer_id": viewer.user_id,
            "rows": len(rows),
            "group_id": group_id,
        },
    )
    return Roster(
        course=course,
        viewer=viewer,
        rows=rows,
        group_options=group_options,
        selected_group=selected_group,
    )


def visible_groups_for_user(*, course: Course, user, target_user_id: int) -> list[GroupInfo]:
    """Groups of ``target_user_id`` in ``course`` that ``user`` may see."""

    viewer = build_viewer(user, course)
    enrollments = CourseEnrollment.objects.filter(course=course)
    if not viewer.can_view_hidden_groups:
        enrollments = enrollments.filter(status=CourseEnrollment.Status.ACTIVE)

    visibility_filter = load_visibility_filter(
        course, user_ids=enrollments.values_list("user_id", flat=True)
    )
    return visibility_filter.visible_group_records(viewer, target_user_id)
