from __future__ import annotations

from django.contrib.auth.decorators import login_required
from django.core.exceptions import PermissionDenied
from django.http import Http404
from django.shortcuts import render

from courses.models import CourseEnrollment
from participants.exceptions import NotFoundError
from participants.services import build_viewer, get_course

from .services import course_grade_items, search_grade_items


def _int_param(request, name: str) -> int | None:
    value = request.GET.get(name)
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise Http404(f"Invalid {name}")


@login_required
def singleview(request):
    """Single view report: pick a grade item and list the course students."""

    course_id = _int_param(request, "id")
    if course_id is None:
        raise Http404("Course id is required")
    try:
        course = get_course(course_id=course_id)
        viewer = build_viewer(request.user, course)
    except NotFoundError as exc:
        raise Http404(str(exc)) from exc
    if not viewer.can_view_hidden_groups:
        raise PermissionDenied("Only course teachers can view the grader report")

    items = course_grade_items(course)
    search = request.GET.get("search", "").strip()
    matching_items = search_grade_items(items, search)

    item_id = _int_param(request, "itemid")
    selected_item = None
    if item_id is not None:
        selected_item = next((item for item in items if item.id == item_id), None)
        if selected_item is None:
            raise Http404("Unknown grade item")

    students = (
        CourseEnrollment.objects.filter(
            course=course, role=CourseEnrollment.Role.STUDENT
        )
        .select_related("user")
        .order_by("user__first_name", "user__last_name", "user__username")
    )

    return render(
        request,
        "grades/singleview.html",
        {
            "course": course,
            "search": search,
            "matching_items": matching_items,
            "selected_item": selected_item,
            "students": students if selected_item else [],
        },
    )
