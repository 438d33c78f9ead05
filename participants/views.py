from __future__ import annotations

from django.conf import settings
from django.contrib.auth.decorators import login_required
from django.core.paginator import Paginator
from django.http import Http404
from django.shortcuts import render

from .exceptions import NotFoundError
from .services import build_roster, get_course


def _parse_group_id(value: str | None) -> int | None:
    if not value:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise Http404("Unknown group")


@login_required
def participants(request, course_slug: str):
    """Course participants table with the groups each user is visibly in."""

    group_id = _parse_group_id(request.GET.get("group"))
    try:
        course = get_course(slug=course_slug)
        roster = build_roster(course=course, user=request.user, group_id=group_id)
    except NotFoundError as exc:
        raise Http404(str(exc)) from exc

    paginator = Paginator(roster.rows, settings.PARTICIPANTS_PER_PAGE)
    page_obj = paginator.get_page(request.GET.get("page"))

    return render(
        request,
        "participants/participants.html",
        {
            "course": course,
            "roster": roster,
            "page_obj": page_obj,
            "group_options": roster.group_options,
            "selected_group": roster.selected_group,
            "can_manage_groups": roster.viewer.can_view_hidden_groups,
        },
    )
