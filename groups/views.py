"""Views for inspecting and editing course groups."""

import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.exceptions import PermissionDenied
from django.shortcuts import get_object_or_404, redirect, render

from participants.exceptions import NotFoundError
from participants.services import build_viewer

from .forms import GroupForm
from .models import Group

logger = logging.getLogger("groups")


def _get_managed_group(request, pk) -> Group:
    """Return the group if the current user may see every group of its course."""

    group = get_object_or_404(Group.objects.select_related("course"), pk=pk)
    try:
        viewer = build_viewer(request.user, group.course)
    except NotFoundError:
        viewer = None
    if viewer is None or not viewer.can_view_hidden_groups:
        logger.info(
            "Group management denied",
            extra={"group_id": group.pk, "user_id": request.user.pk},
        )
        raise PermissionDenied("Only course teachers can manage groups")
    return group


@login_required
def group_detail(request, pk):
    """Display group details and members for course teachers."""

    group = _get_managed_group(request, pk)
    members = group.members.order_by("first_name", "last_name", "username")
    return render(
        request,
        "groups/group_detail.html",
        {"group": group, "members": members},
    )


@login_required
def group_edit(request, pk):
    """Edit the name, description and visibility settings of a group."""

    group = _get_managed_group(request, pk)
    form = GroupForm(request.POST or None, instance=group)
    if request.method == "POST" and form.is_valid():
        form.save()
        messages.success(request, f"Group {group.name} saved.")
        return redirect("groups:group_detail", pk=group.pk)
    return render(request, "groups/group_edit.html", {"group": group, "form": form})
