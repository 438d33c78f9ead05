"""Group visibility rules for course participant lists.

Everything here works on an in-memory snapshot of a course: plain
``GroupInfo`` records and ``(user_id, group_id)`` membership pairs. The
functions never touch the database, so a roster render loads the snapshot
once and evaluates every row against it.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable

from django.utils.translation import gettext as _

from groups.models import Group

from .exceptions import NotFoundError

Visibility = Group.Visibility


@dataclass(frozen=True)
class GroupInfo:
    id: int
    name: str
    course_id: int
    id_number: str = ""
    visibility: int = Visibility.ALL
    participation: bool = True

    @classmethod
    def from_model(cls, group: Group) -> "GroupInfo":
        return cls(
            id=group.id,
            name=group.name,
            course_id=group.course_id,
            id_number=group.id_number,
            visibility=int(group.visibility),
            participation=group.participation,
        )


@dataclass(frozen=True)
class Viewer:
    user_id: int
    role: str | None = None
    can_view_hidden_groups: bool = False


def is_group_visible(
    group: GroupInfo,
    *,
    viewer: Viewer,
    target_user_id: int,
    viewer_group_ids: frozenset[int] | set[int],
) -> bool:
    """Return True if ``viewer`` may see that ``target_user_id`` is in ``group``.

    The caller guarantees that the target user is a member of ``group``.
    """

    if viewer.can_view_hidden_groups:
        return True

    visibility = group.visibility
    if visibility == Visibility.ALL:
        return True
    if visibility == Visibility.MEMBERS:
        return group.id in viewer_group_ids
    if visibility == Visibility.OWN:
        return viewer.user_id == target_user_id and group.id in viewer_group_ids
    return False


class VisibilityFilter:
    """Answers "which of this user's groups may the viewer see" for one course."""

    def __init__(
        self,
        groups: Iterable[GroupInfo],
        memberships: Iterable[tuple[int, int]],
        *,
        user_ids: Iterable[int] | None = None,
    ) -> None:
        self._groups: dict[int, GroupInfo] = {group.id: group for group in groups}
        self._user_ids = frozenset(user_ids) if user_ids is not None else None
        self._groups_by_user: dict[int, set[int]] = defaultdict(set)

        for user_id, group_id in memberships:
            if group_id not in self._groups:
                raise NotFoundError(f"Group {group_id} is not part of this course")
            self._groups_by_user[user_id].add(group_id)

    @property
    def groups(self) -> tuple[GroupInfo, ...]:
        return tuple(sorted(self._groups.values(), key=lambda g: (g.name, g.id)))

    def get_group(self, group_id: int) -> GroupInfo:
        try:
            return self._groups[group_id]
        except KeyError:
            raise NotFoundError(f"Group {group_id} is not part of this course") from None

    def _check_user(self, user_id: int) -> None:
        if self._user_ids is not None and user_id not in self._user_ids:
            raise NotFoundError(f"User {user_id} is not part of this course")

    def group_ids_for(self, user_id: int) -> frozenset[int]:
        """All group ids ``user_id`` belongs to, regardless of visibility."""
        self._check_user(user_id)
        return frozenset(self._groups_by_user.get(user_id, ()))

    def member_ids(self, group_id: int) -> frozenset[int]:
        self.get_group(group_id)
        return frozenset(
            user_id
            for user_id, group_ids in self._groups_by_user.items()
            if group_id in group_ids
        )

    def visible_group_records(self, viewer: Viewer, target_user_id: int) -> list[GroupInfo]:
        """Groups of ``target_user_id`` visible to ``viewer``, sorted by name."""

        if not viewer.can_view_hidden_groups:
            self._check_user(viewer.user_id)
        target_group_ids = self.group_ids_for(target_user_id)
        viewer_group_ids = self._groups_by_user.get(viewer.user_id, set())

        visible = [
            self._groups[group_id]
            for group_id in target_group_ids
            if is_group_visible(
                self._groups[group_id],
                viewer=viewer,
                target_user_id=target_user_id,
                viewer_group_ids=viewer_group_ids,
            )
        ]
        return sorted(visible, key=lambda g: (g.name, g.id))

    def visible_groups_for(self, viewer: Viewer, target_user_id: int) -> frozenset[str]:
        return frozenset(group.name for group in self.visible_group_records(viewer, target_user_id))

    def participation_groups_for(self, viewer: Viewer) -> list[GroupInfo]:
        """Participation groups the viewer may pick to filter the roster."""

        viewer_group_ids = self._groups_by_user.get(viewer.user_id, set())
        options = []
        for group in self.groups:
            if not group.participation:
                continue
            if viewer.can_view_hidden_groups or group.visibility == Visibility.ALL:
                options.append(group)
            elif group.visibility == Visibility.MEMBERS and group.id in viewer_group_ids:
                options.append(group)
        return options


def visible_groups_for(
    viewer: Viewer,
    target_user_id: int,
    groups: Iterable[GroupInfo],
    memberships: Iterable[tuple[int, int]],
    *,
    user_ids: Iterable[int] | None = None,
) -> frozenset[str]:
    """Names of the groups of ``target_user_id`` that ``viewer`` may see.

    With ``user_ids`` given, a viewer or target outside it raises ``NotFoundError``.
    """

    return VisibilityFilter(groups, memberships, user_ids=user_ids).visible_groups_for(
        viewer, target_user_id
    )


def format_group_labels(labels: Iterable[str]) -> str:
    names = sorted(labels)
    if not names:
        return _("No groups")
    return ", ".join(names)
