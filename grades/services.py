from __future__ import annotations

import logging
from typing import Iterable, Sequence, TypeVar

from courses.models import Course

from .models import GradeItem

logger = logging.getLogger("grades")

T = TypeVar("T")


def search_grade_items(items: Iterable[T], term: str | None) -> list[T]:
    """Filter grade items by a case-insensitive substring of their name.

    An empty term keeps every item. Order is preserved.
    """

    items = list(items)
    if not term:
        return items
    needle = term.lower()
    return [item for item in items if needle in item.name.lower()]


def course_grade_items(course: Course) -> Sequence[GradeItem]:
    """Grade items that can be picked in the single view report.

    Course and category totals are computed columns and are left out, and so
    are items hidden from the gradebook.
    """

    items = list(
        GradeItem.objects.filter(course=course, is_hidden=False)
        .exclude(item_type__in=[GradeItem.ItemType.COURSE, GradeItem.ItemType.CATEGORY])
        .order_by("sort_order", "id")
    )
    logger.debug(
        "Listed grade items",
        extra={"course_id": course.pk, "items": len(items)},
    )
    return items
