from rest_framework import exceptions, permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from participants.exceptions import NotFoundError
from participants.services import build_viewer, get_course

from ..services import course_grade_items, search_grade_items
from .serializers import GradeItemSerializer


class GradeItemSearchView(APIView):
    """Grade items of a course, optionally narrowed by ``?search=``."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, course_id: int, *args, **kwargs):
        try:
            course = get_course(course_id=course_id)
            viewer = build_viewer(request.user, course)
        except NotFoundError as exc:
            raise exceptions.NotFound(str(exc)) from exc
        if not viewer.can_view_hidden_groups:
            raise exceptions.PermissionDenied("Only course teachers can browse grade items")

        items = search_grade_items(
            course_grade_items(course), request.query_params.get("search", "").strip()
        )
        return Response({"gradeitems": GradeItemSerializer(items, many=True).data})
