from rest_framework import permissions
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework.views import APIView

from ..exceptions import NotFoundError
from ..services import build_roster, build_viewer, get_course, visible_groups_for_user
from ..visibility import format_group_labels
from .serializers import GroupInfoSerializer, ParticipantSerializer


class ParticipantListView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, course_id: int, *args, **kwargs):
        group_id = request.query_params.get("group")
        try:
            group_id = int(group_id) if group_id else None
        except ValueError:
            raise NotFound("Unknown group")

        try:
            course = get_course(course_id=course_id)
            roster = build_roster(course=course, user=request.user, group_id=group_id)
        except NotFoundError as exc:
            raise NotFound(str(exc)) from exc

        context = {"include_settings": roster.viewer.can_view_hidden_groups}
        return Response(
            {
                "course": {"id": course.id, "slug": course.slug, "title": course.title},
                "groups": GroupInfoSerializer(roster.group_options, many=True, context=context).data,
                "participants": ParticipantSerializer(roster.rows, many=True, context=context).data,
            }
        )


class ParticipantGroupsView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, course_id: int, user_id: int, *args, **kwargs):
        try:
            course = get_course(course_id=course_id)
            groups = visible_groups_for_user(
                course=course, user=request.user, target_user_id=user_id
            )
            viewer = build_viewer(request.user, course)
        except NotFoundError as exc:
            raise NotFound(str(exc)) from exc

        return Response(
            {
                "user_id": user_id,
                "groups": GroupInfoSerializer(
                    groups,
                    many=True,
                    context={"include_settings": viewer.can_view_hidden_groups},
                ).data,
                "label": format_group_labels(group.name for group in groups),
            }
        )
