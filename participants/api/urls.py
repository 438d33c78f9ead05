from django.urls import path


from .views import ParticipantGroupsView, ParticipantListView


urlpatterns = [
    path(
        "api/courses/<int:course_id>/participants/",
        ParticipantListView.as_view(),
        name="participant-list",
    ),
    path(
        "api/courses/<int:course_id>/participants/<int:user_id>/groups/",
        ParticipantGroupsView.as_view(),
        name="participant-groups",
    ),
]
