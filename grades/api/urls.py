from django.urls import path

from .views import GradeItemSearchView


urlpatterns = [
    path(
        "api/courses/<int:course_id>/grade-items/",
        GradeItemSearchView.as_view(),
        name="grade-item-search",
    ),
]
