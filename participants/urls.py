from django.urls import path

from .views import participants

app_name = "participants"

urlpatterns = [
    path(
        "<slug:course_slug>/participants/",
        participants,
        name="participants",
    ),
]
