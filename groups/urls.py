"""URL patterns for the groups app."""

from django.urls import path

from . import views

app_name = "groups"

urlpatterns = [
    path("<int:pk>/", views.group_detail, name="group_detail"),
    path("<int:pk>/edit/", views.group_edit, name="group_edit"),
]
