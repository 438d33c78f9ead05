from django.urls import path

from .views import singleview

app_name = "grades"

urlpatterns = [
    path("report/singleview/", singleview, name="singleview"),
]
