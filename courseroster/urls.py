"""
URL configuration for courseroster project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    path('accounts/', include('django.contrib.auth.urls')),
    path('courses/', include(('participants.urls', 'participants'), namespace='participants')),
    path('groups/', include(('groups.urls', 'groups'), namespace='groups')),
    path('grades/', include(('grades.urls', 'grades'), namespace='grades')),

    path('', include('participants.api.urls')),
    path('', include('grades.api.urls')),
]
