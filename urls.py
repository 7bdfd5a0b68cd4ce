"""
freightdesk URL Configuration.

The API is read-only and intended for audit tooling; quotations and carrier
rules are maintained through the admin site and management commands.
"""
from django.contrib import admin
from django.urls import include
from django.urls import path

urlpatterns = [
    path("api/", include("quotations.urls")),
    path("admin/", admin.site.urls),
]
