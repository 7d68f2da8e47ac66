"""
URL configuration for CitizenVote application.

All endpoints live under /api/ and are defined in api_urls.py.
"""

from django.urls import include, path

app_name = "citizenvote"

urlpatterns = [
    path("api/", include("citizenvote.api_urls")),
]
