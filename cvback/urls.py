"""
URL configuration for cvback project.

The campaign API lives under /api/ (see citizenvote.urls); Django's admin
screens for the reference data live under /admin/.
"""

from django.conf import settings
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("", include("citizenvote.urls")),
]

if "debug_toolbar" in settings.INSTALLED_APPS:
    urlpatterns.append(path("__debug__/", include("debug_toolbar.urls")))
