"""
API URL configuration for CitizenVote REST API endpoints.

URL Structure:
    /api/party-progress/          - Party threshold vs. supporters (GET, POST)
    /api/party-districts/         - Supporters per district (GET)
    /api/party-weekly/            - Supporters per ISO week (GET)
    /api/candidates/              - Candidate progress / create (GET, POST)
    /api/candidates-admin/        - Candidate admin list (GET)
    /api/candidates/{id}/         - Update / delete candidate (PUT, DELETE)
    /api/candidate/{id}/          - Candidate full view (GET)
    /api/assistants/              - Register assistant (POST)
    /api/voters/                  - Submit voter (POST)
    /api/voters/{id}/             - Update / delete voter (PUT, DELETE)
    /api/admin/voters/            - Voter search (GET)
    /api/fuzzy-duplicates/        - Name + dob duplicate groups (GET)
    /api/party/                   - Party settings (GET, PUT)
    /api/governorates/            - List / create (GET, POST)
    /api/governorates/{id}/       - Update / delete (PUT, DELETE)
    /api/districts/               - List / create (GET, POST)
    /api/districts/{id}/          - Update / delete (PUT, DELETE)
    /api/health/                  - Health check (GET, public)

Authentication:
    GET on party-progress, candidates and candidate/{id} is public, as is
    health. Every other endpoint requires an authenticated user
    (SessionAuthentication or BasicAuthentication). Writes require a
    campaign administrator. Unknown paths return 404 {"ok": false}.
"""

from django.urls import path, re_path

from citizenvote import views
from citizenvote.exceptions import api_not_found

urlpatterns = [
    path("party-progress/", views.PartyProgressView.as_view(), name="party-progress"),
    path(
        "party-districts/", views.PartyDistrictsView.as_view(), name="party-districts"
    ),
    path("party-weekly/", views.PartyWeeklyView.as_view(), name="party-weekly"),
    path("candidates/", views.CandidateProgressView.as_view(), name="candidates"),
    path(
        "candidates-admin/",
        views.CandidateAdminListView.as_view(),
        name="candidates-admin",
    ),
    path(
        "candidates/<int:pk>/",
        views.CandidateDetailView.as_view(),
        name="candidate-detail",
    ),
    path("candidate/<int:pk>/", views.CandidateFullView.as_view(), name="candidate"),
    path("assistants/", views.AssistantCreateView.as_view(), name="assistants"),
    path("voters/", views.VoterCreateView.as_view(), name="voters"),
    path("voters/<int:pk>/", views.VoterDetailView.as_view(), name="voter-detail"),
    path("admin/voters/", views.AdminVoterSearchView.as_view(), name="admin-voters"),
    path(
        "fuzzy-duplicates/",
        views.FuzzyDuplicatesView.as_view(),
        name="fuzzy-duplicates",
    ),
    path("party/", views.PartyView.as_view(), name="party"),
    path("governorates/", views.GovernorateListView.as_view(), name="governorates"),
    path(
        "governorates/<int:pk>/",
        views.GovernorateDetailView.as_view(),
        name="governorate-detail",
    ),
    path("districts/", views.DistrictListView.as_view(), name="districts"),
    path(
        "districts/<int:pk>/",
        views.DistrictDetailView.as_view(),
        name="district-detail",
    ),
    path("health/", views.health_check, name="health"),
    # Anything else under /api/ gets the JSON 404 body
    re_path(r"^.*$", api_not_found, name="api-not-found"),
]
