"""
Views package for CitizenVote application.

This package contains all view logic for the CitizenVote API,
organized by functionality.
"""

from .dashboard import (
    CandidateFullView,
    CandidateProgressView,
    FuzzyDuplicatesView,
    PartyDistrictsView,
    PartyProgressView,
    PartyWeeklyView,
)
from .health import health_check
from .ingestion import (
    AdminVoterSearchView,
    AssistantCreateView,
    VoterCreateView,
    VoterDetailView,
)
from .reference import (
    CandidateAdminListView,
    CandidateDetailView,
    DistrictDetailView,
    DistrictListView,
    GovernorateDetailView,
    GovernorateListView,
    PartyView,
)

__all__ = [
    "AdminVoterSearchView",
    "AssistantCreateView",
    "CandidateAdminListView",
    "CandidateDetailView",
    "CandidateFullView",
    "CandidateProgressView",
    "DistrictDetailView",
    "DistrictListView",
    "FuzzyDuplicatesView",
    "GovernorateDetailView",
    "GovernorateListView",
    "PartyDistrictsView",
    "PartyProgressView",
    "PartyView",
    "PartyWeeklyView",
    "VoterCreateView",
    "VoterDetailView",
    "health_check",
]
