"""
Dashboard API views for CitizenVote.

Read endpoints behind the party and candidate dashboards:
- PartyProgressView: party threshold vs. total supporters (POST sets threshold)
- PartyDistrictsView: supporters per district, party-wide
- PartyWeeklyView: supporters per ISO week, party-wide
- CandidateProgressView: per-candidate progress (POST creates a candidate)
- CandidateFullView: everything shown on one candidate's page
- FuzzyDuplicatesView: voter groups sharing a name and birth date
"""

from typing import Any

from loguru import logger
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from citizenvote.permissions import IsCampaignAdminOrPublicRead
from citizenvote.services import (
    AggregationEngine,
    DuplicateReviewService,
    ReferenceDataService,
)

from .common import request_payload


class PartyProgressView(APIView):
    """
    Party-wide progress.

    GET  → {"ok": true, "threshold": 20000, "supporters": 1532}
    POST {"threshold": 25000} → {"ok": true} (campaign admin)
    """

    permission_classes = [IsCampaignAdminOrPublicRead]

    def get(self, request: Request) -> Response:
        progress = AggregationEngine().party_progress()
        return Response({"ok": True, **progress})

    def post(self, request: Request) -> Response:
        payload = request_payload(request)
        threshold = ReferenceDataService().set_threshold(payload.get("threshold"))
        logger.info(f"User {request.user} set party threshold to {threshold}")
        return Response({"ok": True})


class PartyDistrictsView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        rows = AggregationEngine().district_distribution()
        return Response({"ok": True, "rows": rows})


class PartyWeeklyView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        rows = AggregationEngine().weekly_growth()
        return Response({"ok": True, "rows": rows})


class CandidateProgressView(APIView):
    """
    Candidate leaderboard, and candidate creation.

    GET → {"ok": true, "candidates": [{id, name, district, target,
    supporters, pct}, ...]} ordered by supporters desc, id asc.

    POST {"name": ..., "district_id": ..., "target": ...} → {"ok": true, "id": 7}
    """

    permission_classes = [IsCampaignAdminOrPublicRead]

    def get(self, request: Request) -> Response:
        candidates = AggregationEngine().candidate_progress()
        return Response({"ok": True, "candidates": candidates})

    def post(self, request: Request) -> Response:
        candidate = ReferenceDataService().create_candidate(request_payload(request))
        return Response(
            {"ok": True, "id": candidate.id}, status=status.HTTP_201_CREATED
        )


class CandidateFullView(APIView):
    """
    Composite candidate page: profile, assistants, district split, weekly
    series and the most recent voters. 404 when the candidate is unknown.
    """

    permission_classes = [AllowAny]

    def get(self, request: Request, pk: int) -> Response:
        view = AggregationEngine().candidate_full_view(pk)
        return Response({"ok": True, **view})


class FuzzyDuplicatesView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        groups = DuplicateReviewService().list_fuzzy_duplicates()
        rows: list[dict[str, Any]] = [
            {
                "full_name": group.full_name,
                "dob": group.dob.isoformat(),
                "cnt": group.count,
                "candidate_ids": group.candidate_ids_display(),
            }
            for group in groups
        ]
        return Response({"ok": True, "rows": rows})
