"""
Voter and assistant API views for CitizenVote.

- VoterCreateView: submit a voter; a known electoral card is reported as a
  duplicate with status 200, not as an error
- VoterDetailView: partial update and hard delete of one voter
- AdminVoterSearchView: paged voter search for the admin screen
- AssistantCreateView: register an assistant and return their short link
"""

from django.conf import settings
from loguru import logger
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from citizenvote.permissions import IsCampaignAdmin
from citizenvote.services import ReferenceDataService, VoterIngestionService

from .common import request_payload

DUPLICATE_MESSAGE = "Electoral card already registered"


class VoterCreateView(APIView):
    """
    Submit a voter.

    Request Body:
        {
            "candidate_id": 3,
            "full_name": "Ali Hassan",
            "dob": "1990-01-01",
            "district_id": 2,
            "polling_center": "School 14",
            "electoral_card": "EC-1001",
            "aid": 5
        }

    Responses:
        201 {"ok": true, "id": 812}
        200 {"ok": true, "duplicate": true, "msg": "..."}
        400 missing candidate_id/full_name or malformed values
        404 unknown candidate
    """

    permission_classes = [IsCampaignAdmin]

    def post(self, request: Request) -> Response:
        result = VoterIngestionService().submit_voter(request_payload(request))
        if result.duplicate:
            return Response({"ok": True, "duplicate": True, "msg": DUPLICATE_MESSAGE})
        return Response({"ok": True, "id": result.id}, status=status.HTTP_201_CREATED)


class VoterDetailView(APIView):
    permission_classes = [IsCampaignAdmin]

    def put(self, request: Request, pk: int) -> Response:
        changes = VoterIngestionService().update_voter(pk, request_payload(request))
        return Response({"ok": True, "changes": changes})

    def delete(self, request: Request, pk: int) -> Response:
        changes = VoterIngestionService().delete_voter(pk)
        logger.info(f"User {request.user} deleted voter {pk}")
        return Response({"ok": True, "changes": changes})


class AdminVoterSearchView(APIView):
    """GET ?search=&page=&size= → {"ok": true, "page", "size", "items"}."""

    permission_classes = [IsCampaignAdmin]

    def get(self, request: Request) -> Response:
        params = request.query_params
        result = VoterIngestionService().search_voters(
            search=params.get("search", ""),
            page=params.get("page", 1),
            size=params.get("size"),
        )
        return Response({"ok": True, **result})


class AssistantCreateView(APIView):
    """
    Register an assistant for a candidate.

    The returned link opens the voter entry page pre-bound to the candidate
    and assistant, e.g. ``https://host/candidate.html?id=3&aid=5``.
    """

    permission_classes = [IsCampaignAdmin]

    def post(self, request: Request) -> Response:
        assistant = ReferenceDataService().create_assistant(request_payload(request))
        link = request.build_absolute_uri(
            f"{settings.ASSISTANT_LINK_PATH}"
            f"?id={assistant.candidate_id}&aid={assistant.id}"
        )
        return Response(
            {"ok": True, "id": assistant.id, "link": link},
            status=status.HTTP_201_CREATED,
        )
