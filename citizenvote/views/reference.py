"""
Reference data API views: party settings, governorates, districts and the
candidate admin list. Reads are open to any authenticated user except the
candidate admin list; every write needs a campaign administrator.
"""

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from citizenvote.permissions import IsCampaignAdmin, IsCampaignAdminOrReadOnly
from citizenvote.serializers import (
    CandidateAdminSerializer,
    DistrictSerializer,
    GovernorateSerializer,
    PartySerializer,
)
from citizenvote.services import ReferenceDataService

from .common import request_payload


class PartyView(APIView):
    """
    GET → {"ok": true, "party": {id, name, threshold, start_date, end_date}}
    PUT {name, threshold, start_date, end_date} → {"ok": true}
    """

    permission_classes = [IsCampaignAdminOrReadOnly]

    def get(self, request: Request) -> Response:
        party = ReferenceDataService().get_party()
        return Response({"ok": True, "party": PartySerializer(party).data})

    def put(self, request: Request) -> Response:
        ReferenceDataService().upsert_party(request_payload(request))
        return Response({"ok": True})


class GovernorateListView(APIView):
    permission_classes = [IsCampaignAdminOrReadOnly]

    def get(self, request: Request) -> Response:
        governorates = ReferenceDataService().list_governorates()
        rows = GovernorateSerializer(governorates, many=True).data
        return Response({"ok": True, "rows": rows})

    def post(self, request: Request) -> Response:
        governorate = ReferenceDataService().create_governorate(
            request_payload(request)
        )
        return Response(
            {"ok": True, "id": governorate.id}, status=status.HTTP_201_CREATED
        )


class GovernorateDetailView(APIView):
    permission_classes = [IsCampaignAdmin]

    def put(self, request: Request, pk: int) -> Response:
        updated = ReferenceDataService().update_governorate(
            pk, request_payload(request)
        )
        return Response({"ok": True, "updated": updated})

    def delete(self, request: Request, pk: int) -> Response:
        deleted = ReferenceDataService().delete_governorate(pk)
        return Response({"ok": True, "deleted": deleted})


class DistrictListView(APIView):
    permission_classes = [IsCampaignAdminOrReadOnly]

    def get(self, request: Request) -> Response:
        districts = ReferenceDataService().list_districts()
        rows = DistrictSerializer(districts, many=True).data
        return Response({"ok": True, "rows": rows})

    def post(self, request: Request) -> Response:
        district = ReferenceDataService().create_district(request_payload(request))
        return Response({"ok": True, "id": district.id}, status=status.HTTP_201_CREATED)


class DistrictDetailView(APIView):
    permission_classes = [IsCampaignAdmin]

    def put(self, request: Request, pk: int) -> Response:
        updated = ReferenceDataService().update_district(pk, request_payload(request))
        return Response({"ok": True, "updated": updated})

    def delete(self, request: Request, pk: int) -> Response:
        deleted = ReferenceDataService().delete_district(pk)
        return Response({"ok": True, "deleted": deleted})


class CandidateAdminListView(APIView):
    permission_classes = [IsCampaignAdmin]

    def get(self, request: Request) -> Response:
        candidates = ReferenceDataService().list_candidates()
        rows = CandidateAdminSerializer(candidates, many=True).data
        return Response({"ok": True, "rows": rows})


class CandidateDetailView(APIView):
    permission_classes = [IsCampaignAdmin]

    def put(self, request: Request, pk: int) -> Response:
        updated = ReferenceDataService().update_candidate(pk, request_payload(request))
        return Response({"ok": True, "updated": updated})

    def delete(self, request: Request, pk: int) -> Response:
        deleted = ReferenceDataService().delete_candidate(pk)
        return Response({"ok": True, "deleted": deleted})
