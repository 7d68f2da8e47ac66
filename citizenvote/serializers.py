"""
Django REST Framework serializers for CitizenVote reference data.

These are read serializers for the admin listings and the party settings.
Writes go through ReferenceDataService, which owns coercion and validation
of the loosely typed dashboard payloads.

Example Usage:
    serializer = DistrictSerializer(service.list_districts(), many=True)
    return Response({"ok": True, "rows": serializer.data})
"""

from rest_framework import serializers

from citizenvote.models import Candidate, District, Governorate, Party


class PartySerializer(serializers.ModelSerializer):
    class Meta:
        model = Party
        fields = ["id", "name", "threshold", "start_date", "end_date"]
        read_only_fields = fields


class GovernorateSerializer(serializers.ModelSerializer):
    class Meta:
        model = Governorate
        fields = ["id", "name"]
        read_only_fields = fields


class DistrictSerializer(serializers.ModelSerializer):
    """
    District row for the admin listing.

    Fields:
        governorate_id (int|None): Raw reference, kept even when dangling
        governorate_name (str|None): Annotated by
            ``District.objects.with_governorate()``; None if dangling
    """

    governorate_id = serializers.IntegerField(allow_null=True, read_only=True)
    governorate_name = serializers.CharField(allow_null=True, read_only=True)

    class Meta:
        model = District
        fields = [
            "id",
            "name",
            "official_voters",
            "governorate_id",
            "governorate_name",
        ]
        read_only_fields = fields


class CandidateAdminSerializer(serializers.ModelSerializer):
    """Candidate row for the admin listing, with the annotated district name."""

    district_id = serializers.IntegerField(allow_null=True, read_only=True)
    district_name = serializers.CharField(allow_null=True, read_only=True)

    class Meta:
        model = Candidate
        fields = ["id", "name", "target", "district_id", "district_name"]
        read_only_fields = fields

