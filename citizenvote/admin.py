"""
Django admin configuration for CitizenVote models.

Reference columns carry no database constraint, so list displays read the
related names through LEFT JOIN annotations instead of following the
relation (which would fail on a dangling id).
"""

from django.contrib import admin
from django.db.models import Count, F

from .models import Assistant, Candidate, District, Governorate, Party, Voter


@admin.register(Party)
class PartyAdmin(admin.ModelAdmin):
    """Admin for the single party settings row."""

    list_display = ("name", "threshold", "start_date", "end_date", "updated_at")
    readonly_fields = ("updated_at",)

    def has_add_permission(self, request):
        """Only one party row may exist."""
        return not Party.objects.exists()

    def has_delete_permission(self, request, obj=None):
        """The party row cannot be deleted."""
        return False


@admin.register(Governorate)
class GovernorateAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "district_count")
    search_fields = ("name",)

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.annotate(district_count=Count("districts"))

    @admin.display(description="Districts", ordering="district_count")
    def district_count(self, obj):
        return obj.district_count


@admin.register(District)
class DistrictAdmin(admin.ModelAdmin):
    """Custom admin configuration for District model."""

    list_display = ("id", "name", "governorate_name", "official_voters")
    search_fields = ("name",)
    ordering = ("name",)
    raw_id_fields = ("governorate",)

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.annotate(governorate_name=F("governorate__name"))

    @admin.display(description="Governorate", ordering="governorate_name")
    def governorate_name(self, obj):
        return obj.governorate_name


@admin.register(Candidate)
class CandidateAdmin(admin.ModelAdmin):
    """Custom admin configuration for Candidate model."""

    list_display = ("id", "name", "district_name", "target", "supporters")
    search_fields = ("name",)
    raw_id_fields = ("district",)
    list_per_page = 50

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.annotate(
            district_name=F("district__name"), supporters=Count("voters")
        )

    @admin.display(description="District", ordering="district_name")
    def district_name(self, obj):
        return obj.district_name

    @admin.display(description="Supporters", ordering="supporters")
    def supporters(self, obj):
        return obj.supporters


@admin.register(Assistant)
class AssistantAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "phone", "candidate_name", "created_at")
    search_fields = ("name", "phone", "area_tags")
    list_filter = ("created_at",)
    raw_id_fields = ("candidate",)

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.annotate(candidate_name=F("candidate__name"))

    @admin.display(description="Candidate", ordering="candidate_name")
    def candidate_name(self, obj):
        return obj.candidate_name


@admin.register(Voter)
class VoterAdmin(admin.ModelAdmin):
    """Custom admin configuration for Voter model."""

    # Fields to display in the list view
    list_display = (
        "id",
        "full_name",
        "dob",
        "electoral_card",
        "candidate_name",
        "district_name",
        "polling_center",
        "created_at",
    )

    # Fields to filter by
    list_filter = ("created_at",)

    # Fields to search
    search_fields = ("full_name", "electoral_card", "polling_center")

    # Number of items per page
    list_per_page = 50

    ordering = ("-id",)
    date_hierarchy = "created_at"
    raw_id_fields = ("candidate", "assistant", "district")

    fieldsets = (
        (
            "Voter",
            {
                "fields": ("full_name", "dob", "electoral_card"),
            },
        ),
        (
            "Collection",
            {
                "fields": ("candidate", "assistant", "district", "polling_center"),
            },
        ),
        (
            "Metadata",
            {
                "fields": ("created_at",),
                "classes": ("collapse",),
            },
        ),
    )

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.annotate(
            candidate_name=F("candidate__name"),
            district_name=F("district__name"),
        )

    @admin.display(description="Candidate", ordering="candidate_name")
    def candidate_name(self, obj):
        return obj.candidate_name

    @admin.display(description="District", ordering="district_name")
    def district_name(self, obj):
        return obj.district_name
