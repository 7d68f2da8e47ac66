"""
Aggregation service for CitizenVote dashboards.

Every method recomputes from the current voter rows; nothing is cached.
Grouping joins against districts and candidates are LEFT joins, so rows
that reference a deleted entity still count, with a null label.
"""

from typing import Any

from django.conf import settings
from django.db.models import Count
from django.db.models.functions import ExtractIsoYear, ExtractWeek
from loguru import logger

from citizenvote.models import Assistant, Candidate, District, Party, Voter


def progress_pct(supporters: int, target: int) -> float:
    """Percentage of target reached, one decimal; 0 when there is no target."""
    if target <= 0:
        return 0
    return round(100 * supporters / target, 1)


def format_yweek(iso_year: int, iso_week: int) -> str:
    """Format an ISO year and week as the ``YYYY-Www`` bucket key."""
    return f"{iso_year}-W{iso_week:02d}"


class AggregationEngine:
    """
    Read-side queries behind the party and candidate dashboards.

    Example:
        >>> engine = AggregationEngine()
        >>> engine.party_progress()
        {'threshold': 20000, 'supporters': 1532}
    """

    def party_progress(self) -> dict[str, int]:
        """Return the party threshold and the total number of voters."""
        party = Party.load()
        supporters = Voter.objects.count()
        logger.debug(f"Party progress: {supporters}/{party.threshold}")
        return {"threshold": party.threshold, "supporters": supporters}

    def candidate_progress(self) -> list[dict[str, Any]]:
        """
        Return every candidate with supporter count and progress.

        Ordered by supporters descending, ties by id ascending. ``district``
        is the district name, or None when unset or dangling.
        """
        rows = []
        for candidate in Candidate.objects.with_progress():
            rows.append(
                {
                    "id": candidate.id,
                    "name": candidate.name,
                    "district": candidate.district_name,
                    "target": candidate.target,
                    "supporters": candidate.supporters,
                    "pct": progress_pct(candidate.supporters, candidate.target),
                }
            )
        return rows

    def district_distribution(
        self, candidate_id: int | None = None
    ) -> list[dict[str, Any]]:
        """
        Return every district with its supporter count.

        Args:
            candidate_id: When given, only that candidate's voters are counted.
                Districts without supporters are still listed.

        Returns:
            Rows ordered by supporters desc, official voters desc, id asc.
        """
        return [
            {
                "district_id": district.id,
                "district": district.name,
                "official_voters": district.official_voters,
                "supporters": district.supporters,
            }
            for district in District.objects.with_supporters(candidate_id)
        ]

    def weekly_growth(self, candidate_id: int | None = None) -> list[dict[str, Any]]:
        """
        Count voters per ISO week of ``created_at``, oldest week first.

        Weeks are computed in the configured time zone. The buckets
        partition the (optionally candidate-scoped) voter set.
        """
        queryset = Voter.objects.all()
        if candidate_id is not None:
            queryset = queryset.filter(candidate_id=candidate_id)

        buckets = (
            queryset.annotate(
                iso_year=ExtractIsoYear("created_at"),
                iso_week=ExtractWeek("created_at"),
            )
            .values("iso_year", "iso_week")
            .annotate(supporters=Count("id"))
            .order_by("iso_year", "iso_week")
        )
        return [
            {
                "yweek": format_yweek(bucket["iso_year"], bucket["iso_week"]),
                "supporters": bucket["supporters"],
            }
            for bucket in buckets
        ]

    def candidate_full_view(self, candidate_id: int) -> dict[str, Any]:
        """
        Assemble everything the candidate page shows.

        The sub-queries run one after another without a shared snapshot, so
        a concurrent insert may show up in one section and not another.

        Returns:
            Dict with ``candidate``, ``assistants``, ``byDistrict``, ``weekly``
            and ``voters`` (most recent first, capped by
            CANDIDATE_RECENT_VOTERS_LIMIT).

        Raises:
            Candidate.DoesNotExist: If the candidate does not exist
        """
        logger.debug(f"Building full view for candidate {candidate_id}")

        candidate = (
            Candidate.objects.with_district_name()
            .values("id", "name", "target", "district_id", "district_name")
            .get(pk=candidate_id)
        )

        assistants = list(
            Assistant.objects.filter(candidate_id=candidate_id)
            .order_by("-created_at", "-id")
            .values("id", "name", "phone", "area_tags", "created_at")
        )

        limit = settings.CANDIDATE_RECENT_VOTERS_LIMIT
        voters = list(
            Voter.objects.for_candidate(candidate_id)
            .order_by("-created_at", "-id")
            .values("id", "full_name", "dob", "electoral_card", "created_at")[:limit]
        )

        return {
            "candidate": candidate,
            "assistants": assistants,
            "byDistrict": self.district_distribution(candidate_id),
            "weekly": self.weekly_growth(candidate_id),
            "voters": voters,
        }
