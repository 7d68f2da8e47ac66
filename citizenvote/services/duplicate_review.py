"""
Near-duplicate review for voter records.

Electoral cards catch exact duplicates at ingestion. Voters entered without a
card, or with a mistyped one, can still be the same person registered under
two candidates. This module surfaces them by exact (full_name, dob) equality.
No similarity scoring is attempted, and nothing is merged or deleted.
"""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date

from django.db.models import Count, Exists, OuterRef
from loguru import logger

from citizenvote.models import Voter


@dataclass(frozen=True)
class FuzzyDuplicateGroup:
    """Voters sharing a name and birth date."""

    full_name: str
    dob: date
    count: int
    candidate_ids: list[int]

    def candidate_ids_display(self) -> str:
        """Comma-joined candidate ids, e.g. ``"1,2"``."""
        return ",".join(str(candidate_id) for candidate_id in self.candidate_ids)


class DuplicateReviewService:
    """
    Service listing groups of voters that look like the same person.

    Example:
        >>> for group in DuplicateReviewService().list_fuzzy_duplicates():
        ...     print(group.full_name, group.dob, group.count)
    """

    def list_fuzzy_duplicates(self) -> list[FuzzyDuplicateGroup]:
        """
        Group voters by exact (full_name, dob) and keep groups larger than one.

        Voters with an empty name or no dob are ignored. Groups are ordered by
        size descending, then name ascending. ``candidate_ids`` lists the
        distinct candidates in the group in ascending order.
        """
        reviewable = Voter.objects.reviewable()

        groups = list(
            reviewable.values("full_name", "dob")
            .annotate(cnt=Count("id"))
            .filter(cnt__gt=1)
            .order_by("-cnt", "full_name")
        )
        if not groups:
            return []

        # Voters sharing their (full_name, dob) with at least one other voter
        twins = reviewable.filter(
            full_name=OuterRef("full_name"), dob=OuterRef("dob")
        ).exclude(pk=OuterRef("pk"))
        rows = (
            reviewable.filter(Exists(twins))
            .values_list("full_name", "dob", "candidate_id")
            .order_by()
            .distinct()
        )
        candidates_by_key: dict[tuple[str, date], set[int]] = defaultdict(set)
        for full_name, dob, candidate_id in rows:
            candidates_by_key[(full_name, dob)].add(candidate_id)

        result = [
            FuzzyDuplicateGroup(
                full_name=group["full_name"],
                dob=group["dob"],
                count=group["cnt"],
                candidate_ids=sorted(
                    candidates_by_key[(group["full_name"], group["dob"])]
                ),
            )
            for group in groups
        ]
        logger.info(f"Found {len(result)} fuzzy duplicate group(s)")
        return result
