"""
Voter service layer for CitizenVote application.

This module provides business logic for Voter records, including:
- Voter ingestion with electoral card duplicate prevention
- Tri-state partial updates for the admin voter screens
- Paged search over names and electoral cards

The electoral card check and the insert are separate statements. Two
concurrent submissions of the same card can both pass the check, so the
insert runs in a savepoint and a unique-constraint conflict is reported as
the duplicate outcome instead of an error.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, TypedDict

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from loguru import logger

from citizenvote.models import Candidate, Voter, sanitize_text_field
from citizenvote.utils.coercion import (
    to_non_negative_int,
    to_optional_date,
    to_optional_id,
)
from citizenvote.utils.validation import validate_field_values

REQUIRED_FIELDS_MESSAGE = "candidate_id & full_name required"
CARD_IN_USE_MESSAGE = "Electoral card already used"

DEFAULT_PAGE_SIZE = 20
MIN_PAGE_SIZE = 5
MAX_PAGE_SIZE = 50


class VoterDataDict(TypedDict, total=False):
    """
    Type definition for a voter submission.

    Attributes:
        candidate_id: Candidate the voter supports (required)
        assistant_id: Assistant who collected the voter (optional)
        aid: Assistant id carried by an assistant short link (optional)
        full_name: Voter's full name (required)
        dob: Date of birth as date object or string (YYYY-MM-DD)
        district_id: District the voter is registered in (optional)
        polling_center: Free-text polling center (optional)
        electoral_card: External voter identifier used for deduplication
    """

    candidate_id: int | str
    assistant_id: int | str | None
    aid: int | str | None
    full_name: str
    dob: date | str | None
    district_id: int | str | None
    polling_center: str | None
    electoral_card: str | None


class VoterUpdateDict(TypedDict, total=False):
    """
    Partial voter update. A key that is present is written, even when its
    value is empty (which clears nullable fields). Absent keys are untouched.
    """

    candidate_id: int | str
    assistant_id: int | str | None
    full_name: str
    dob: date | str | None
    district_id: int | str | None
    polling_center: str | None
    electoral_card: str | None


@dataclass(frozen=True)
class IngestionResult:
    """Outcome of a voter submission."""

    created: bool
    id: int | None = None
    duplicate: bool = False


class VoterIngestionService:
    """
    Service for ingesting and maintaining Voter records.

    Key features:
    - Validates required fields and coerces ids and dates
    - Sanitizes free-text fields before storage
    - Treats a known electoral card as a duplicate outcome, not an error
    - Tolerates the check-then-insert race through the unique constraint

    Example:
        >>> service = VoterIngestionService()
        >>> result = service.submit_voter({
        ...     'candidate_id': 3,
        ...     'full_name': 'Ali Hassan',
        ...     'dob': '1990-01-01',
        ...     'electoral_card': 'EC-1001',
        ... })
        >>> if result.duplicate:
        ...     print("Already registered")
    """

    def submit_voter(self, voter_data: VoterDataDict) -> IngestionResult:
        """
        Validate and insert a single voter.

        Steps:
        1. Require candidate_id and full_name
        2. Sanitize text and coerce ids and dob
        3. Check the candidate exists
        4. Return the duplicate outcome if the electoral card is known
        5. Insert inside a savepoint, mapping a card conflict to duplicate

        Args:
            voter_data: Raw submission. ``assistant_id`` takes precedence over
                ``aid`` when both are given.

        Returns:
            IngestionResult with ``created=True`` and the new id, or
            ``duplicate=True`` when the card already exists (nothing written).

        Raises:
            ValidationError: Missing required fields, non-integer ids or an
                invalid dob
            Candidate.DoesNotExist: If the candidate does not exist
        """
        logger.info(
            f"Submitting voter for candidate {voter_data.get('candidate_id')}"
        )

        validation_errors = self.validate_voter_data(voter_data)
        if validation_errors:
            logger.warning(f"Validation failed: {validation_errors}")
            raise ValidationError(REQUIRED_FIELDS_MESSAGE)

        sanitized_data = self._sanitize_voter_data(voter_data)

        candidate_id = sanitized_data["candidate_id"]
        if not Candidate.objects.filter(pk=candidate_id).exists():
            logger.warning(f"Candidate not found: {candidate_id}")
            raise Candidate.DoesNotExist(f"Candidate {candidate_id} not found")

        electoral_card = sanitized_data.get("electoral_card")
        if electoral_card and Voter.objects.with_card(electoral_card).exists():
            logger.info(f"Duplicate electoral card rejected: {electoral_card}")
            return IngestionResult(created=False, duplicate=True)

        voter = Voter(**sanitized_data)
        # References are plain columns, so existence of assistant and
        # district is not enforced
        voter.full_clean(
            exclude=["candidate", "assistant", "district"],
            validate_unique=False,
            validate_constraints=False,
        )

        try:
            with transaction.atomic():
                voter.save()
        except IntegrityError as e:
            if electoral_card and Voter.objects.with_card(electoral_card).exists():
                logger.warning(
                    f"Concurrent insert of electoral card {electoral_card}: {e}"
                )
                return IngestionResult(created=False, duplicate=True)
            logger.error(f"IntegrityError inserting voter: {e}")
            raise

        logger.info(f"Successfully created voter: {voter.pk}")
        return IngestionResult(created=True, id=voter.pk)

    def validate_voter_data(self, voter_data: VoterDataDict) -> dict[str, list[str]]:
        """
        Check the fields a submission cannot do without.

        Returns:
            Dictionary mapping field names to error messages, empty if valid.
        """
        errors: dict[str, list[str]] = {}

        candidate_id = voter_data.get("candidate_id")
        if not candidate_id or not str(candidate_id).strip():
            errors.setdefault("candidate_id", []).append("Candidate is required")

        full_name = voter_data.get("full_name") or ""
        if not str(full_name).strip():
            errors.setdefault("full_name", []).append("Full name is required")

        return errors

    def _sanitize_voter_data(self, voter_data: VoterDataDict) -> dict[str, Any]:
        """
        Normalize a submission into Voter model keyword arguments.

        Text is stripped of markup and control characters; ids become ints
        or None; dob becomes a date or None; a blank card becomes None.
        """
        sanitized: dict[str, Any] = {
            "candidate_id": to_optional_id(
                voter_data.get("candidate_id"), "candidate_id"
            ),
            "full_name": sanitize_text_field(str(voter_data.get("full_name", ""))),
        }
        if sanitized["candidate_id"] is None or not sanitized["full_name"]:
            raise ValidationError(REQUIRED_FIELDS_MESSAGE)

        assistant_id = voter_data.get("assistant_id")
        if not assistant_id:
            assistant_id = voter_data.get("aid")
        sanitized["assistant_id"] = to_optional_id(assistant_id, "assistant_id")
        sanitized["district_id"] = to_optional_id(
            voter_data.get("district_id"), "district_id"
        )
        sanitized["dob"] = to_optional_date(voter_data.get("dob"), "dob")
        sanitized["polling_center"] = sanitize_text_field(
            str(voter_data.get("polling_center") or "")
        )
        sanitized["electoral_card"] = (
            sanitize_text_field(str(voter_data.get("electoral_card") or "")) or None
        )
        return sanitized

    def update_voter(self, voter_id: int, voter_data: VoterUpdateDict) -> int:
        """
        Apply a partial update to one voter.

        Only keys present in ``voter_data`` are written. Present-but-empty
        values clear nullable fields; ``full_name`` and ``candidate_id``
        cannot be cleared.

        Args:
            voter_id: Primary key of the voter
            voter_data: Fields to change

        Returns:
            Number of rows changed: 0 for an unknown id or an empty payload.

        Raises:
            ValidationError: Invalid values, or an electoral card that already
                belongs to another voter
        """
        logger.info(f"Updating voter: {voter_id}")

        updates: dict[str, Any] = {}

        if "full_name" in voter_data:
            full_name = sanitize_text_field(str(voter_data["full_name"] or ""))
            if not full_name:
                raise ValidationError({"full_name": ["Full name cannot be empty"]})
            updates["full_name"] = full_name

        if "candidate_id" in voter_data:
            candidate_id = to_optional_id(voter_data["candidate_id"], "candidate_id")
            if candidate_id is None:
                raise ValidationError({"candidate_id": ["Candidate is required"]})
            updates["candidate_id"] = candidate_id

        if "assistant_id" in voter_data:
            updates["assistant_id"] = to_optional_id(
                voter_data["assistant_id"], "assistant_id"
            )

        if "district_id" in voter_data:
            updates["district_id"] = to_optional_id(
                voter_data["district_id"], "district_id"
            )

        if "dob" in voter_data:
            updates["dob"] = to_optional_date(voter_data["dob"], "dob")

        if "polling_center" in voter_data:
            updates["polling_center"] = sanitize_text_field(
                str(voter_data["polling_center"] or "")
            )

        if "electoral_card" in voter_data:
            electoral_card = (
                sanitize_text_field(str(voter_data["electoral_card"] or "")) or None
            )
            if (
                electoral_card
                and Voter.objects.with_card(electoral_card)
                .exclude(pk=voter_id)
                .exists()
            ):
                logger.warning(f"Electoral card already used: {electoral_card}")
                raise ValidationError(CARD_IN_USE_MESSAGE)
            updates["electoral_card"] = electoral_card

        if not updates:
            logger.debug(f"No fields to update for voter {voter_id}")
            return 0

        validate_field_values(Voter, updates)

        try:
            with transaction.atomic():
                changes = Voter.objects.filter(pk=voter_id).update(**updates)
        except IntegrityError as e:
            logger.warning(f"IntegrityError updating voter {voter_id}: {e}")
            raise ValidationError(CARD_IN_USE_MESSAGE) from e

        logger.info(f"Updated voter {voter_id}: {changes} row(s)")
        return changes

    def delete_voter(self, voter_id: int) -> int:
        """Hard-delete one voter and return the number of rows removed."""
        deleted, _ = Voter.objects.filter(pk=voter_id).delete()
        logger.info(f"Deleted voter {voter_id}: {deleted} row(s)")
        return deleted

    def search_voters(
        self, search: str | None = None, page: Any = 1, size: Any = None
    ) -> dict[str, Any]:
        """
        Return one page of voters matching a name or card substring.

        ``page`` is at least 1; ``size`` defaults to 20 and is clamped to
        5..50. Results are newest first (id descending).
        """
        page_number = max(1, to_non_negative_int(page))
        page_size = to_non_negative_int(size) or DEFAULT_PAGE_SIZE
        page_size = min(MAX_PAGE_SIZE, max(MIN_PAGE_SIZE, page_size))

        offset = (page_number - 1) * page_size
        items = list(
            Voter.objects.search(search or "")
            .order_by("-id")
            .values(
                "id",
                "full_name",
                "electoral_card",
                "candidate_id",
                "district_id",
            )[offset : offset + page_size]
        )

        logger.debug(
            f"Voter search '{search}' page {page_number} returned {len(items)} rows"
        )
        return {"page": page_number, "size": page_size, "items": items}
