"""
Reference data service for CitizenVote administrators.

Covers the party settings row, governorates, districts, candidates and
assistants. Deletes are plain hard deletes: rows that reference a deleted
entity are left as they are, and the dashboards show a null label for them.
"""

from typing import Any, TypedDict

import phonenumbers
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import QuerySet
from loguru import logger
from phonenumbers import NumberParseException

from citizenvote.models import (
    PARTY_ID,
    Assistant,
    Candidate,
    District,
    Governorate,
    Party,
    sanitize_text_field,
)
from citizenvote.utils.coercion import (
    to_non_negative_int,
    to_optional_date,
    to_optional_id,
)
from citizenvote.utils.validation import validate_field_values


class PartyDataDict(TypedDict, total=False):
    name: str
    threshold: int | str
    start_date: str | None
    end_date: str | None


class GovernorateDataDict(TypedDict, total=False):
    name: str


class DistrictDataDict(TypedDict, total=False):
    name: str
    official_voters: int | str
    governorate_id: int | str | None


class CandidateDataDict(TypedDict, total=False):
    name: str
    target: int | str
    district_id: int | str | None


class AssistantDataDict(TypedDict, total=False):
    candidate_id: int | str
    name: str
    phone: str
    area_tags: str


class ReferenceDataService:
    """
    CRUD operations on campaign reference data.

    Conventions shared by every entity:
    - ``name`` is required on create and cannot be blanked on update
    - counts (threshold, target, official_voters) coerce to non-negative ints,
      with anything unparsable becoming 0
    - reference ids coerce to int, or None when blank
    - updates are partial: only keys present in the payload are written, and
      the number of changed rows is returned (0 for an unknown id)
    - deletes return the number of rows removed and never cascade

    Example:
        >>> service = ReferenceDataService()
        >>> district = service.create_district(
        ...     {'name': 'Karkh', 'official_voters': '52000'}
        ... )
        >>> service.update_district(district.id, {'official_voters': 53000})
        1
    """

    # Party

    def get_party(self) -> Party:
        return Party.load()

    def upsert_party(self, party_data: PartyDataDict) -> Party:
        """
        Write all party settings in one go.

        The row is keyed by id 1 and created if missing. Every field is
        replaced: an omitted field is written as empty, zero or null.

        Raises:
            ValidationError: Bad dates, or an end date before the start date
        """
        start_date = to_optional_date(party_data.get("start_date"), "start_date")
        end_date = to_optional_date(party_data.get("end_date"), "end_date")
        if start_date and end_date and start_date > end_date:
            raise ValidationError(
                {"end_date": ["Campaign end date cannot be before its start date."]}
            )

        defaults = {
            "name": sanitize_text_field(str(party_data.get("name") or "")),
            "threshold": to_non_negative_int(party_data.get("threshold")),
            "start_date": start_date,
            "end_date": end_date,
        }
        validate_field_values(Party, defaults)
        party, created = Party.objects.update_or_create(
            pk=PARTY_ID, defaults=defaults
        )
        logger.info(
            f"{'Created' if created else 'Updated'} party settings: "
            f"threshold={party.threshold}"
        )
        return party

    def set_threshold(self, value: Any) -> int:
        """Set only the party threshold and return the stored value."""
        threshold = to_non_negative_int(value)
        Party.load()
        Party.objects.filter(pk=PARTY_ID).update(threshold=threshold)
        logger.info(f"Party threshold set to {threshold}")
        return threshold

    # Governorates

    def list_governorates(self) -> QuerySet[Governorate]:
        return Governorate.objects.order_by("id")

    def create_governorate(self, governorate_data: GovernorateDataDict) -> Governorate:
        name = self._required_name(governorate_data)
        governorate = Governorate(name=name)
        governorate.full_clean()
        governorate.save()
        logger.info(f"Created governorate {governorate.pk}: {name}")
        return governorate

    def update_governorate(
        self, governorate_id: int, governorate_data: GovernorateDataDict
    ) -> int:
        updates = self._collect_updates(governorate_data)
        return self._apply_updates(Governorate, governorate_id, updates)

    def delete_governorate(self, governorate_id: int) -> int:
        return self._delete(Governorate, governorate_id)

    # Districts

    def list_districts(self) -> QuerySet[District]:
        """Districts in id order, annotated with ``governorate_name``."""
        return District.objects.with_governorate()

    def create_district(self, district_data: DistrictDataDict) -> District:
        name = self._required_name(district_data)
        district = District(
            name=name,
            official_voters=to_non_negative_int(district_data.get("official_voters")),
            governorate_id=to_optional_id(
                district_data.get("governorate_id"), "governorate_id"
            ),
        )
        district.full_clean(exclude=["governorate"])
        district.save()
        logger.info(f"Created district {district.pk}: {name}")
        return district

    def update_district(self, district_id: int, district_data: DistrictDataDict) -> int:
        updates = self._collect_updates(
            district_data,
            count_fields=("official_voters",),
            reference_fields=("governorate_id",),
        )
        return self._apply_updates(District, district_id, updates)

    def delete_district(self, district_id: int) -> int:
        return self._delete(District, district_id)

    # Candidates

    def list_candidates(self) -> QuerySet[Candidate]:
        """Candidates in id order, annotated with ``district_name``."""
        return Candidate.objects.with_district_name().order_by("id")

    def create_candidate(self, candidate_data: CandidateDataDict) -> Candidate:
        name = self._required_name(candidate_data)
        candidate = Candidate(
            name=name,
            target=to_non_negative_int(candidate_data.get("target")),
            district_id=to_optional_id(
                candidate_data.get("district_id"), "district_id"
            ),
        )
        candidate.full_clean(exclude=["district"])
        candidate.save()
        logger.info(f"Created candidate {candidate.pk}: {name}")
        return candidate

    def update_candidate(
        self, candidate_id: int, candidate_data: CandidateDataDict
    ) -> int:
        updates = self._collect_updates(
            candidate_data,
            count_fields=("target",),
            reference_fields=("district_id",),
        )
        return self._apply_updates(Candidate, candidate_id, updates)

    def delete_candidate(self, candidate_id: int) -> int:
        return self._delete(Candidate, candidate_id)

    # Assistants

    def create_assistant(self, assistant_data: AssistantDataDict) -> Assistant:
        """
        Register an assistant for a candidate.

        Raises:
            ValidationError: Missing candidate_id or name, or a bad phone number
            Candidate.DoesNotExist: If the candidate does not exist
        """
        candidate_id = to_optional_id(
            assistant_data.get("candidate_id"), "candidate_id"
        )
        name = sanitize_text_field(str(assistant_data.get("name") or ""))
        if candidate_id is None or not name:
            raise ValidationError("candidate_id & name required")

        if not Candidate.objects.filter(pk=candidate_id).exists():
            logger.warning(f"Candidate not found: {candidate_id}")
            raise Candidate.DoesNotExist(f"Candidate {candidate_id} not found")

        phone = sanitize_text_field(str(assistant_data.get("phone") or ""))
        assistant = Assistant(
            candidate_id=candidate_id,
            name=name,
            phone=phone,
            area_tags=sanitize_text_field(str(assistant_data.get("area_tags") or "")),
        )
        assistant.full_clean(exclude=["candidate"])
        assistant.phone = self._normalize_phone_number(phone)
        assistant.save()

        logger.info(f"Created assistant {assistant.pk} for candidate {candidate_id}")
        return assistant

    def _normalize_phone_number(self, phone_number: str) -> str:
        """
        Format a phone number as E.164, or return it unchanged.

        Example:
            >>> ReferenceDataService()._normalize_phone_number("0770 123 4567")
            '+9647701234567'
        """
        if not phone_number.strip():
            return phone_number

        try:
            parsed_number = phonenumbers.parse(
                phone_number, settings.PHONE_DEFAULT_REGION
            )
            if phonenumbers.is_possible_number(parsed_number):
                return phonenumbers.format_number(
                    parsed_number, phonenumbers.PhoneNumberFormat.E164
                )
        except NumberParseException:
            logger.debug(f"Could not parse phone number: {phone_number}")

        return phone_number

    # Helpers

    def _required_name(self, data: dict[str, Any]) -> str:
        name = sanitize_text_field(str(data.get("name") or ""))
        if not name:
            raise ValidationError("name required")
        return name

    def _collect_updates(
        self,
        data: dict[str, Any],
        count_fields: tuple[str, ...] = (),
        reference_fields: tuple[str, ...] = (),
    ) -> dict[str, Any]:
        """Build the column updates for the keys present in ``data``."""
        updates: dict[str, Any] = {}
        if "name" in data:
            name = sanitize_text_field(str(data["name"] or ""))
            if not name:
                raise ValidationError({"name": ["Name cannot be empty"]})
            updates["name"] = name
        for field in count_fields:
            if field in data:
                updates[field] = to_non_negative_int(data[field])
        for field in reference_fields:
            if field in data:
                updates[field] = to_optional_id(data[field], field)
        return updates

    def _apply_updates(
        self, model: type[models.Model], pk: int, updates: dict[str, Any]
    ) -> int:
        if not updates:
            logger.debug(f"No fields to update for {model.__name__} {pk}")
            return 0
        validate_field_values(model, updates)
        changed = model.objects.filter(pk=pk).update(**updates)
        logger.info(f"Updated {model.__name__} {pk}: {changed} row(s)")
        return changed

    def _delete(self, model: type[models.Model], pk: int) -> int:
        deleted, _ = model.objects.filter(pk=pk).delete()
        logger.info(f"Deleted {model.__name__} {pk}: {deleted} row(s)")
        return deleted
