"""
Unit tests for the voter ingestion service.

Tests coverage:
- submit_voter: validation, candidate check, electoral card duplicates, race
- update_voter: tri-state partial updates and card conflicts
- delete_voter and search_voters
"""

from datetime import date
from unittest import mock

import pytest
from django.core.exceptions import ValidationError

from citizenvote.models import Candidate, Voter, VoterManager
from citizenvote.services.voter_service import (
    IngestionResult,
    VoterIngestionService,
)
from tests.factories import AssistantFactory, DistrictFactory, VoterFactory


@pytest.fixture
def service():
    return VoterIngestionService()


@pytest.fixture
def voter_data(candidate, district):
    return {
        "candidate_id": candidate.id,
        "full_name": "Ali Hassan",
        "dob": "1990-01-01",
        "district_id": district.id,
        "polling_center": "School 14",
        "electoral_card": "EC-1001",
    }


@pytest.mark.django_db
class TestSubmitVoter:
    def test_creates_voter(self, service, voter_data, candidate, district):
        result = service.submit_voter(voter_data)

        assert result.created is True
        assert result.duplicate is False
        voter = Voter.objects.get(pk=result.id)
        assert voter.candidate_id == candidate.id
        assert voter.full_name == "Ali Hassan"
        assert voter.dob == date(1990, 1, 1)
        assert voter.district_id == district.id
        assert voter.electoral_card == "EC-1001"
        assert voter.assistant_id is None

    def test_existing_card_is_duplicate_and_writes_nothing(
        self, service, voter_data
    ):
        service.submit_voter(voter_data)
        before = Voter.objects.count()

        result = service.submit_voter({**voter_data, "full_name": "Someone Else"})

        assert result == IngestionResult(created=False, duplicate=True)
        assert Voter.objects.count() == before

    def test_blank_cards_never_collide(self, service, voter_data):
        service.submit_voter({**voter_data, "electoral_card": ""})
        result = service.submit_voter({**voter_data, "electoral_card": "   "})

        assert result.created is True
        assert Voter.objects.filter(electoral_card__isnull=True).count() == 2

    @pytest.mark.parametrize("missing", ["candidate_id", "full_name"])
    def test_required_fields(self, service, voter_data, missing):
        voter_data[missing] = ""

        with pytest.raises(ValidationError) as exc_info:
            service.submit_voter(voter_data)
        assert exc_info.value.messages == ["candidate_id & full_name required"]
        assert Voter.objects.count() == 0

    @pytest.mark.parametrize("candidate_id", [0, "   ", None])
    def test_blank_candidate_id_is_a_missing_field(
        self, service, voter_data, candidate_id
    ):
        voter_data["candidate_id"] = candidate_id

        with pytest.raises(ValidationError) as exc_info:
            service.submit_voter(voter_data)
        assert exc_info.value.messages == ["candidate_id & full_name required"]

    def test_name_that_sanitizes_to_nothing_is_rejected(self, service, voter_data):
        voter_data["full_name"] = "<b></b>"

        with pytest.raises(ValidationError):
            service.submit_voter(voter_data)

    def test_unknown_candidate(self, service, voter_data):
        voter_data["candidate_id"] = 999999

        with pytest.raises(Candidate.DoesNotExist):
            service.submit_voter(voter_data)

    def test_non_integer_candidate_id(self, service, voter_data):
        voter_data["candidate_id"] = "abc"

        with pytest.raises(ValidationError):
            service.submit_voter(voter_data)

    def test_invalid_dob(self, service, voter_data):
        voter_data["dob"] = "01/02/1990"

        with pytest.raises(ValidationError) as exc_info:
            service.submit_voter(voter_data)
        assert "dob" in exc_info.value.message_dict

    def test_aid_sets_assistant(self, service, voter_data, candidate):
        assistant = AssistantFactory(candidate=candidate)

        result = service.submit_voter({**voter_data, "aid": str(assistant.id)})

        assert Voter.objects.get(pk=result.id).assistant_id == assistant.id

    def test_explicit_assistant_id_wins_over_aid(self, service, voter_data, candidate):
        explicit = AssistantFactory(candidate=candidate)
        linked = AssistantFactory(candidate=candidate)

        result = service.submit_voter(
            {**voter_data, "assistant_id": explicit.id, "aid": linked.id}
        )

        assert Voter.objects.get(pk=result.id).assistant_id == explicit.id

    def test_text_is_sanitized(self, service, voter_data):
        voter_data["full_name"] = "  <i>Ali</i> Hassan<script>x()</script> "

        result = service.submit_voter(voter_data)

        assert Voter.objects.get(pk=result.id).full_name == "Ali Hassan"

    def test_concurrent_insert_of_same_card_reports_duplicate(
        self, service, voter_data
    ):
        """The pre-insert check misses a row written by a concurrent request."""
        VoterFactory(electoral_card="EC-1001")
        real_with_card = VoterManager.with_card
        calls = {"n": 0}

        def stale_first_check(manager, electoral_card):
            calls["n"] += 1
            if calls["n"] == 1:
                return Voter.objects.none()
            return real_with_card(manager, electoral_card)

        with mock.patch.object(VoterManager, "with_card", stale_first_check):
            result = service.submit_voter(voter_data)

        assert result.duplicate is True
        assert result.created is False
        assert Voter.objects.filter(electoral_card="EC-1001").count() == 1


@pytest.mark.django_db
class TestUpdateVoter:
    def test_only_present_fields_change(self, service):
        voter = VoterFactory(
            full_name="Ali Hassan",
            dob=date(1990, 1, 1),
            electoral_card="EC-1",
            polling_center="School 14",
        )

        changes = service.update_voter(voter.id, {"dob": "1991-02-03"})

        voter.refresh_from_db()
        assert changes == 1
        assert voter.dob == date(1991, 2, 3)
        assert voter.full_name == "Ali Hassan"
        assert voter.electoral_card == "EC-1"
        assert voter.polling_center == "School 14"

    def test_present_null_clears_field(self, service):
        district = DistrictFactory()
        voter = VoterFactory(dob=date(1990, 1, 1), district=district)

        service.update_voter(voter.id, {"dob": None, "district_id": ""})

        voter.refresh_from_db()
        assert voter.dob is None
        assert voter.district_id is None

    def test_empty_payload_changes_nothing(self, service):
        voter = VoterFactory()

        assert service.update_voter(voter.id, {}) == 0

    def test_unknown_voter_returns_zero(self, service):
        assert service.update_voter(999999, {"full_name": "Nobody"}) == 0

    def test_card_used_by_another_voter(self, service):
        VoterFactory(electoral_card="EC-TAKEN")
        voter = VoterFactory(electoral_card="EC-MINE")

        with pytest.raises(ValidationError) as exc_info:
            service.update_voter(voter.id, {"electoral_card": "EC-TAKEN"})
        assert exc_info.value.messages == ["Electoral card already used"]

    def test_keeping_own_card_is_allowed(self, service):
        voter = VoterFactory(electoral_card="EC-MINE")

        assert service.update_voter(voter.id, {"electoral_card": "EC-MINE"}) == 1

    def test_blank_card_clears_to_null(self, service):
        voter = VoterFactory(electoral_card="EC-MINE")

        service.update_voter(voter.id, {"electoral_card": ""})

        voter.refresh_from_db()
        assert voter.electoral_card is None

    def test_overlong_values_are_rejected(self, service):
        voter = VoterFactory(full_name="Ali Hassan", electoral_card="EC-1")

        with pytest.raises(ValidationError) as exc_info:
            service.update_voter(
                voter.id, {"full_name": "x" * 256, "electoral_card": "E" * 65}
            )
        assert set(exc_info.value.message_dict) == {"full_name", "electoral_card"}

        voter.refresh_from_db()
        assert voter.full_name == "Ali Hassan"
        assert voter.electoral_card == "EC-1"

    @pytest.mark.parametrize("field", ["full_name", "candidate_id"])
    def test_required_fields_cannot_be_cleared(self, service, field):
        voter = VoterFactory()

        with pytest.raises(ValidationError):
            service.update_voter(voter.id, {field: ""})


@pytest.mark.django_db
class TestDeleteAndSearch:
    def test_delete_voter(self, service):
        voter = VoterFactory()

        assert service.delete_voter(voter.id) == 1
        assert service.delete_voter(voter.id) == 0

    def test_search_newest_first(self, service):
        first = VoterFactory(full_name="Ali One")
        second = VoterFactory(full_name="Ali Two")
        VoterFactory(full_name="Sara")

        result = service.search_voters("Ali")

        assert result["page"] == 1
        assert result["size"] == 20
        assert [item["id"] for item in result["items"]] == [second.id, first.id]
        assert set(result["items"][0]) == {
            "id",
            "full_name",
            "electoral_card",
            "candidate_id",
            "district_id",
        }

    @pytest.mark.parametrize(
        "size, expected",
        [(None, 20), ("1", 5), ("500", 50), ("abc", 20), ("10", 10)],
    )
    def test_page_size_is_clamped(self, service, size, expected):
        assert service.search_voters(size=size)["size"] == expected

    def test_pagination(self, service):
        voters = [VoterFactory() for _ in range(7)]

        page_two = service.search_voters(page="2", size="5")

        assert page_two["page"] == 2
        assert [item["id"] for item in page_two["items"]] == [
            voters[1].id,
            voters[0].id,
        ]

    def test_page_below_one_is_first_page(self, service):
        assert service.search_voters(page="-3")["page"] == 1
