"""
Unit tests for ReferenceDataService (party, governorates, districts,
candidates, assistants).
"""

from datetime import date

import pytest
from django.core.exceptions import ValidationError

from citizenvote.models import Candidate, District, Governorate, Party
from citizenvote.services.admin_service import ReferenceDataService
from citizenvote.utils.coercion import (
    to_non_negative_int,
    to_optional_date,
    to_optional_id,
)
from tests.factories import CandidateFactory, DistrictFactory, GovernorateFactory


@pytest.fixture
def service():
    return ReferenceDataService()


class TestCoercion:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("15000", 15000),
            (15000, 15000),
            ("12.7", 12),
            ("-5", 0),
            ("abc", 0),
            (None, 0),
            ("", 0),
            (float("inf"), 0),
            ("1e30", 2147483647),
            ("99999999999999999999", 2147483647),
        ],
    )
    def test_to_non_negative_int(self, value, expected):
        assert to_non_negative_int(value) == expected

    @pytest.mark.parametrize("value", [None, "", "   ", 0])
    def test_blank_ids_are_none(self, value):
        assert to_optional_id(value) is None

    def test_id_strings_are_parsed(self):
        assert to_optional_id(" 42 ") == 42

    def test_non_integer_id_raises(self):
        with pytest.raises(ValidationError):
            to_optional_id("4.5", "district_id")

    def test_out_of_range_id_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            to_optional_id("99999999999999999999", "district_id")
        assert "district_id" in exc_info.value.message_dict

    def test_dates(self):
        assert to_optional_date("2025-03-01") == date(2025, 3, 1)
        assert to_optional_date("") is None
        with pytest.raises(ValidationError):
            to_optional_date("2025-13-01")


@pytest.mark.django_db
class TestParty:
    def test_upsert_creates_then_updates(self, service):
        service.upsert_party(
            {
                "name": "Unity",
                "threshold": "25000",
                "start_date": "2025-01-01",
                "end_date": "2025-06-30",
            }
        )
        party = service.upsert_party({"name": "Unity List", "threshold": 30000})

        assert Party.objects.count() == 1
        assert party.pk == 1
        assert party.name == "Unity List"
        assert party.threshold == 30000
        assert party.start_date is None

    def test_upsert_rejects_inverted_window(self, service):
        with pytest.raises(ValidationError):
            service.upsert_party(
                {"start_date": "2025-06-30", "end_date": "2025-01-01"}
            )

    def test_set_threshold_coerces(self, service):
        assert service.set_threshold("-10") == 0
        assert service.set_threshold("42") == 42
        assert Party.load().threshold == 42

    def test_set_threshold_clamps_to_column_range(self, service):
        assert service.set_threshold("1e30") == 2147483647
        assert Party.load().threshold == 2147483647

    def test_upsert_rejects_overlong_name(self, service):
        with pytest.raises(ValidationError) as exc_info:
            service.upsert_party({"name": "x" * 201})
        assert "name" in exc_info.value.message_dict
        assert not Party.objects.exists()

    def test_set_threshold_keeps_other_fields(self, service):
        Party.objects.create(name="Unity", threshold=1)

        service.set_threshold(99)

        party = Party.load()
        assert party.name == "Unity"
        assert party.threshold == 99


@pytest.mark.django_db
class TestGovernorates:
    def test_create_list_update_delete(self, service):
        governorate = service.create_governorate({"name": " Baghdad "})
        assert governorate.name == "Baghdad"
        assert [g.name for g in service.list_governorates()] == ["Baghdad"]

        assert service.update_governorate(governorate.id, {"name": "Basra"}) == 1
        assert Governorate.objects.get(pk=governorate.id).name == "Basra"

        assert service.delete_governorate(governorate.id) == 1
        assert service.delete_governorate(governorate.id) == 0

    def test_name_is_required(self, service):
        with pytest.raises(ValidationError):
            service.create_governorate({"name": "   "})

    def test_update_cannot_blank_name(self, service):
        governorate = GovernorateFactory()

        with pytest.raises(ValidationError):
            service.update_governorate(governorate.id, {"name": ""})

    def test_update_unknown_id_returns_zero(self, service):
        assert service.update_governorate(999999, {"name": "X"}) == 0

    def test_overlong_name_is_rejected(self, service):
        governorate = GovernorateFactory(name="Baghdad")

        with pytest.raises(ValidationError):
            service.create_governorate({"name": "x" * 201})
        with pytest.raises(ValidationError):
            service.update_governorate(governorate.id, {"name": "x" * 201})

        assert list(Governorate.objects.values_list("name", flat=True)) == ["Baghdad"]


@pytest.mark.django_db
class TestDistricts:
    def test_create_coerces_fields(self, service):
        governorate = GovernorateFactory()

        district = service.create_district(
            {
                "name": "Karkh",
                "official_voters": "oops",
                "governorate_id": str(governorate.id),
            }
        )

        assert district.official_voters == 0
        assert district.governorate_id == governorate.id

    def test_oversized_count_is_clamped(self, service):
        district = service.create_district(
            {"name": "Karkh", "official_voters": "99999999999999999999"}
        )
        assert district.official_voters == 2147483647

        service.update_district(district.id, {"official_voters": "1e30"})
        district.refresh_from_db()
        assert district.official_voters == 2147483647

    def test_blank_governorate_id_is_null(self, service):
        district = service.create_district({"name": "Karkh", "governorate_id": "  "})

        assert district.governorate_id is None

    def test_list_includes_governorate_name(self, service):
        governorate = GovernorateFactory(name="Baghdad")
        DistrictFactory(name="Karkh", governorate=governorate)
        DistrictFactory(name="Orphan", governorate=None)

        rows = [(d.name, d.governorate_name) for d in service.list_districts()]

        assert rows == [("Karkh", "Baghdad"), ("Orphan", None)]

    def test_partial_update(self, service):
        district = DistrictFactory(name="Karkh", official_voters=100)

        service.update_district(district.id, {"official_voters": "250"})

        district.refresh_from_db()
        assert district.name == "Karkh"
        assert district.official_voters == 250
        assert district.governorate_id is not None

    def test_update_clears_governorate(self, service):
        district = DistrictFactory()

        service.update_district(district.id, {"governorate_id": None})

        district.refresh_from_db()
        assert district.governorate_id is None

    def test_deleting_governorate_leaves_district(self, service):
        district = DistrictFactory()

        service.delete_governorate(district.governorate_id)

        row = service.list_districts().get(pk=district.pk)
        assert row.governorate_id is not None
        assert row.governorate_name is None


@pytest.mark.django_db
class TestCandidates:
    def test_create_and_list(self, service):
        district = DistrictFactory(name="Karkh")

        candidate = service.create_candidate(
            {"name": "Zainab Ali", "district_id": district.id, "target": "150"}
        )

        assert candidate.target == 150

        big = service.create_candidate({"name": "Big", "target": "1e30"})
        assert big.target == 2147483647
        rows = list(service.list_candidates())
        assert rows[0].district_name == "Karkh"

    def test_update_and_delete(self, service):
        candidate = CandidateFactory(target=10)

        assert service.update_candidate(candidate.id, {"target": 20}) == 1
        assert Candidate.objects.get(pk=candidate.id).target == 20
        assert service.update_candidate(candidate.id, {}) == 0

        assert service.delete_candidate(candidate.id) == 1
        assert not Candidate.objects.filter(pk=candidate.id).exists()

    def test_overlong_name_is_rejected(self, service):
        candidate = CandidateFactory(name="Zainab Ali")

        with pytest.raises(ValidationError):
            service.create_candidate({"name": "x" * 201})
        with pytest.raises(ValidationError):
            service.update_candidate(candidate.id, {"name": "x" * 201})

        candidate.refresh_from_db()
        assert candidate.name == "Zainab Ali"

    def test_deleting_district_does_not_cascade(self, service):
        district = DistrictFactory()
        candidate = CandidateFactory(district=district)

        service.delete_district(district.id)

        assert not District.objects.filter(pk=district.id).exists()
        assert service.list_candidates().get(pk=candidate.id).district_name is None


@pytest.mark.django_db
class TestAssistants:
    def test_create_assistant(self, service, candidate):
        assistant = service.create_assistant(
            {
                "candidate_id": candidate.id,
                "name": "Omar",
                "phone": "+9647701234567",
                "area_tags": "north",
            }
        )

        assert assistant.candidate_id == candidate.id
        assert assistant.phone == "+9647701234567"

    def test_local_phone_is_normalized(self, service, candidate):
        assistant = service.create_assistant(
            {"candidate_id": candidate.id, "name": "Omar", "phone": "0770 123 4567"}
        )

        assert assistant.phone == "+9647701234567"

    @pytest.mark.parametrize("missing", ["candidate_id", "name"])
    def test_required_fields(self, service, candidate, missing):
        data = {"candidate_id": candidate.id, "name": "Omar"}
        data[missing] = ""

        with pytest.raises(ValidationError) as exc_info:
            service.create_assistant(data)
        assert exc_info.value.messages == ["candidate_id & name required"]

    def test_unknown_candidate(self, service):
        with pytest.raises(Candidate.DoesNotExist):
            service.create_assistant({"candidate_id": 999999, "name": "Omar"})

    @pytest.mark.parametrize("phone", ["12", "abc"])
    def test_invalid_phone(self, service, candidate, phone):
        with pytest.raises(ValidationError):
            service.create_assistant(
                {"candidate_id": candidate.id, "name": "Omar", "phone": phone}
            )
