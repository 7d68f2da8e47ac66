"""
Pytest configuration and fixtures for the CitizenVote backend tests.
"""

import pytest
from rest_framework.test import APIClient

from tests.factories import CandidateFactory, DistrictFactory, UserFactory


@pytest.fixture
def admin_user(db):
    """Create a campaign administrator (staff user)."""
    return UserFactory(username="campaign_admin", is_staff=True)


@pytest.fixture
def regular_user(db):
    """Create an authenticated user without admin rights."""
    return UserFactory(username="canvasser")


@pytest.fixture
def api_client() -> APIClient:
    """Create an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin_client(api_client, admin_user) -> APIClient:
    """API client authenticated as a campaign administrator."""
    api_client.force_authenticate(user=admin_user)
    return api_client


@pytest.fixture
def user_client(regular_user) -> APIClient:
    """API client authenticated as a regular user."""
    client = APIClient()
    client.force_authenticate(user=regular_user)
    return client


@pytest.fixture
def district(db):
    return DistrictFactory(name="Karkh", official_voters=52000)


@pytest.fixture
def candidate(db, district):
    return CandidateFactory(name="Zainab Ali", target=200, district=district)
