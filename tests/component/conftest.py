"""
Component Test Layer Configuration

Every component test runs the real services and repositories against
MockRowStore, an in-memory stand-in for the Rows API.

Usage:
    pytest tests/component -v
"""
from typing import Any, Dict

import pytest

from core.session import InMemorySession
from earngage.auth_service.password_utils import hash_password
from earngage.factory import create_earngage_api
from earngage.user_service.user_repository import (
    BRAND_PROFILES_TABLE,
    CREATOR_PROFILES_TABLE,
    USERS_TABLE,
)
from earngage.campaign_service.campaign_repository import CAMPAIGNS_TABLE

from tests.component.mocks import MockHttpClient, MockRowStore
from tests.fixtures import (
    make_brand_profile_row,
    make_campaign_row,
    make_creator_profile_row,
    make_user_row,
)

TEST_PASSWORD = "s3cretpass"


# =============================================================================
# Core mocks
# =============================================================================

@pytest.fixture
def store() -> MockRowStore:
    return MockRowStore()


@pytest.fixture
def mock_http_client() -> MockHttpClient:
    return MockHttpClient()


@pytest.fixture
def session() -> InMemorySession:
    return InMemorySession()


@pytest.fixture
def api(earngage_config, session, store):
    """Full EarnGage stack over the in-memory store"""
    return create_earngage_api(earngage_config, session=session, store=store)


@pytest.fixture
def user_service(api):
    return api.user_service


@pytest.fixture
def campaign_service(api):
    return api.campaign_service


@pytest.fixture
def application_service(api):
    return api.application_service


@pytest.fixture
def analytics_service(api):
    return api.analytics_service


@pytest.fixture
def notification_service(api):
    return api.notification_service


@pytest.fixture
def auth_service(api):
    return api.auth_service


# =============================================================================
# Seeded data
# =============================================================================

@pytest.fixture(scope="session")
def password_hash() -> str:
    return hash_password(TEST_PASSWORD, rounds=4)


@pytest.fixture
def seed_creator(store, password_hash):
    """Seed a creator user plus profile; returns ``(user_row, profile_row)``"""

    def _seed(categories=None, with_profile: bool = True, **user_overrides) -> tuple:
        user = store.seed(USERS_TABLE, make_user_row("creator", password=password_hash, **user_overrides))
        profile = None
        if with_profile:
            profile = store.seed(
                CREATOR_PROFILES_TABLE, make_creator_profile_row(user["id"], categories=categories)
            )
        return user, profile

    return _seed


@pytest.fixture
def seed_brand(store, password_hash):
    """Seed a brand user plus profile; returns ``(user_row, profile_row)``"""

    def _seed(with_profile: bool = True, **user_overrides) -> tuple:
        user = store.seed(USERS_TABLE, make_user_row("brand", password=password_hash, **user_overrides))
        profile = None
        if with_profile:
            profile = store.seed(BRAND_PROFILES_TABLE, make_brand_profile_row(user["id"]))
        return user, profile

    return _seed


@pytest.fixture
def seed_campaign(store):
    def _seed(brand_user_id: str, **overrides) -> Dict[str, Any]:
        return store.seed(CAMPAIGNS_TABLE, make_campaign_row(brand_user_id, **overrides))

    return _seed


@pytest.fixture
def creator(seed_creator):
    user, _ = seed_creator()
    return user


@pytest.fixture
def brand(seed_brand):
    user, _ = seed_brand()
    return user


@pytest.fixture
def campaign(seed_campaign, brand):
    return seed_campaign(brand["id"])
