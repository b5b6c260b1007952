"""
Root conftest.py - Global fixtures and configuration for all test layers.

Test Layers:
    - unit/       : Pure functions and models, no I/O
    - component/  : Services, repositories and the HTTP API over mocked
                    Rows storage
"""
import os
import sys

import pytest

# Set testing environment BEFORE any project imports
os.environ["ENV"] = "testing"
os.environ["ENVIRONMENT"] = "testing"
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-earngage-tests")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from core.config import AuthConfig, EarnGageConfig, RowsConfig, reload_settings

from tests.fixtures import (
    make_user_id,
    make_email,
    make_timestamp,
)

reload_settings()


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: Unit tests (no I/O)")
    config.addinivalue_line("markers", "component: Component tests (mocked Rows storage)")


@pytest.fixture
def auth_config() -> AuthConfig:
    """Fast bcrypt and a fixed signing secret"""
    return AuthConfig(
        jwt_secret="test-secret-key-for-earngage-tests",
        access_token_expiry=3600,
        bcrypt_rounds=4,
    )


@pytest.fixture
def rows_config() -> RowsConfig:
    return RowsConfig(api_url="https://rows.example.com/v1", api_key="test-api-key", timeout=5.0)


@pytest.fixture
def earngage_config(auth_config, rows_config) -> EarnGageConfig:
    return EarnGageConfig(environment="testing", rows=rows_config, auth=auth_config)


@pytest.fixture
def user_id() -> str:
    return make_user_id()


@pytest.fixture
def email() -> str:
    return make_email()


@pytest.fixture
def now_iso() -> str:
    return make_timestamp()
