"""
Component Tests for AuthService

Sign-in, signup, token validation and password change against the
in-memory row store.
"""
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from core.config import RowsConfig
from core.exceptions import AuthenticationError, DuplicateError, NotFoundError, ValidationFailedError
from core.jwt_manager import TokenClaims
from earngage.auth_service.auth_service import AuthService
from earngage.auth_service.password_utils import verify_password
from earngage.user_service.models import UserType
from earngage.user_service.user_repository import (
    BRAND_PROFILES_TABLE,
    CREATOR_PROFILES_TABLE,
    USERS_TABLE,
    UserRepository,
)

from tests.component.conftest import TEST_PASSWORD
from tests.fixtures import make_register_request

pytestmark = pytest.mark.component


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_returns_user_and_token(self, auth_service, creator, session):
        result = await auth_service.login_user(creator["email"], TEST_PASSWORD)

        assert result.user.id == creator["id"]
        assert result.user.password is None
        assert result.token
        assert result.token_type == "Bearer"
        assert session.get_token() == result.token

    @pytest.mark.asyncio
    async def test_login_email_is_case_insensitive(self, auth_service, creator):
        result = await auth_service.login_user(f"  {creator['email'].upper()} ", TEST_PASSWORD)
        assert result.user.id == creator["id"]

    @pytest.mark.asyncio
    async def test_login_stamps_last_login(self, auth_service, creator, store):
        result = await auth_service.login_user(creator["email"], TEST_PASSWORD)

        assert result.user.last_login is not None
        assert store.tables[USERS_TABLE][creator["id"]]["lastLogin"]

    @pytest.mark.asyncio
    async def test_wrong_password(self, auth_service, creator, session):
        with pytest.raises(AuthenticationError, match="Invalid email or password"):
            await auth_service.login_user(creator["email"], "wrongpass1")
        assert session.get_token() is None

    @pytest.mark.asyncio
    async def test_unknown_email(self, auth_service):
        with pytest.raises(AuthenticationError, match="Invalid email or password"):
            await auth_service.login_user("nobody@example.com", TEST_PASSWORD)

    @pytest.mark.asyncio
    async def test_malformed_email(self, auth_service):
        with pytest.raises(ValidationFailedError):
            await auth_service.login_user("not-an-email", TEST_PASSWORD)

    @pytest.mark.asyncio
    async def test_last_login_failure_does_not_block_login(self, auth_service, creator, store, monkeypatch):
        monkeypatch.setattr(store, "update", AsyncMock(side_effect=RuntimeError("sheet locked")))

        result = await auth_service.login_user(creator["email"], TEST_PASSWORD)

        assert result.user.id == creator["id"]


class TestRegister:

    @pytest.mark.asyncio
    async def test_register_creator(self, auth_service, store, session):
        request = make_register_request("creator")

        result = await auth_service.register_user(request)

        stored = store.tables[USERS_TABLE][result.user.id]
        assert result.user.email == request["email"]
        assert result.user.user_type == UserType.CREATOR
        assert result.user.password is None
        assert stored["password"] != request["password"]
        assert verify_password(request["password"], stored["password"])
        assert session.get_token() == result.token

        profiles = store.rows(CREATOR_PROFILES_TABLE)
        assert len(profiles) == 1
        assert profiles[0]["userId"] == result.user.id

    @pytest.mark.asyncio
    async def test_register_brand_creates_brand_profile(self, auth_service, store):
        result = await auth_service.register_user(make_register_request("brand"))

        assert result.user.user_type == UserType.BRAND
        assert [p["userId"] for p in store.rows(BRAND_PROFILES_TABLE)] == [result.user.id]
        assert store.rows(CREATOR_PROFILES_TABLE) == []

    @pytest.mark.asyncio
    async def test_duplicate_email(self, auth_service, creator):
        with pytest.raises(DuplicateError):
            await auth_service.register_user(make_register_request(email=creator["email"].upper()))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("overrides", [
        {"password": "short1"},
        {"password": "lettersonly"},
        {"email": "nope"},
        {"userType": "agency"},
    ])
    async def test_invalid_registration(self, auth_service, store, overrides):
        with pytest.raises(ValidationFailedError):
            await auth_service.register_user(make_register_request(**overrides))
        assert store.rows(USERS_TABLE) == []

    @pytest.mark.asyncio
    async def test_register_uses_append_when_sheet_configured(self, store, api, earngage_config):
        rows_config = RowsConfig(spreadsheet_id="sheet-1", users_table_id="table-1")
        service = AuthService(
            UserRepository(store, rows_config), api.auth_service.jwt_manager, config=earngage_config.auth
        )
        request = make_register_request()

        result = await service.register_user(request)

        assert store.rows(USERS_TABLE) == []
        appended = store.appended[0]
        assert appended["spreadsheet_id"] == "sheet-1"
        assert appended["table_id"] == "table-1"
        assert appended["range"] == "A:H"
        values = appended["values"][0]
        assert values[0] == result.user.id
        assert values[1] == request["email"]
        assert values[2] == "creator"
        assert values[3].startswith("$2")


class TestTokens:

    @pytest.mark.asyncio
    async def test_validate_token_loads_user(self, auth_service, creator):
        result = await auth_service.login_user(creator["email"], TEST_PASSWORD)

        user = await auth_service.validate_token(result.token)

        assert user.id == creator["id"]
        assert user.password is None

    @pytest.mark.asyncio
    async def test_validate_token_defaults_to_session(self, auth_service, creator):
        await auth_service.login_user(creator["email"], TEST_PASSWORD)

        user = await auth_service.validate_token()

        assert user.id == creator["id"]

    @pytest.mark.asyncio
    async def test_logout_clears_session(self, auth_service, creator, session):
        await auth_service.login_user(creator["email"], TEST_PASSWORD)

        auth_service.logout()

        assert session.get_token() is None
        assert await auth_service.validate_token() is None

    @pytest.mark.asyncio
    async def test_invalid_and_expired_tokens(self, auth_service, creator):
        expired = auth_service.jwt_manager.create_access_token(
            TokenClaims(user_id=creator["id"], email=creator["email"], user_type="creator"),
            expires_delta=timedelta(seconds=-5),
        )

        assert await auth_service.validate_token("garbage") is None
        assert await auth_service.validate_token(expired) is None

    @pytest.mark.asyncio
    async def test_token_for_deleted_user(self, auth_service, creator, store):
        result = await auth_service.login_user(creator["email"], TEST_PASSWORD)
        del store.tables[USERS_TABLE][creator["id"]]

        assert await auth_service.validate_token(result.token) is None


class TestChangePassword:

    @pytest.mark.asyncio
    async def test_change_password(self, auth_service, creator):
        assert await auth_service.change_password(creator["id"], TEST_PASSWORD, "n3wpassword") is True

        result = await auth_service.login_user(creator["email"], "n3wpassword")
        assert result.user.id == creator["id"]
        with pytest.raises(AuthenticationError):
            await auth_service.login_user(creator["email"], TEST_PASSWORD)

    @pytest.mark.asyncio
    async def test_wrong_current_password(self, auth_service, creator):
        with pytest.raises(AuthenticationError):
            await auth_service.change_password(creator["id"], "wrongpass1", "n3wpassword")

    @pytest.mark.asyncio
    async def test_weak_new_password(self, auth_service, creator):
        with pytest.raises(ValidationFailedError):
            await auth_service.change_password(creator["id"], TEST_PASSWORD, "weak")

    @pytest.mark.asyncio
    async def test_unknown_user(self, auth_service):
        with pytest.raises(NotFoundError):
            await auth_service.change_password("usr-missing", TEST_PASSWORD, "n3wpassword")
