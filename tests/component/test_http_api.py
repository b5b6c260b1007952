"""
Component Tests for the FastAPI layer

Routes run against the real services over MockRowStore; checks auth,
error-kind to status mapping and camelCase payloads.
"""
import pytest
from fastapi.testclient import TestClient

from earngage import main
from earngage.application_service.application_repository import APPLICATIONS_TABLE
from earngage.campaign_service.campaign_repository import CAMPAIGNS_TABLE
from earngage.factory import create_earngage_api
from earngage.notification_service.notification_repository import NOTIFICATIONS_TABLE
from earngage.user_service.user_repository import BRAND_PROFILES_TABLE

from tests.component.conftest import TEST_PASSWORD
from tests.fixtures import (
    make_application_row,
    make_campaign_create_request,
    make_notification_row,
    make_register_request,
)

pytestmark = pytest.mark.component


@pytest.fixture
def client(earngage_config, store, monkeypatch):
    monkeypatch.setattr(main, "api", create_earngage_api(earngage_config, store=store, stateless=True))
    with TestClient(main.app) as test_client:
        yield test_client


def login_headers(client, user_row):
    response = client.post("/api/v1/auth/login", json={"email": user_row["email"], "password": TEST_PASSWORD})
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def auth_headers(client, brand):
    return login_headers(client, brand)


@pytest.fixture
def creator_headers(client, creator):
    return login_headers(client, creator)


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["service"] == "earngage"

    def test_not_initialized(self, monkeypatch):
        monkeypatch.setattr(main, "api", None)
        client = TestClient(main.app)

        response = client.get("/api/v1/campaigns", headers={"Authorization": "Bearer x"})

        assert response.status_code == 503


class TestAuthRoutes:

    def test_register_returns_camel_case_user(self, client):
        request = make_register_request("brand")

        response = client.post("/api/v1/auth/register", json=request)

        assert response.status_code == 201
        body = response.json()
        assert body["token"]
        assert body["tokenType"] == "Bearer"
        assert body["user"]["userType"] == "brand"
        assert "password" not in body["user"]

    def test_duplicate_register(self, client, brand):
        response = client.post("/api/v1/auth/register", json=make_register_request(email=brand["email"]))

        assert response.status_code == 409
        assert response.json()["error"] == "duplicate"

    def test_bad_login(self, client, brand):
        response = client.post("/api/v1/auth/login", json={"email": brand["email"], "password": "wrongpass1"})

        assert response.status_code == 401
        assert response.json() == {"error": "authentication_failed", "message": "Invalid email or password"}

    def test_me(self, client, auth_headers, brand):
        response = client.get("/api/v1/auth/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["id"] == brand["id"]
        assert "password" not in response.json()

    def test_missing_token(self, client):
        response = client.get("/api/v1/campaigns")

        assert response.status_code == 401
        assert response.json()["detail"] == "Not authenticated"

    def test_invalid_token(self, client):
        response = client.get("/api/v1/campaigns", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or expired token"

    def test_change_password(self, client, auth_headers, brand):
        response = client.post(
            "/api/v1/auth/change-password",
            json={"currentPassword": TEST_PASSWORD, "newPassword": "an0therpass"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        relogin = client.post("/api/v1/auth/login", json={"email": brand["email"], "password": "an0therpass"})
        assert relogin.status_code == 200


class TestCampaignRoutes:

    def test_create_and_fetch(self, client, auth_headers, brand):
        created = client.post(
            "/api/v1/campaigns", json=make_campaign_create_request(brand["id"]), headers=auth_headers
        )

        assert created.status_code == 201
        campaign_id = created.json()["id"]
        assert created.json()["brandUserId"] == brand["id"]
        assert created.json()["status"] == "draft"

        fetched = client.get(f"/api/v1/campaigns/{campaign_id}", headers=auth_headers)
        assert fetched.json()["brand"]["companyName"] == "Acme Apparel"

    def test_validation_error_is_422(self, client, auth_headers, brand):
        response = client.post("/api/v1/campaigns", json={"brandUserId": brand["id"]}, headers=auth_headers)

        assert response.status_code == 422
        assert response.json()["error"] == "validation_failed"

    def test_missing_campaign_is_404(self, client, auth_headers):
        response = client.get("/api/v1/campaigns/cmp-missing", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_deleting_active_campaign_is_409(self, client, auth_headers, campaign):
        response = client.delete(f"/api/v1/campaigns/{campaign['id']}", headers=auth_headers)

        assert response.status_code == 409
        assert response.json()["error"] == "invalid_transition"

    def test_status_change(self, client, auth_headers, campaign):
        response = client.put(
            f"/api/v1/campaigns/{campaign['id']}/status", json={"status": "completed"}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["status"] == "completed"

    def test_store_failure_is_502(self, client, auth_headers, store):
        store.fail_table(CAMPAIGNS_TABLE)

        response = client.get("/api/v1/campaigns", headers=auth_headers)

        assert response.status_code == 502
        assert response.json()["error"] == "transport"
        assert response.json()["status"] == 500


class TestApplicationRoutes:

    def test_apply_and_check(self, client, auth_headers, creator_headers, campaign, creator):
        created = client.post("/api/v1/applications", json={
            "campaignId": campaign["id"],
            "proposal": "One reel",
        }, headers=creator_headers)

        assert created.status_code == 201
        assert created.json()["creatorUserId"] == creator["id"]
        applied = client.get(f"/api/v1/creators/{creator['id']}/applied/{campaign['id']}", headers=auth_headers)
        assert applied.json() == {"applied": True}

        listed = client.get(f"/api/v1/campaigns/{campaign['id']}/applications", headers=auth_headers)
        assert listed.json()[0]["creator"]["email"] == creator["email"]

    def test_creator_dashboard(self, client, auth_headers, creator, campaign):
        response = client.get(f"/api/v1/creators/{creator['id']}/dashboard", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["applications"] == []
        assert body["recommendedCampaigns"][0]["id"] == campaign["id"]
        assert body["stats"]["totalApplications"] == 0


class TestOwnership:

    def test_cannot_update_another_users_profile(self, client, creator_headers, brand, store):
        response = client.patch(
            f"/api/v1/users/{brand['id']}/profile", json={"companyName": "Hijacked"}, headers=creator_headers
        )

        assert response.status_code == 403
        assert [p["companyName"] for p in store.rows(BRAND_PROFILES_TABLE)] == ["Acme Apparel"]

    def test_updates_own_profile(self, client, auth_headers, brand):
        response = client.patch(
            f"/api/v1/users/{brand['id']}/profile", json={"companyName": "Acme Outdoors"}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["companyName"] == "Acme Outdoors"

    @pytest.mark.parametrize("kind", ["creators", "brands"])
    def test_cannot_create_profile_for_another_user(self, client, creator_headers, brand, kind):
        response = client.post(f"/api/v1/{kind}/{brand['id']}", json={}, headers=creator_headers)

        assert response.status_code == 403

    def test_campaign_owner_comes_from_token(self, client, auth_headers, brand, seed_brand):
        other, _ = seed_brand()

        response = client.post(
            "/api/v1/campaigns", json=make_campaign_create_request(other["id"]), headers=auth_headers
        )

        assert response.status_code == 201
        assert response.json()["brandUserId"] == brand["id"]

    def test_creator_cannot_create_campaign(self, client, creator_headers, creator, store):
        response = client.post(
            "/api/v1/campaigns", json=make_campaign_create_request(creator["id"]), headers=creator_headers
        )

        assert response.status_code == 403
        assert store.rows(CAMPAIGNS_TABLE) == []

    def test_other_brand_cannot_change_campaign(self, client, campaign, seed_brand, store):
        other, _ = seed_brand()
        headers = login_headers(client, other)
        path = f"/api/v1/campaigns/{campaign['id']}"

        responses = [
            client.patch(path, json={"title": "Mine now"}, headers=headers),
            client.put(f"{path}/status", json={"status": "draft"}, headers=headers),
            client.delete(path, headers=headers),
        ]

        assert [r.status_code for r in responses] == [403, 403, 403]
        assert store.tables[CAMPAIGNS_TABLE][campaign["id"]]["title"] == campaign["title"]
        assert store.tables[CAMPAIGNS_TABLE][campaign["id"]]["status"] == "active"

    def test_application_creator_comes_from_token(self, client, creator_headers, creator, campaign, seed_creator):
        other, _ = seed_creator()

        response = client.post("/api/v1/applications", json={
            "campaignId": campaign["id"], "creatorUserId": other["id"], "proposal": "One reel",
        }, headers=creator_headers)

        assert response.status_code == 201
        assert response.json()["creatorUserId"] == creator["id"]

    def test_only_the_creator_edits_or_withdraws(self, client, auth_headers, campaign, creator, store):
        application = store.seed(APPLICATIONS_TABLE, make_application_row(campaign["id"], creator["id"]))
        path = f"/api/v1/applications/{application['id']}"

        assert client.patch(path, json={"proposal": "Edited"}, headers=auth_headers).status_code == 403
        assert client.delete(path, headers=auth_headers).status_code == 403
        assert application["id"] in store.tables[APPLICATIONS_TABLE]

        creator_headers = login_headers(client, creator)
        assert client.patch(path, json={"proposal": "Edited"}, headers=creator_headers).status_code == 200

    def test_only_the_campaign_brand_reviews(self, client, auth_headers, creator_headers, campaign, creator, store):
        application = store.seed(APPLICATIONS_TABLE, make_application_row(campaign["id"], creator["id"]))
        path = f"/api/v1/applications/{application['id']}/status"

        refused = client.put(path, json={"status": "approved"}, headers=creator_headers)
        approved = client.put(path, json={"status": "approved"}, headers=auth_headers)

        assert refused.status_code == 403
        assert approved.status_code == 200
        assert approved.json()["status"] == "approved"

    def test_notifications_are_marked_by_their_user(self, client, auth_headers, creator_headers, creator, store):
        notification = store.seed(NOTIFICATIONS_TABLE, make_notification_row(creator["id"]))
        path = f"/api/v1/notifications/{notification['id']}/read"

        assert client.post(path, headers=auth_headers).status_code == 403
        response = client.post(path, headers=creator_headers)

        assert response.status_code == 200
        assert response.json()["isRead"] is True

    def test_missing_row_is_404_before_ownership(self, client, auth_headers):
        response = client.delete("/api/v1/applications/app-missing", headers=auth_headers)

        assert response.status_code == 404
