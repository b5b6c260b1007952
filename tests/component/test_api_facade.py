"""
Component Tests for the EarnGage API facade
"""
import pytest

from core.exceptions import DuplicateError
from core.session import InMemorySession
from earngage.analytics_service.models import CreatorAnalytics
from earngage.api import EarnGageAPI
from earngage.application_service.application_repository import APPLICATIONS_TABLE
from earngage.factory import create_earngage_api
from earngage.user_service.user_repository import CREATOR_PROFILES_TABLE

from tests.component.conftest import TEST_PASSWORD
from tests.fixtures import make_application_row, make_campaign_create_request

pytestmark = pytest.mark.component


class TestNamespaces:

    def test_groups_expose_service_operations(self, api):
        assert api.campaigns.create == api.campaign_service.create_campaign
        assert api.applications.has_creator_applied == api.application_service.has_creator_applied_to_campaign
        assert api.analytics.get_brand_stats == api.analytics_service.get_brand_analytics
        assert api.users.get_all_creators == api.user_service.get_all_creator_profiles
        assert api.notifications.mark_as_read == api.notification_service.mark_notification_as_read
        assert api.auth.login == api.auth_service.login_user

    @pytest.mark.asyncio
    async def test_brand_posts_and_lists_campaigns(self, api, brand):
        created = await api.campaigns.create(make_campaign_create_request(brand["id"]))
        await api.campaigns.change_status(created.id, "active")

        active = await api.campaigns.get_active()
        mine = await api.campaigns.get_by_brand_id(brand["id"])

        assert [c.id for c in active] == [created.id]
        assert [c.id for c in mine] == [created.id]

    @pytest.mark.asyncio
    async def test_campaign_to_application_walkthrough(self, api, store, brand, creator):
        campaign = await api.campaigns.create({
            "brandUserId": brand["id"], "title": "T", "description": "D", "requirements": "R", "budget": 100,
        })
        assert campaign.status == "draft"

        await api.campaigns.change_status(campaign.id, "active")
        assert campaign.id in [c.id for c in await api.campaigns.get_active()]

        application = await api.applications.create(
            {"campaignId": campaign.id, "creatorUserId": creator["id"], "proposal": "P"}
        )
        assert application.status == "pending"
        assert await api.applications.has_creator_applied(creator["id"], campaign.id) is True

        with pytest.raises(DuplicateError):
            await api.applications.create({"campaignId": campaign.id, "creatorUserId": creator["id"], "proposal": "P"})
        assert len(store.rows(APPLICATIONS_TABLE)) == 1


class TestCreatorDashboard:

    @pytest.mark.asyncio
    async def test_dashboard(self, api, store, creator, campaign, brand):
        store.seed(APPLICATIONS_TABLE, make_application_row(campaign["id"], creator["id"], status="approved"))
        profile_id = store.rows(CREATOR_PROFILES_TABLE)[0]["id"]
        await api.analytics.track_profile_view(profile_id, "creator", brand["id"])

        dashboard = await api.get_creator_dashboard(creator["id"])

        assert set(dashboard) == {"applications", "recommendedCampaigns", "stats"}
        assert dashboard["applications"][0].campaign.id == campaign["id"]
        assert [c.id for c in dashboard["recommendedCampaigns"]] == [campaign["id"]]
        stats = dashboard["stats"]
        assert isinstance(stats, CreatorAnalytics)
        assert stats.applications_by_status["approved"] == 1
        assert stats.application_success_rate == 100
        assert stats.total_profile_views == 1


class TestLifecycle:

    @pytest.mark.asyncio
    async def test_close_closes_store(self, api, store):
        await api.close()
        assert store.closed is True

    @pytest.mark.asyncio
    async def test_async_context_manager(self, earngage_config, store):
        async with create_earngage_api(earngage_config, store=store) as earngage:
            assert isinstance(earngage, EarnGageAPI)
        assert store.closed is True

    @pytest.mark.asyncio
    async def test_session_shared_between_login_and_logout(self, earngage_config, store, creator):
        session = InMemorySession()
        earngage = create_earngage_api(earngage_config, session=session, store=store)

        await earngage.auth.login(creator["email"], TEST_PASSWORD)
        assert session.get_token()

        earngage.auth.logout()
        assert session.get_token() is None

    @pytest.mark.asyncio
    async def test_stateless_keeps_no_token(self, earngage_config, store, creator):
        earngage = create_earngage_api(earngage_config, store=store, stateless=True)

        result = await earngage.auth.login(creator["email"], TEST_PASSWORD)

        assert earngage.auth_service.session is None
        assert await earngage.auth.validate_token() is None
        assert (await earngage.auth.validate_token(result.token)).id == creator["id"]
