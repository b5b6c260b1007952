"""
EarnGage API facade

Groups the service operations into namespaces for callers
(``api.campaigns.create(...)``, ``api.analytics.get_brand_stats(...)``).
The namespaces hold no logic; the only composite call is the creator
dashboard, which runs its three independent reads concurrently.
"""

import asyncio
import logging
from types import SimpleNamespace
from typing import Any, Dict

from core.rows_store import RowStoreProtocol

from earngage.analytics_service.analytics_service import AnalyticsService
from earngage.application_service.application_service import ApplicationService
from earngage.auth_service.auth_service import AuthService
from earngage.campaign_service.campaign_service import CampaignService
from earngage.notification_service.notification_service import NotificationService
from earngage.user_service.user_service import UserService

logger = logging.getLogger(__name__)


class EarnGageAPI:
    """Namespaced entry point over the EarnGage services"""

    def __init__(
        self,
        rows: RowStoreProtocol,
        auth_service: AuthService,
        user_service: UserService,
        campaign_service: CampaignService,
        application_service: ApplicationService,
        analytics_service: AnalyticsService,
        notification_service: NotificationService,
    ):
        self.rows = rows
        self.auth_service = auth_service
        self.user_service = user_service
        self.campaign_service = campaign_service
        self.application_service = application_service
        self.analytics_service = analytics_service
        self.notification_service = notification_service

        self.auth = SimpleNamespace(
            login=auth_service.login_user,
            register=auth_service.register_user,
            validate_token=auth_service.validate_token,
            change_password=auth_service.change_password,
            logout=auth_service.logout,
        )
        self.users = SimpleNamespace(
            get_creator_profile=user_service.get_creator_profile,
            get_user_profile=user_service.get_user_profile,
            get_brand_profile=user_service.get_brand_profile,
            update_profile=user_service.update_user_profile,
            create_creator_profile=user_service.create_creator_profile,
            create_brand_profile=user_service.create_brand_profile,
            get_all_creators=user_service.get_all_creator_profiles,
            get_all_brands=user_service.get_all_brand_profiles,
            search=user_service.search_users,
            get_stats=user_service.get_user_stats,
        )
        self.campaigns = SimpleNamespace(
            create=campaign_service.create_campaign,
            get_by_id=campaign_service.get_campaign_by_id,
            get_details=campaign_service.get_campaign_details,
            update=campaign_service.update_campaign,
            delete=campaign_service.delete_campaign,
            get_all=campaign_service.get_all_campaigns,
            get_by_brand_id=campaign_service.get_campaigns_by_brand_user_id,
            get_active=campaign_service.get_active_campaigns,
            search=campaign_service.search_campaigns,
            change_status=campaign_service.change_campaign_status,
            get_stats=campaign_service.get_campaign_stats,
            get_recommended=campaign_service.get_recommended_campaigns,
        )
        self.applications = SimpleNamespace(
            create=application_service.create_application,
            get_by_id=application_service.get_application_by_id,
            update=application_service.update_application,
            delete=application_service.delete_application,
            get_by_campaign_id=application_service.get_applications_by_campaign_id,
            get_by_creator_id=application_service.get_applications_by_creator_id,
            change_status=application_service.change_application_status,
            get_by_status=application_service.get_applications_by_status,
            has_creator_applied=application_service.has_creator_applied_to_campaign,
            get_analytics=application_service.get_application_analytics,
        )
        self.analytics = SimpleNamespace(
            record_event=analytics_service.record_analytics_event,
            track_campaign_view=analytics_service.track_campaign_view,
            track_campaign_application=analytics_service.track_campaign_application,
            track_profile_view=analytics_service.track_profile_view,
            get_campaign_views=analytics_service.get_campaign_view_analytics,
            get_campaign_applications=analytics_service.get_campaign_application_analytics,
            get_creator_stats=analytics_service.get_creator_analytics,
            get_brand_stats=analytics_service.get_brand_analytics,
            get_platform_stats=analytics_service.get_platform_analytics,
            get_by_date_range=analytics_service.get_analytics_by_date_range,
        )
        self.notifications = SimpleNamespace(
            get_for_user=notification_service.get_user_notifications,
            get_by_id=notification_service.get_notification_by_id,
            create=notification_service.create_notification,
            mark_as_read=notification_service.mark_notification_as_read,
        )

    async def get_creator_dashboard(self, creator_user_id: str) -> Dict[str, Any]:
        """Applications, recommendations and creator analytics, fetched concurrently"""
        applications, recommended, stats = await asyncio.gather(
            self.application_service.get_applications_by_creator_id(creator_user_id),
            self.campaign_service.get_recommended_campaigns(creator_user_id),
            self.analytics_service.get_creator_analytics(creator_user_id),
        )
        return {
            "applications": applications,
            "recommendedCampaigns": recommended,
            "stats": stats,
        }

    async def close(self) -> None:
        await self.rows.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


__all__ = ["EarnGageAPI"]
