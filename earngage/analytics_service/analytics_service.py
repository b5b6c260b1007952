"""
Analytics Service Business Logic

Event recording and tracking, plus reports aggregated client-side from
fetched rows. Tracking calls never raise: a failed track is logged and
returns None.
"""

import asyncio
import logging
from collections import defaultdict
from datetime import datetime, time, timezone
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from core.exceptions import NotFoundError, ValidationFailedError
from core.rows_helpers import generate_row_id
from earngage.application_service.models import VALID_APPLICATION_STATUSES
from earngage.campaign_service.models import VALID_CAMPAIGN_STATUSES

from .aggregations import (
    average,
    count_by,
    count_unique,
    cumulative,
    group_by_date,
    percentage,
)
from .models import (
    AnalyticsEvent,
    AnalyticsEventCreateRequest,
    BrandAnalytics,
    CampaignApplicationAnalytics,
    CampaignConversion,
    CampaignViewAnalytics,
    ContentCounts,
    CreatorAnalytics,
    EventType,
    PlatformAnalytics,
    ProfileType,
    UserCounts,
)
from .protocols import (
    AnalyticsRepositoryProtocol,
    ApplicationReaderProtocol,
    CampaignReaderProtocol,
    UserReaderProtocol,
)

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"


def _parse_day(value: str) -> datetime:
    try:
        return datetime.strptime(value, DATE_FORMAT).replace(tzinfo=timezone.utc)
    except (TypeError, ValueError):
        raise ValidationFailedError("Invalid date format. Use YYYY-MM-DD", field="date")


class AnalyticsService:
    """Analytics business logic layer"""

    def __init__(
        self,
        repository: AnalyticsRepositoryProtocol,
        campaign_repository: CampaignReaderProtocol,
        application_repository: ApplicationReaderProtocol,
        user_repository: UserReaderProtocol,
    ):
        self.repository = repository
        self.campaign_repository = campaign_repository
        self.application_repository = application_repository
        self.user_repository = user_repository

    # ====================
    # Recording
    # ====================

    async def record_analytics_event(self, data: Dict[str, Any]) -> AnalyticsEvent:
        """
        Record an event; ``timestamp`` defaults to now (UTC).

        Raises:
            ValidationFailedError: ``eventType`` missing
        """
        try:
            request = AnalyticsEventCreateRequest.model_validate(data or {})
        except ValidationError as e:
            raise ValidationFailedError(f"Invalid analytics event: {e}", field="eventType")

        values = request.model_dump()
        if request.profile_type:
            values["profile_type"] = request.profile_type.value
        values["timestamp"] = request.timestamp or datetime.now(timezone.utc)

        event = AnalyticsEvent(id=generate_row_id("anl"), **values)
        return await self.repository.create_event(event)

    async def track_campaign_view(
        self, campaign_id: str, viewer_id: Optional[str] = None
    ) -> Optional[AnalyticsEvent]:
        try:
            campaign = await self.campaign_repository.get_campaign(campaign_id)
            if not campaign:
                raise NotFoundError("Campaign not found", entity="campaign", entity_id=campaign_id)
            return await self.record_analytics_event({
                "eventType": EventType.CAMPAIGN_VIEW.value,
                "campaignId": campaign_id,
                "userId": viewer_id,
                "metadata": {"campaignTitle": campaign.title, "brandUserId": campaign.brand_user_id},
            })
        except Exception as e:
            logger.warning(f"Failed to track view of campaign {campaign_id}: {e}")
            return None

    async def track_campaign_application(
        self, campaign_id: str, creator_id: str
    ) -> Optional[AnalyticsEvent]:
        try:
            campaign, creator = await asyncio.gather(
                self.campaign_repository.get_campaign(campaign_id),
                self.user_repository.get_user(creator_id),
            )
            if not campaign:
                raise NotFoundError("Campaign not found", entity="campaign", entity_id=campaign_id)
            if not creator:
                raise NotFoundError("Creator not found", entity="user", entity_id=creator_id)
            return await self.record_analytics_event({
                "eventType": EventType.CAMPAIGN_APPLICATION.value,
                "campaignId": campaign_id,
                "userId": creator_id,
                "metadata": {"campaignTitle": campaign.title, "brandUserId": campaign.brand_user_id},
            })
        except Exception as e:
            logger.warning(f"Failed to track application to campaign {campaign_id}: {e}")
            return None

    async def track_profile_view(
        self, profile_id: str, profile_type: str, viewer_id: Optional[str] = None
    ) -> Optional[AnalyticsEvent]:
        try:
            profile_type = ProfileType(profile_type)
            return await self.record_analytics_event({
                "eventType": EventType.PROFILE_VIEW.value,
                "profileId": profile_id,
                "profileType": profile_type.value,
                "userId": viewer_id,
            })
        except Exception as e:
            logger.warning(f"Failed to track view of {profile_type} profile {profile_id}: {e}")
            return None

    # ====================
    # Campaign reports
    # ====================

    async def get_campaign_view_analytics(self, campaign_id: str) -> CampaignViewAnalytics:
        views = await self.repository.list_events(
            {"eventType": EventType.CAMPAIGN_VIEW.value, "campaignId": campaign_id}
        )
        return CampaignViewAnalytics(
            campaign_id=campaign_id,
            total_views=len(views),
            unique_viewers=count_unique(views, "user_id"),
            views_over_time=group_by_date(views, "timestamp", "views"),
        )

    async def get_campaign_application_analytics(self, campaign_id: str) -> CampaignApplicationAnalytics:
        applications = await self.application_repository.list_by_campaign(campaign_id)
        return CampaignApplicationAnalytics(
            campaign_id=campaign_id,
            total_applications=len(applications),
            applications_by_status=count_by(applications, "status", VALID_APPLICATION_STATUSES),
            average_price=average(a.price for a in applications),
            applications_over_time=group_by_date(applications, "created_at", "applications"),
        )

    # ====================
    # User reports
    # ====================

    async def _profile_views(self, profile_id: Optional[str], profile_type: ProfileType) -> List[AnalyticsEvent]:
        if not profile_id:
            return []
        return await self.repository.list_events({
            "eventType": EventType.PROFILE_VIEW.value,
            "profileId": profile_id,
            "profileType": profile_type.value,
        })

    async def get_creator_analytics(self, creator_id: str) -> CreatorAnalytics:
        applications, profile = await asyncio.gather(
            self.application_repository.list_by_creator(creator_id),
            self.user_repository.get_creator_profile(creator_id),
        )
        views = await self._profile_views(profile.id if profile else None, ProfileType.CREATOR)

        by_status = count_by(applications, "status", VALID_APPLICATION_STATUSES)
        decided = by_status["approved"] + by_status["rejected"]
        return CreatorAnalytics(
            creator_id=creator_id,
            total_applications=len(applications),
            applications_by_status=by_status,
            total_profile_views=len(views),
            unique_profile_viewers=count_unique(views, "user_id"),
            application_success_rate=percentage(by_status["approved"], decided),
        )

    async def get_brand_analytics(self, brand_id: str) -> BrandAnalytics:
        """
        Campaign, application and view totals for a brand, with a
        per-campaign conversion rate (applications / views * 100, or 0
        without views). Applications and views are fetched in batch.
        """
        campaigns, profile = await asyncio.gather(
            self.campaign_repository.list_by_brand(brand_id),
            self.user_repository.get_brand_profile(brand_id),
        )
        campaign_ids = [c.id for c in campaigns]

        profile_views, applications, campaign_views = await asyncio.gather(
            self._profile_views(profile.id if profile else None, ProfileType.BRAND),
            self.application_repository.list_by_campaign_ids(campaign_ids),
            self.repository.list_events_for_campaigns(EventType.CAMPAIGN_VIEW.value, campaign_ids),
        )

        applications_per_campaign: Dict[str, int] = defaultdict(int)
        for application in applications:
            applications_per_campaign[application.campaign_id] += 1
        views_per_campaign: Dict[str, int] = defaultdict(int)
        for view in campaign_views:
            views_per_campaign[view.campaign_id] += 1

        campaign_stats = [
            CampaignConversion(
                campaign_id=c.id,
                title=c.title,
                views=views_per_campaign[c.id],
                applications=applications_per_campaign[c.id],
                conversion_rate=percentage(applications_per_campaign[c.id], views_per_campaign[c.id]),
            )
            for c in campaigns
        ]

        return BrandAnalytics(
            brand_id=brand_id,
            total_campaigns=len(campaigns),
            campaigns_by_status=count_by(campaigns, "status", VALID_CAMPAIGN_STATUSES),
            total_profile_views=len(profile_views),
            unique_profile_viewers=count_unique(profile_views, "user_id"),
            total_applications_received=len(applications),
            applications_by_status=count_by(applications, "status", VALID_APPLICATION_STATUSES),
            campaign_stats=campaign_stats,
        )

    # ====================
    # Platform reports
    # ====================

    async def get_platform_analytics(self) -> PlatformAnalytics:
        (
            total_users, creators, brands, campaign_count, application_count,
            users, campaigns, events,
        ) = await asyncio.gather(
            self.user_repository.count_users(),
            self.user_repository.count_creator_profiles(),
            self.user_repository.count_brand_profiles(),
            self.campaign_repository.count_campaigns(),
            self.application_repository.count_applications(),
            self.user_repository.list_all_users(),
            self.campaign_repository.list_all_campaigns(),
            self.repository.list_events(),
        )

        user_growth = group_by_date(users, "created_at", "newUsers")
        return PlatformAnalytics(
            user_counts=UserCounts(total=total_users, creators=creators, brands=brands),
            content_counts=ContentCounts(campaigns=campaign_count, applications=application_count),
            user_growth=user_growth,
            cumulative_user_growth=cumulative(user_growth, "newUsers", "totalUsers"),
            campaign_growth=group_by_date(campaigns, "created_at", "newCampaigns"),
            events_by_type=count_by(events, "event_type"),
        )

    async def get_analytics_by_date_range(
        self, start_date: str, end_date: str, event_type: Optional[str] = None
    ) -> List[AnalyticsEvent]:
        """
        Events between two ``YYYY-MM-DD`` days, end day inclusive,
        ordered by timestamp ascending.

        Raises:
            ValidationFailedError: unparsable date or start after end
        """
        start = _parse_day(start_date)
        end = _parse_day(end_date)
        if start > end:
            raise ValidationFailedError("Start date must be before end date", field="startDate")

        end = datetime.combine(end.date(), time(23, 59, 59, 999000), tzinfo=timezone.utc)
        filters: Dict[str, Any] = {"timestamp_gte": start, "timestamp_lte": end}
        if event_type:
            filters["eventType"] = event_type

        return await self.repository.list_events(filters, order_by="timestamp", order_direction="asc")
