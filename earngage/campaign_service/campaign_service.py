"""
Campaign Service Business Logic

Campaign lifecycle (create, update, status change, draft-only delete),
listing and search, per-campaign stats and recommendations for creators.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from core.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    ValidationFailedError,
)
from core.rows_helpers import format_filters, generate_row_id, snake_to_camel
from earngage.analytics_service.aggregations import count_by, count_unique

from .models import (
    MIN_RECOMMENDATIONS,
    PROTECTED_CAMPAIGN_FIELDS,
    RECOMMENDATION_POOL_SIZE,
    VALID_CAMPAIGN_STATUSES,
    Campaign,
    CampaignCreateRequest,
    CampaignDetails,
    CampaignSearchCriteria,
    CampaignStats,
    CampaignStatus,
)
from .protocols import (
    ApplicationReaderProtocol,
    CampaignRepositoryProtocol,
    EventReaderProtocol,
    ProfileReaderProtocol,
)

logger = logging.getLogger(__name__)

CAMPAIGN_VIEW_EVENT = "campaign_view"


def parse_campaign_status(status: Any) -> CampaignStatus:
    try:
        return CampaignStatus(status)
    except ValueError:
        raise ValidationFailedError(
            f"Invalid status: {status}. Must be one of: {', '.join(VALID_CAMPAIGN_STATUSES)}",
            field="status",
        )


class CampaignService:
    """Campaign service business logic layer"""

    def __init__(
        self,
        repository: CampaignRepositoryProtocol,
        application_repository: Optional[ApplicationReaderProtocol] = None,
        event_repository: Optional[EventReaderProtocol] = None,
        profile_repository: Optional[ProfileReaderProtocol] = None,
    ):
        self.repository = repository
        self.application_repository = application_repository
        self.event_repository = event_repository
        self.profile_repository = profile_repository

    # ====================
    # Campaign CRUD
    # ====================

    async def create_campaign(self, data: Dict[str, Any]) -> Campaign:
        """
        Create a campaign; status defaults to draft.

        Raises:
            ValidationFailedError: a required field is missing or invalid
        """
        try:
            request = CampaignCreateRequest.model_validate(data or {})
        except ValidationError as e:
            raise ValidationFailedError(f"Missing or invalid campaign fields: {e}")

        now = datetime.now(timezone.utc)
        campaign = Campaign(
            id=generate_row_id("cmp"),
            created_at=now,
            updated_at=now,
            **request.model_dump(),
        )
        # Unknown columns from the caller are kept on the row
        extras = {
            key: value for key, value in (data or {}).items()
            if snake_to_camel(key) not in campaign.to_row(exclude_none=False)
        }
        if extras:
            campaign = campaign.merged({snake_to_camel(k): v for k, v in extras.items()})

        created = await self.repository.create_campaign(campaign)
        logger.info(f"Created campaign {created.id} for brand {created.brand_user_id}")
        return created

    async def get_campaign_by_id(self, campaign_id: str) -> Campaign:
        campaign = await self.repository.get_campaign(campaign_id)
        if not campaign:
            raise NotFoundError("Campaign not found", entity="campaign", entity_id=campaign_id)
        return campaign

    async def get_campaign_details(self, campaign_id: str) -> CampaignDetails:
        """Campaign with its brand profile; the brand is omitted if it cannot be loaded"""
        campaign = await self.get_campaign_by_id(campaign_id)
        details = CampaignDetails.model_validate(campaign.model_dump(by_alias=True))
        if not self.profile_repository:
            return details
        try:
            details.brand = await self.profile_repository.get_brand_profile(campaign.brand_user_id)
        except Exception as e:
            logger.warning(f"Failed to load brand for campaign {campaign_id}: {e}")
        return details

    async def update_campaign(self, campaign_id: str, data: Dict[str, Any]) -> Campaign:
        campaign = await self.get_campaign_by_id(campaign_id)

        updates = {
            snake_to_camel(k): v for k, v in (data or {}).items() if k not in PROTECTED_CAMPAIGN_FIELDS
        }
        if "status" in updates:
            updates["status"] = parse_campaign_status(updates["status"]).value
        updates["updatedAt"] = datetime.now(timezone.utc)

        return await self.repository.update_campaign(campaign, updates)

    async def delete_campaign(self, campaign_id: str) -> bool:
        """
        Delete a campaign that is still a draft.

        Raises:
            NotFoundError: campaign missing
            InvalidTransitionError: campaign has left draft; the row is kept
        """
        campaign = await self.get_campaign_by_id(campaign_id)
        if campaign.status != CampaignStatus.DRAFT:
            raise InvalidTransitionError(
                f"Cannot delete a campaign in status {campaign.status.value}",
                current_status=campaign.status.value,
            )
        await self.repository.delete_campaign(campaign_id)
        logger.info(f"Deleted campaign {campaign_id}")
        return True

    async def change_campaign_status(self, campaign_id: str, status: Any) -> Campaign:
        """Any move between the four statuses is allowed"""
        new_status = parse_campaign_status(status)
        return await self.update_campaign(campaign_id, {"status": new_status.value})

    # ====================
    # Listing
    # ====================

    async def get_all_campaigns(self, page: int = 1, page_size: int = 10, **filters) -> List[Campaign]:
        return await self.repository.list_campaigns(
            filters, page=page, page_size=page_size, order_by="created_at", order_direction="desc"
        )

    async def get_campaigns_by_brand_user_id(
        self, brand_user_id: str, page: int = 1, page_size: int = 10
    ) -> List[Campaign]:
        return await self.repository.list_campaigns(
            {"brandUserId": brand_user_id}, page=page, page_size=page_size,
            order_by="created_at", order_direction="desc",
        )

    async def get_active_campaigns(self, page: int = 1, page_size: int = 10, **filters) -> List[Campaign]:
        filters["status"] = CampaignStatus.ACTIVE.value
        return await self.repository.list_campaigns(
            filters, page=page, page_size=page_size, order_by="created_at", order_direction="desc"
        )

    async def search_campaigns(self, criteria: Optional[Dict[str, Any]] = None) -> List[Campaign]:
        try:
            search = CampaignSearchCriteria.model_validate(criteria or {})
        except ValidationError as e:
            raise ValidationFailedError(f"Invalid search criteria: {e}")

        # Named criteria win over column filters on the same key
        filters = format_filters(search.filters)
        filters.update(format_filters({
            "title": {"contains": search.search_term or None},
            "category": search.category or None,
            "budget": {"gte": search.min_budget, "lte": search.max_budget},
            "status": search.status.value if search.status else None,
            "startDate": {"gte": search.start_date_from or None, "lte": search.start_date_to or None},
        }))

        return await self.repository.list_campaigns(
            filters, page=search.page, page_size=search.page_size,
            order_by=search.order_by, order_direction=search.order_direction,
        )

    # ====================
    # Stats and recommendations
    # ====================

    async def get_campaign_stats(self, campaign_id: str) -> CampaignStats:
        await self.get_campaign_by_id(campaign_id)

        applications = await self.application_repository.list_by_campaign(campaign_id)
        by_status = count_by(applications, "status", ["pending", "approved", "rejected", "completed"])
        stats = CampaignStats(
            campaign_id=campaign_id,
            total_applications=len(applications),
            pending_applications=by_status["pending"],
            approved_applications=by_status["approved"],
            rejected_applications=by_status["rejected"],
            completed_applications=by_status["completed"],
        )

        if self.event_repository:
            try:
                views = await self.event_repository.list_events(
                    {"eventType": CAMPAIGN_VIEW_EVENT, "campaignId": campaign_id}
                )
                stats.total_views = len(views)
                stats.unique_viewers = count_unique(views, "user_id")
            except Exception as e:
                logger.warning(f"Failed to fetch view events for campaign stats {campaign_id}: {e}")

        return stats

    async def get_recommended_campaigns(self, creator_user_id: str) -> List[Campaign]:
        """
        Active campaigns matching the creator's categories, padded with
        other active campaigns up to ``MIN_RECOMMENDATIONS``.
        """
        profile = await self.profile_repository.get_creator_profile(creator_user_id)
        if not profile:
            raise NotFoundError("Creator profile not found", entity="creator_profile", entity_id=creator_user_id)

        active = await self.repository.list_campaigns(
            {"status": CampaignStatus.ACTIVE.value}, page=1, page_size=RECOMMENDATION_POOL_SIZE,
            order_by="created_at", order_direction="desc",
        )

        categories = set(profile.categories)
        recommended = [c for c in active if c.category and c.category in categories]

        if len(recommended) < MIN_RECOMMENDATIONS:
            chosen = {c.id for c in recommended}
            others = [c for c in active if c.id not in chosen]
            recommended.extend(others[:MIN_RECOMMENDATIONS - len(recommended)])

        return recommended
