"""
Application Service Business Logic

Creators apply to campaigns; brands review. Enforces one application per
(creator, campaign), pending-only edits and deletes, and the review state
machine:

    pending  <-> approved / rejected / completed
    rejected  -> pending only
    completed -> terminal
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from core.exceptions import (
    DuplicateError,
    InvalidTransitionError,
    NotFoundError,
    ValidationFailedError,
)
from core.rows_helpers import generate_row_id, snake_to_camel
from earngage.analytics_service.aggregations import average, count_by
from earngage.campaign_service.models import CampaignDetails
from earngage.user_service.models import CreatorProfileDetails, UserType

from .models import (
    PROTECTED_APPLICATION_FIELDS,
    REVIEW_LOCKED_FIELDS,
    VALID_APPLICATION_STATUSES,
    Application,
    ApplicationAnalytics,
    ApplicationCreateRequest,
    ApplicationDetails,
    ApplicationStatus,
)
from .protocols import (
    AnalyticsRecorderProtocol,
    ApplicationRepositoryProtocol,
    CampaignReaderProtocol,
    NotificationSenderProtocol,
    UserReaderProtocol,
)

logger = logging.getLogger(__name__)

CAMPAIGN_APPLICATION_EVENT = "campaign_application"


def parse_application_status(status: Any) -> ApplicationStatus:
    try:
        return ApplicationStatus(status)
    except ValueError:
        raise ValidationFailedError(
            f"Invalid status: {status}. Must be one of: {', '.join(VALID_APPLICATION_STATUSES)}",
            field="status",
        )


def check_status_transition(current: ApplicationStatus, new: ApplicationStatus) -> None:
    """
    Raises:
        InvalidTransitionError: ``current`` may not move to ``new``
    """
    if current == ApplicationStatus.COMPLETED:
        raise InvalidTransitionError(
            "Cannot change status of completed applications", current_status=current.value
        )
    if current == ApplicationStatus.REJECTED and new != ApplicationStatus.PENDING:
        raise InvalidTransitionError(
            "Cannot change status of rejected applications", current_status=current.value
        )


class ApplicationService:
    """Application business logic layer"""

    def __init__(
        self,
        repository: ApplicationRepositoryProtocol,
        campaign_repository: CampaignReaderProtocol,
        user_repository: UserReaderProtocol,
        analytics_service: Optional[AnalyticsRecorderProtocol] = None,
        notification_service: Optional[NotificationSenderProtocol] = None,
    ):
        self.repository = repository
        self.campaign_repository = campaign_repository
        self.user_repository = user_repository
        self.analytics_service = analytics_service
        self.notification_service = notification_service

    # ====================
    # CRUD
    # ====================

    async def create_application(self, data: Dict[str, Any]) -> Application:
        """
        Submit a pending application.

        Raises:
            ValidationFailedError: campaignId, creatorUserId or proposal missing
            NotFoundError: campaign or creator missing
            DuplicateError: the creator already applied to this campaign
        """
        try:
            request = ApplicationCreateRequest.model_validate(data or {})
        except ValidationError as e:
            raise ValidationFailedError(f"Missing or invalid application fields: {e}")

        campaign = await self.campaign_repository.get_campaign(request.campaign_id)
        if not campaign:
            raise NotFoundError("Campaign not found", entity="campaign", entity_id=request.campaign_id)

        creator = await self.user_repository.get_user(request.creator_user_id)
        if not creator or creator.user_type != UserType.CREATOR:
            raise NotFoundError("Creator not found", entity="user", entity_id=request.creator_user_id)

        # Check-then-insert; two concurrent submissions can both pass
        existing = await self.repository.find_by_campaign_and_creator(
            request.campaign_id, request.creator_user_id
        )
        if existing:
            raise DuplicateError("You have already applied to this campaign")

        now = datetime.now(timezone.utc)
        application = Application(
            id=generate_row_id("app"),
            status=ApplicationStatus.PENDING,
            created_at=now,
            updated_at=now,
            **request.model_dump(),
        )
        created = await self.repository.create_application(application)
        logger.info(f"Creator {created.creator_user_id} applied to campaign {created.campaign_id}")

        await self._record_application_event(created, campaign)
        return created

    async def _record_application_event(self, application: Application, campaign) -> None:
        if not self.analytics_service:
            return
        try:
            await self.analytics_service.record_analytics_event({
                "eventType": CAMPAIGN_APPLICATION_EVENT,
                "userId": application.creator_user_id,
                "campaignId": application.campaign_id,
                "metadata": {
                    "applicationId": application.id,
                    "campaignTitle": campaign.title,
                    "brandUserId": campaign.brand_user_id,
                },
            })
        except Exception as e:
            logger.warning(f"Failed to record application event for {application.id}: {e}")

    async def get_application_by_id(self, application_id: str) -> Application:
        application = await self.repository.get_application(application_id)
        if not application:
            raise NotFoundError("Application not found", entity="application", entity_id=application_id)
        return application

    async def update_application(self, application_id: str, data: Dict[str, Any]) -> Application:
        """
        Raises:
            InvalidTransitionError: proposal or price changed after review
        """
        application = await self.get_application_by_id(application_id)

        updates = {
            snake_to_camel(k): v for k, v in (data or {}).items() if k not in PROTECTED_APPLICATION_FIELDS
        }
        if REVIEW_LOCKED_FIELDS & updates.keys() and application.status != ApplicationStatus.PENDING:
            raise InvalidTransitionError(
                "Cannot update proposal or price after application has been reviewed",
                current_status=application.status.value,
            )
        if "status" in updates:
            new_status = parse_application_status(updates["status"])
            check_status_transition(application.status, new_status)
            updates["status"] = new_status.value
        updates["updatedAt"] = datetime.now(timezone.utc)

        return await self.repository.update_application(application, updates)

    async def delete_application(self, application_id: str) -> bool:
        """
        Withdraw a pending application.

        Raises:
            InvalidTransitionError: the application was reviewed; the row is kept
        """
        application = await self.get_application_by_id(application_id)
        if application.status != ApplicationStatus.PENDING:
            raise InvalidTransitionError(
                "Cannot delete an application that has been reviewed",
                current_status=application.status.value,
            )
        await self.repository.delete_application(application_id)
        logger.info(f"Deleted application {application_id}")
        return True

    # ====================
    # Status
    # ====================

    async def change_application_status(
        self, application_id: str, status: Any, feedback: Optional[str] = None
    ) -> Application:
        new_status = parse_application_status(status)
        application = await self.get_application_by_id(application_id)
        check_status_transition(application.status, new_status)

        updates: Dict[str, Any] = {
            "status": new_status.value,
            "updatedAt": datetime.now(timezone.utc),
        }
        if feedback:
            updates["feedback"] = feedback

        updated = await self.repository.update_application(application, updates)
        logger.info(f"Application {application_id}: {application.status.value} -> {new_status.value}")

        await self._notify_status_change(updated)
        return updated

    async def _notify_status_change(self, application: Application) -> None:
        if not self.notification_service:
            return
        try:
            await self.notification_service.create_notification({
                "userId": application.creator_user_id,
                "title": f"Application {application.status.value}",
                "message": application.feedback or f"Your application is now {application.status.value}.",
                "notificationType": "application_status",
                "link": f"/campaigns/{application.campaign_id}",
            })
        except Exception as e:
            logger.warning(f"Failed to notify creator about application {application.id}: {e}")

    # ====================
    # Listing with enrichment
    # ====================

    async def get_applications_by_campaign_id(self, campaign_id: str) -> List[ApplicationDetails]:
        """Applications for a campaign, each with its creator's profile and email"""
        campaign = await self.campaign_repository.get_campaign(campaign_id)
        if not campaign:
            raise NotFoundError("Campaign not found", entity="campaign", entity_id=campaign_id)

        applications = await self.repository.list_by_campaign(campaign_id)
        details = [ApplicationDetails.model_validate(a.model_dump(by_alias=True)) for a in applications]
        if not details:
            return details

        creator_ids = [a.creator_user_id for a in applications]
        try:
            profiles, users = await asyncio.gather(
                self.user_repository.get_creator_profiles_by_user_ids(creator_ids),
                self.user_repository.get_users_by_ids(creator_ids),
            )
        except Exception as e:
            logger.warning(f"Failed to load creators for campaign {campaign_id}: {e}")
            return details

        emails = {user.id: user.email for user in users}
        profiles_by_user = {profile.user_id: profile for profile in profiles}
        for item in details:
            profile = profiles_by_user.get(item.creator_user_id)
            if profile:
                item.creator = CreatorProfileDetails.model_validate({
                    **profile.model_dump(by_alias=True),
                    "email": emails.get(item.creator_user_id),
                })
        return details

    async def get_applications_by_creator_id(self, creator_user_id: str) -> List[ApplicationDetails]:
        """A creator's applications, each with its campaign and that campaign's brand"""
        creator = await self.user_repository.get_user(creator_user_id)
        if not creator:
            raise NotFoundError("Creator not found", entity="user", entity_id=creator_user_id)

        applications = await self.repository.list_by_creator(creator_user_id)
        details = [ApplicationDetails.model_validate(a.model_dump(by_alias=True)) for a in applications]
        if not details:
            return details

        try:
            campaigns = await self.campaign_repository.get_campaigns_by_ids(
                [a.campaign_id for a in applications]
            )
        except Exception as e:
            logger.warning(f"Failed to load campaigns for creator {creator_user_id}: {e}")
            return details

        brands = {}
        try:
            profiles = await self.user_repository.get_brand_profiles_by_user_ids(
                [c.brand_user_id for c in campaigns]
            )
            brands = {profile.user_id: profile for profile in profiles}
        except Exception as e:
            logger.warning(f"Failed to load brands for creator {creator_user_id}: {e}")

        campaigns_by_id = {campaign.id: campaign for campaign in campaigns}
        for item in details:
            campaign = campaigns_by_id.get(item.campaign_id)
            if campaign:
                campaign_details = CampaignDetails.model_validate(campaign.model_dump(by_alias=True))
                campaign_details.brand = brands.get(campaign.brand_user_id)
                item.campaign = campaign_details
        return details

    async def get_applications_by_status(self, status: Any) -> List[Application]:
        return await self.repository.list_by_status(parse_application_status(status).value)

    async def has_creator_applied_to_campaign(self, creator_user_id: str, campaign_id: str) -> bool:
        existing = await self.repository.find_by_campaign_and_creator(campaign_id, creator_user_id)
        return existing is not None

    async def get_application_analytics(self, campaign_id: str) -> ApplicationAnalytics:
        applications = await self.repository.list_by_campaign(campaign_id)
        return ApplicationAnalytics(
            campaign_id=campaign_id,
            total_applications=len(applications),
            by_status=count_by(applications, "status", VALID_APPLICATION_STATUSES),
            average_price=average(a.price for a in applications),
        )
