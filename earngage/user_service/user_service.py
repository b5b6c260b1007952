"""
User Service Business Logic

Creator/brand profile lookup, update, listing and search, plus per-user
stats. Owner emails are attached with one batched user fetch per listing.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from core.exceptions import NotFoundError, ValidationFailedError
from core.rows_helpers import format_filters, generate_row_id, snake_to_camel

from .models import (
    PROTECTED_PROFILE_FIELDS,
    BrandProfile,
    BrandProfileCreateRequest,
    BrandProfileDetails,
    BrandStats,
    CreatorProfile,
    CreatorProfileCreateRequest,
    CreatorProfileDetails,
    CreatorStats,
    User,
    UserProfileSummary,
    UserSearchCriteria,
    UserType,
)
from .protocols import (
    ApplicationReaderProtocol,
    CampaignReaderProtocol,
    UserRepositoryProtocol,
)

logger = logging.getLogger(__name__)


def _parse_user_type(user_type: Union[str, UserType, None]) -> UserType:
    try:
        return UserType(user_type)
    except ValueError:
        raise ValidationFailedError(f"Invalid user type: {user_type}", field="userType")


class UserService:
    """User and profile business logic"""

    def __init__(
        self,
        repository: UserRepositoryProtocol,
        application_repository: Optional[ApplicationReaderProtocol] = None,
        campaign_repository: Optional[CampaignReaderProtocol] = None,
    ):
        self.repository = repository
        self.application_repository = application_repository
        self.campaign_repository = campaign_repository

    # ====================
    # Profile lookup
    # ====================

    async def _require_user(self, user_id: str, user_type: UserType) -> User:
        user = await self.repository.get_user(user_id)
        if not user or user.user_type != user_type:
            label = "Creator" if user_type == UserType.CREATOR else "Brand"
            raise NotFoundError(f"{label} not found", entity="user", entity_id=user_id)
        return user

    async def get_creator_profile(self, user_id: str) -> CreatorProfileDetails:
        user = await self._require_user(user_id, UserType.CREATOR)
        profile = await self.repository.get_creator_profile(user_id)
        if not profile:
            raise NotFoundError("Creator profile not found", entity="creator_profile", entity_id=user_id)
        return CreatorProfileDetails.model_validate(
            {**profile.model_dump(by_alias=True), "email": user.email, "userType": user.user_type}
        )

    async def get_brand_profile(self, user_id: str) -> BrandProfileDetails:
        user = await self._require_user(user_id, UserType.BRAND)
        profile = await self.repository.get_brand_profile(user_id)
        if not profile:
            raise NotFoundError("Brand profile not found", entity="brand_profile", entity_id=user_id)
        return BrandProfileDetails.model_validate(
            {**profile.model_dump(by_alias=True), "email": user.email, "userType": user.user_type}
        )

    @staticmethod
    def get_user_profile(user: User) -> UserProfileSummary:
        """Header-level view of an already loaded user"""
        return UserProfileSummary(
            display_name=user.display_name,
            email=user.email,
            user_type=user.user_type,
        )

    # ====================
    # Profile writes
    # ====================

    async def create_creator_profile(
        self, user_id: str, data: Optional[Dict[str, Any]] = None
    ) -> CreatorProfile:
        try:
            request = CreatorProfileCreateRequest.model_validate(data or {})
        except ValidationError as e:
            raise ValidationFailedError(str(e))

        now = datetime.now(timezone.utc)
        profile = CreatorProfile(
            id=generate_row_id("crp"),
            user_id=user_id,
            created_at=now,
            updated_at=now,
            **request.model_dump(),
        )
        return await self.repository.create_creator_profile(profile)

    async def create_brand_profile(
        self, user_id: str, data: Optional[Dict[str, Any]] = None
    ) -> BrandProfile:
        try:
            request = BrandProfileCreateRequest.model_validate(data or {})
        except ValidationError as e:
            raise ValidationFailedError(str(e))

        now = datetime.now(timezone.utc)
        profile = BrandProfile(
            id=generate_row_id("brp"),
            user_id=user_id,
            created_at=now,
            updated_at=now,
            **request.model_dump(),
        )
        return await self.repository.create_brand_profile(profile)

    async def update_user_profile(
        self, user_id: str, data: Dict[str, Any]
    ) -> Union[CreatorProfile, BrandProfile]:
        """
        Patch the profile matching the user's type.

        Raises:
            NotFoundError: user or profile missing
            ValidationFailedError: the user has no recognised type
        """
        user = await self.repository.get_user(user_id)
        if not user:
            raise NotFoundError("User not found", entity="user", entity_id=user_id)

        updates = {
            snake_to_camel(k): v for k, v in (data or {}).items() if k not in PROTECTED_PROFILE_FIELDS
        }
        updates["updatedAt"] = datetime.now(timezone.utc)

        user_type = _parse_user_type(user.user_type)
        if user_type == UserType.CREATOR:
            profile = await self.repository.get_creator_profile(user_id)
            if not profile:
                raise NotFoundError("Creator profile not found", entity="creator_profile", entity_id=user_id)
            return await self.repository.update_creator_profile(profile, updates)

        profile = await self.repository.get_brand_profile(user_id)
        if not profile:
            raise NotFoundError("Brand profile not found", entity="brand_profile", entity_id=user_id)
        return await self.repository.update_brand_profile(profile, updates)

    # ====================
    # Listing and search
    # ====================

    async def _emails_by_user_id(self, user_ids: List[str]) -> Optional[Dict[str, str]]:
        try:
            users = await self.repository.get_users_by_ids(user_ids)
        except Exception as e:
            logger.warning(f"Failed to load owner emails for {len(user_ids)} profiles: {e}")
            return None
        return {user.id: user.email for user in users}

    async def _with_creator_emails(self, profiles: List[CreatorProfile]) -> List[CreatorProfileDetails]:
        emails = await self._emails_by_user_id([p.user_id for p in profiles])
        details = []
        for profile in profiles:
            data = profile.model_dump(by_alias=True)
            if emails is not None:
                data["email"] = emails.get(profile.user_id)
            details.append(CreatorProfileDetails.model_validate(data))
        return details

    async def _with_brand_emails(self, profiles: List[BrandProfile]) -> List[BrandProfileDetails]:
        emails = await self._emails_by_user_id([p.user_id for p in profiles])
        details = []
        for profile in profiles:
            data = profile.model_dump(by_alias=True)
            if emails is not None:
                data["email"] = emails.get(profile.user_id)
            details.append(BrandProfileDetails.model_validate(data))
        return details

    async def get_all_creator_profiles(
        self, page: int = 1, page_size: int = 10, **filters
    ) -> List[CreatorProfileDetails]:
        profiles = await self.repository.list_creator_profiles(
            filters, page=page, page_size=page_size, order_by="created_at", order_direction="desc"
        )
        return await self._with_creator_emails(profiles)

    async def get_all_brand_profiles(
        self, page: int = 1, page_size: int = 10, **filters
    ) -> List[BrandProfileDetails]:
        profiles = await self.repository.list_brand_profiles(
            filters, page=page, page_size=page_size, order_by="created_at", order_direction="desc"
        )
        return await self._with_brand_emails(profiles)

    async def search_users(
        self,
        criteria: Optional[Dict[str, Any]] = None,
        user_type: Union[str, UserType] = UserType.CREATOR,
    ) -> List[Union[CreatorProfileDetails, BrandProfileDetails]]:
        """Search creator or brand profiles by the supported criteria"""
        user_type = _parse_user_type(user_type)
        try:
            search = UserSearchCriteria.model_validate(criteria or {})
        except ValidationError as e:
            raise ValidationFailedError(str(e))

        filters = format_filters(search.filters)
        if user_type == UserType.CREATOR:
            filters.update(format_filters({
                "categories": {"contains": search.categories or None},
                "followerCount": {"gte": search.min_followers, "lte": search.max_followers},
                "engagementRate": {"gte": search.min_engagement},
                "displayName": {"contains": search.search_term or None},
            }))
            profiles = await self.repository.list_creator_profiles(
                filters, page=search.page, page_size=search.page_size,
                order_by=search.order_by, order_direction=search.order_direction,
            )
            return await self._with_creator_emails(profiles)

        filters.update(format_filters({
            "industry": search.industry or None,
            "companySize": search.company_size or None,
            "companyName": {"contains": search.search_term or None},
        }))

        profiles = await self.repository.list_brand_profiles(
            filters, page=search.page, page_size=search.page_size,
            order_by=search.order_by, order_direction=search.order_direction,
        )
        return await self._with_brand_emails(profiles)

    # ====================
    # Stats
    # ====================

    async def get_user_stats(self, user_id: str) -> Union[CreatorStats, BrandStats]:
        user = await self.repository.get_user(user_id)
        if not user:
            raise NotFoundError("User not found", entity="user", entity_id=user_id)

        if _parse_user_type(user.user_type) == UserType.CREATOR:
            applications = await self.application_repository.list_by_creator(user_id)
            statuses = [a.status for a in applications]
            return CreatorStats(
                total_applications=len(applications),
                approved_applications=statuses.count("approved"),
                completed_applications=statuses.count("completed"),
            )

        campaigns = await self.campaign_repository.list_by_brand(user_id)
        applications = await self.application_repository.list_by_campaign_ids([c.id for c in campaigns])
        return BrandStats(
            total_campaigns=len(campaigns),
            active_campaigns=sum(1 for c in campaigns if c.status == "active"),
            total_applications_received=len(applications),
        )
