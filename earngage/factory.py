"""
EarnGage Factory

Builds the object graph: Rows HTTP client -> row store -> repositories ->
services -> API facade. The store can be injected, which is how tests run
the whole stack against an in-memory table set.
"""

import logging
from typing import Optional

from core.config import EarnGageConfig, get_settings
from core.jwt_manager import JWTManager
from core.rows_http_client import RowsHttpClient
from core.rows_store import RowStore, RowStoreProtocol
from core.session import InMemorySession, SessionProtocol

from .analytics_service.analytics_repository import AnalyticsRepository
from .analytics_service.analytics_service import AnalyticsService
from .api import EarnGageAPI
from .application_service.application_repository import ApplicationRepository
from .application_service.application_service import ApplicationService
from .auth_service.auth_service import AuthService
from .campaign_service.campaign_repository import CampaignRepository
from .campaign_service.campaign_service import CampaignService
from .notification_service.notification_repository import NotificationRepository
from .notification_service.notification_service import NotificationService
from .user_service.user_repository import UserRepository
from .user_service.user_service import UserService

logger = logging.getLogger(__name__)


def create_earngage_api(
    config: Optional[EarnGageConfig] = None,
    session: Optional[SessionProtocol] = None,
    store: Optional[RowStoreProtocol] = None,
    stateless: bool = False,
) -> EarnGageAPI:
    """
    Wire every EarnGage service over one Rows connection.

    Args:
        config: Settings (defaults to the global settings)
        session: Token holder shared by the HTTP client and auth service
        store: Row store to use instead of one built from ``config.rows``
        stateless: Wire no session at all; tokens are only returned and the
            Rows client always authenticates with the API key
    """
    config = config or get_settings()
    if stateless:
        session = None
    else:
        session = session or InMemorySession()
    store = store or RowStore(RowsHttpClient(config.rows, session=session))

    user_repository = UserRepository(store, config.rows)
    campaign_repository = CampaignRepository(store)
    application_repository = ApplicationRepository(store)
    analytics_repository = AnalyticsRepository(store)
    notification_repository = NotificationRepository(store)

    notification_service = NotificationService(notification_repository)
    analytics_service = AnalyticsService(
        analytics_repository, campaign_repository, application_repository, user_repository
    )
    user_service = UserService(user_repository, application_repository, campaign_repository)
    campaign_service = CampaignService(
        campaign_repository, application_repository, analytics_repository, user_repository
    )
    application_service = ApplicationService(
        application_repository,
        campaign_repository,
        user_repository,
        analytics_service=analytics_service,
        notification_service=notification_service,
    )
    auth_service = AuthService(
        user_repository,
        JWTManager.from_config(config.auth),
        session=session,
        config=config.auth,
    )

    logger.info(f"EarnGage API initialized against {config.rows.api_url}")
    return EarnGageAPI(
        rows=store,
        auth_service=auth_service,
        user_service=user_service,
        campaign_service=campaign_service,
        application_service=application_service,
        analytics_service=analytics_service,
        notification_service=notification_service,
    )


__all__ = ["create_earngage_api"]
