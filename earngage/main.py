"""
EarnGage HTTP API

FastAPI mirror of the EarnGage facade for the web client. Every route
except health, login and register needs a bearer access token. Writes
are limited to rows the caller owns; owner columns on create come from
the token.
"""

import time
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import Body, Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.config import get_settings
from core.exceptions import EarnGageError, ErrorKind
from core.logger import setup_service_logger
from core.rows_helpers import snake_to_camel

from . import __version__
from .api import EarnGageAPI
from .factory import create_earngage_api
from .user_service.models import User, UserType

SERVICE_NAME = "earngage"

logger = setup_service_logger(SERVICE_NAME)

ERROR_STATUS = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION_FAILED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.INVALID_TRANSITION: status.HTTP_409_CONFLICT,
    ErrorKind.DUPLICATE: status.HTTP_409_CONFLICT,
    ErrorKind.AUTHENTICATION_FAILED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.TRANSPORT: status.HTTP_502_BAD_GATEWAY,
}

startup_time = time.time()

# Global API instance
api: Optional[EarnGageAPI] = None

bearer_scheme = HTTPBearer(auto_error=False)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    global api

    settings = get_settings()
    logger.info(f"Starting {SERVICE_NAME} ({settings.environment}) on port {settings.port}")
    if api is None:
        api = create_earngage_api(settings, stateless=True)

    yield

    logger.info(f"Shutting down {SERVICE_NAME}")
    if api:
        await api.close()
        api = None


app = FastAPI(
    title="EarnGage API",
    description="Creator and brand marketplace: campaigns, applications and analytics",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ====================
# Exception Handlers
# ====================


@app.exception_handler(EarnGageError)
async def earngage_error_handler(request: Request, exc: EarnGageError):
    code = ERROR_STATUS.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=code, content=exc.to_dict())


# ====================
# Dependencies
# ====================


def get_api() -> EarnGageAPI:
    if not api:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not initialized",
        )
    return api


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    earngage: EarnGageAPI = Depends(get_api),
) -> User:
    """Resolve the bearer token to a user, or 401"""
    if not credentials or not credentials.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    user = await earngage.auth.validate_token(credentials.credentials)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")
    return user


def require_owner(user: User, owner_id: Optional[str]) -> None:
    """403 unless the signed-in user is ``owner_id``"""
    if user.id != owner_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed for this user")


async def require_campaign_owner(earngage: EarnGageAPI, user: User, campaign_id: str) -> None:
    campaign = await earngage.campaigns.get_by_id(campaign_id)
    require_owner(user, campaign.brand_user_id)


def with_owner(data: Dict[str, Any], field: str, owner_id: str) -> Dict[str, Any]:
    """Payload with the owner column taken from the token"""
    payload = {k: v for k, v in data.items() if snake_to_camel(k) != field}
    payload[field] = owner_id
    return payload


# ====================
# Health
# ====================


@app.get("/health", tags=["Health"])
async def health_check():
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": __version__,
        "uptimeSeconds": round(time.time() - startup_time, 3),
    }


# ====================
# Auth
# ====================


@app.post("/api/v1/auth/register", status_code=status.HTTP_201_CREATED, tags=["Auth"])
async def register(data: Dict[str, Any] = Body(...), earngage: EarnGageAPI = Depends(get_api)):
    return await earngage.auth.register(data)


@app.post("/api/v1/auth/login", tags=["Auth"])
async def login(data: Dict[str, Any] = Body(...), earngage: EarnGageAPI = Depends(get_api)):
    return await earngage.auth.login(data.get("email", ""), data.get("password", ""))


@app.get("/api/v1/auth/me", tags=["Auth"])
async def me(user: User = Depends(get_current_user)):
    return user


@app.post("/api/v1/auth/change-password", tags=["Auth"])
async def change_password(
    data: Dict[str, Any] = Body(...),
    user: User = Depends(get_current_user),
    earngage: EarnGageAPI = Depends(get_api),
):
    await earngage.auth.change_password(
        user.id, data.get("currentPassword", ""), data.get("newPassword", "")
    )
    return {"success": True}


# ====================
# Users and profiles
# ====================


@app.get("/api/v1/users/me/profile", tags=["Users"])
async def my_profile_summary(user: User = Depends(get_current_user), earngage: EarnGageAPI = Depends(get_api)):
    return earngage.users.get_user_profile(user)


@app.patch("/api/v1/users/{user_id}/profile", tags=["Users"])
async def update_profile(
    user_id: str,
    data: Dict[str, Any] = Body(...),
    user: User = Depends(get_current_user),
    earngage: EarnGageAPI = Depends(get_api),
):
    require_owner(user, user_id)
    return await earngage.users.update_profile(user_id, data)


@app.get("/api/v1/users/{user_id}/stats", tags=["Users"])
async def user_stats(user_id: str, user: User = Depends(get_current_user), earngage: EarnGageAPI = Depends(get_api)):
    return await earngage.users.get_stats(user_id)


@app.post("/api/v1/users/search", tags=["Users"])
async def search_users(
    criteria: Optional[Dict[str, Any]] = Body(None),
    user_type: str = Query("creator", alias="userType"),
    user: User = Depends(get_current_user),
    earngage: EarnGageAPI = Depends(get_api),
):
    return await earngage.users.search(criteria, user_type)


@app.get("/api/v1/creators", tags=["Users"])
async def list_creators(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100, alias="pageSize"),
    user: User = Depends(get_current_user),
    earngage: EarnGageAPI = Depends(get_api),
):
    return await earngage.users.get_all_creators(page=page, page_size=page_size)


@app.get("/api/v1/creators/{user_id}", tags=["Users"])
async def get_creator(user_id: str, user: User = Depends(get_current_user), earngage: EarnGageAPI = Depends(get_api)):
    return await earngage.users.get_creator_profile(user_id)


@app.post("/api/v1/creators/{user_id}", status_code=status.HTTP_201_CREATED, tags=["Users"])
async def create_creator(
    user_id: str,
    data: Optional[Dict[str, Any]] = Body(None),
    user: User = Depends(get_current_user),
    earngage: EarnGageAPI = Depends(get_api),
):
    require_owner(user, user_id)
    return await earngage.users.create_creator_profile(user_id, data)


@app.get("/api/v1/creators/{user_id}/dashboard", tags=["Users"])
async def creator_dashboard(
    user_id: str, user: User = Depends(get_current_user), earngage: EarnGageAPI = Depends(get_api)
):
    return await earngage.get_creator_dashboard(user_id)


@app.get("/api/v1/brands", tags=["Users"])
async def list_brands(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100, alias="pageSize"),
    user: User = Depends(get_current_user),
    earngage: EarnGageAPI = Depends(get_api),
):
    return await earngage.users.get_all_brands(page=page, page_size=page_size)


@app.get("/api/v1/brands/{user_id}", tags=["Users"])
async def get_brand(user_id: str, user: User = Depends(get_current_user), earngage: EarnGageAPI = Depends(get_api)):
    return await earngage.users.get_brand_profile(user_id)


@app.post("/api/v1/brands/{user_id}", status_code=status.HTTP_201_CREATED, tags=["Users"])
async def create_brand(
    user_id: str,
    data: Optional[Dict[str, Any]] = Body(None),
    user: User = Depends(get_current_user),
    earngage: EarnGageAPI = Depends(get_api),
):
    require_owner(user, user_id)
    return await earngage.users.create_brand_profile(user_id, data)


# ====================
# Campaigns
# ====================


@app.post("/api/v1/campaigns", status_code=status.HTTP_201_CREATED, tags=["Campaigns"])
async def create_campaign(
    data: Dict[str, Any] = Body(...),
    user: User = Depends(get_current_user),
    earngage: EarnGageAPI = Depends(get_api),
):
    if user.user_type != UserType.BRAND:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only brands can create campaigns")
    return await earngage.campaigns.create(with_owner(data, "brandUserId", user.id))


@app.get("/api/v1/campaigns", tags=["Campaigns"])
async def list_campaigns(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100, alias="pageSize"),
    campaign_status: Optional[str] = Query(None, alias="status"),
    user: User = Depends(get_current_user),
    earngage: EarnGageAPI = Depends(get_api),
):
    filters = {"status": campaign_status} if campaign_status else {}
    return await earngage.campaigns.get_all(page=page, page_size=page_size, **filters)


@app.get("/api/v1/campaigns/active", tags=["Campaigns"])
async def list_active_campaigns(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100, alias="pageSize"),
    user: User = Depends(get_current_user),
    earngage: EarnGageAPI = Depends(get_api),
):
    return await earngage.campaigns.get_active(page=page, page_size=page_size)


@app.post("/api/v1/campaigns/search", tags=["Campaigns"])
async def search_campaigns(
    criteria: Optional[Dict[str, Any]] = Body(None),
    user: User = Depends(get_current_user),
    earngage: EarnGageAPI = Depends(get_api),
):
    return await earngage.campaigns.search(criteria)


@app.get("/api/v1/campaigns/{campaign_id}", tags=["Campaigns"])
async def get_campaign(
    campaign_id: str, user: User = Depends(get_current_user), earngage: EarnGageAPI = Depends(get_api)
):
    return await earngage.campaigns.get_details(campaign_id)


@app.patch("/api/v1/campaigns/{campaign_id}", tags=["Campaigns"])
async def update_campaign(
    campaign_id: str,
    data: Dict[str, Any] = Body(...),
    user: User = Depends(get_current_user),
    earngage: EarnGageAPI = Depends(get_api),
):
    await require_campaign_owner(earngage, user, campaign_id)
    return await earngage.campaigns.update(campaign_id, data)


@app.delete("/api/v1/campaigns/{campaign_id}", tags=["Campaigns"])
async def delete_campaign(
    campaign_id: str, user: User = Depends(get_current_user), earngage: EarnGageAPI = Depends(get_api)
):
    await require_campaign_owner(earngage, user, campaign_id)
    return {"success": await earngage.campaigns.delete(campaign_id)}


@app.put("/api/v1/campaigns/{campaign_id}/status", tags=["Campaigns"])
async def change_campaign_status(
    campaign_id: str,
    data: Dict[str, Any] = Body(...),
    user: User = Depends(get_current_user),
    earngage: EarnGageAPI = Depends(get_api),
):
    await require_campaign_owner(earngage, user, campaign_id)
    return await earngage.campaigns.change_status(campaign_id, data.get("status"))


@app.get("/api/v1/campaigns/{campaign_id}/stats", tags=["Campaigns"])
async def campaign_stats(
    campaign_id: str, user: User = Depends(get_current_user), earngage: EarnGageAPI = Depends(get_api)
):
    return await earngage.campaigns.get_stats(campaign_id)


@app.post("/api/v1/campaigns/{campaign_id}/views", tags=["Campaigns"])
async def track_campaign_view(
    campaign_id: str, user: User = Depends(get_current_user), earngage: EarnGageAPI = Depends(get_api)
):
    return await earngage.analytics.track_campaign_view(campaign_id, user.id)


@app.get("/api/v1/campaigns/{campaign_id}/applications", tags=["Applications"])
async def campaign_applications(
    campaign_id: str, user: User = Depends(get_current_user), earngage: EarnGageAPI = Depends(get_api)
):
    return await earngage.applications.get_by_campaign_id(campaign_id)


@app.get("/api/v1/brands/{user_id}/campaigns", tags=["Campaigns"])
async def brand_campaigns(
    user_id: str,
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100, alias="pageSize"),
    user: User = Depends(get_current_user),
    earngage: EarnGageAPI = Depends(get_api),
):
    return await earngage.campaigns.get_by_brand_id(user_id, page=page, page_size=page_size)


@app.get("/api/v1/creators/{user_id}/recommended-campaigns", tags=["Campaigns"])
async def recommended_campaigns(
    user_id: str, user: User = Depends(get_current_user), earngage: EarnGageAPI = Depends(get_api)
):
    return await earngage.campaigns.get_recommended(user_id)


# ====================
# Applications
# ====================


@app.post("/api/v1/applications", status_code=status.HTTP_201_CREATED, tags=["Applications"])
async def create_application(
    data: Dict[str, Any] = Body(...),
    user: User = Depends(get_current_user),
    earngage: EarnGageAPI = Depends(get_api),
):
    return await earngage.applications.create(with_owner(data, "creatorUserId", user.id))


@app.get("/api/v1/applications", tags=["Applications"])
async def applications_by_status(
    application_status: str = Query(..., alias="status"),
    user: User = Depends(get_current_user),
    earngage: EarnGageAPI = Depends(get_api),
):
    return await earngage.applications.get_by_status(application_status)


@app.get("/api/v1/applications/{application_id}", tags=["Applications"])
async def get_application(
    application_id: str, user: User = Depends(get_current_user), earngage: EarnGageAPI = Depends(get_api)
):
    return await earngage.applications.get_by_id(application_id)


@app.patch("/api/v1/applications/{application_id}", tags=["Applications"])
async def update_application(
    application_id: str,
    data: Dict[str, Any] = Body(...),
    user: User = Depends(get_current_user),
    earngage: EarnGageAPI = Depends(get_api),
):
    application = await earngage.applications.get_by_id(application_id)
    require_owner(user, application.creator_user_id)
    return await earngage.applications.update(application_id, data)


@app.delete("/api/v1/applications/{application_id}", tags=["Applications"])
async def delete_application(
    application_id: str, user: User = Depends(get_current_user), earngage: EarnGageAPI = Depends(get_api)
):
    application = await earngage.applications.get_by_id(application_id)
    require_owner(user, application.creator_user_id)
    return {"success": await earngage.applications.delete(application_id)}


@app.put("/api/v1/applications/{application_id}/status", tags=["Applications"])
async def change_application_status(
    application_id: str,
    data: Dict[str, Any] = Body(...),
    user: User = Depends(get_current_user),
    earngage: EarnGageAPI = Depends(get_api),
):
    application = await earngage.applications.get_by_id(application_id)
    await require_campaign_owner(earngage, user, application.campaign_id)
    return await earngage.applications.change_status(
        application_id, data.get("status"), data.get("feedback")
    )


@app.get("/api/v1/creators/{user_id}/applications", tags=["Applications"])
async def creator_applications(
    user_id: str, user: User = Depends(get_current_user), earngage: EarnGageAPI = Depends(get_api)
):
    return await earngage.applications.get_by_creator_id(user_id)


@app.get("/api/v1/creators/{user_id}/applied/{campaign_id}", tags=["Applications"])
async def has_applied(
    user_id: str,
    campaign_id: str,
    user: User = Depends(get_current_user),
    earngage: EarnGageAPI = Depends(get_api),
):
    return {"applied": await earngage.applications.has_creator_applied(user_id, campaign_id)}


# ====================
# Analytics
# ====================


@app.post("/api/v1/analytics/events", status_code=status.HTTP_201_CREATED, tags=["Analytics"])
async def record_event(
    data: Dict[str, Any] = Body(...),
    user: User = Depends(get_current_user),
    earngage: EarnGageAPI = Depends(get_api),
):
    return await earngage.analytics.record_event(data)


@app.get("/api/v1/analytics/events", tags=["Analytics"])
async def events_by_date_range(
    start_date: str = Query(..., alias="startDate"),
    end_date: str = Query(..., alias="endDate"),
    event_type: Optional[str] = Query(None, alias="eventType"),
    user: User = Depends(get_current_user),
    earngage: EarnGageAPI = Depends(get_api),
):
    return await earngage.analytics.get_by_date_range(start_date, end_date, event_type)


@app.post("/api/v1/analytics/profiles/{profile_id}/views", tags=["Analytics"])
async def track_profile_view(
    profile_id: str,
    profile_type: str = Query(..., alias="profileType"),
    user: User = Depends(get_current_user),
    earngage: EarnGageAPI = Depends(get_api),
):
    return await earngage.analytics.track_profile_view(profile_id, profile_type, user.id)


@app.get("/api/v1/analytics/campaigns/{campaign_id}/views", tags=["Analytics"])
async def campaign_view_analytics(
    campaign_id: str, user: User = Depends(get_current_user), earngage: EarnGageAPI = Depends(get_api)
):
    return await earngage.analytics.get_campaign_views(campaign_id)


@app.get("/api/v1/analytics/campaigns/{campaign_id}/applications", tags=["Analytics"])
async def campaign_application_analytics(
    campaign_id: str, user: User = Depends(get_current_user), earngage: EarnGageAPI = Depends(get_api)
):
    return await earngage.analytics.get_campaign_applications(campaign_id)


@app.get("/api/v1/analytics/creators/{user_id}", tags=["Analytics"])
async def creator_analytics(
    user_id: str, user: User = Depends(get_current_user), earngage: EarnGageAPI = Depends(get_api)
):
    return await earngage.analytics.get_creator_stats(user_id)


@app.get("/api/v1/analytics/brands/{user_id}", tags=["Analytics"])
async def brand_analytics(
    user_id: str, user: User = Depends(get_current_user), earngage: EarnGageAPI = Depends(get_api)
):
    return await earngage.analytics.get_brand_stats(user_id)


@app.get("/api/v1/analytics/platform", tags=["Analytics"])
async def platform_analytics(user: User = Depends(get_current_user), earngage: EarnGageAPI = Depends(get_api)):
    return await earngage.analytics.get_platform_stats()


# ====================
# Notifications
# ====================


@app.get("/api/v1/notifications", tags=["Notifications"])
async def my_notifications(user: User = Depends(get_current_user), earngage: EarnGageAPI = Depends(get_api)):
    return await earngage.notifications.get_for_user(user.id)


@app.post("/api/v1/notifications", status_code=status.HTTP_201_CREATED, tags=["Notifications"])
async def create_notification(
    data: Dict[str, Any] = Body(...),
    user: User = Depends(get_current_user),
    earngage: EarnGageAPI = Depends(get_api),
):
    return await earngage.notifications.create(data)


@app.post("/api/v1/notifications/{notification_id}/read", tags=["Notifications"])
async def mark_notification_read(
    notification_id: str, user: User = Depends(get_current_user), earngage: EarnGageAPI = Depends(get_api)
):
    notification = await earngage.notifications.get_by_id(notification_id)
    require_owner(user, notification.user_id)
    return await earngage.notifications.mark_as_read(notification_id)


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.logging.log_level.lower())
