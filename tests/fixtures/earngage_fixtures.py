"""
EarnGage Fixtures

Row factories for every table, shaped as the Rows API stores them
(camelCase columns, ISO timestamps, JSON text for list/object cells
where the sheet keeps them that way).
"""
import json
from typing import Any, Dict, List, Optional

from .common import make_email, make_id, make_timestamp, make_user_id


def make_user_row(
    user_type: str = "creator",
    user_id: Optional[str] = None,
    email: Optional[str] = None,
    password: Optional[str] = None,
    **overrides,
) -> Dict[str, Any]:
    row = {
        "id": user_id or make_user_id(),
        "email": email or make_email(),
        "userType": user_type,
        "firstname": "Test",
        "surname": "User",
        "createdAt": make_timestamp(days_ago=3),
        "updatedAt": make_timestamp(days_ago=3),
    }
    if password is not None:
        row["password"] = password
    row.update(overrides)
    return row


def make_creator_profile_row(
    user_id: str,
    categories: Optional[List[str]] = None,
    **overrides,
) -> Dict[str, Any]:
    row = {
        "id": make_id("crp"),
        "userId": user_id,
        "displayName": "Test Creator",
        "bio": "Lifestyle creator",
        "categories": json.dumps(categories if categories is not None else ["fashion"]),
        "niches": "streetwear, sneakers",
        "socialMedia": json.dumps({"instagram": "@tester"}),
        "followerCount": 12000,
        "engagementRate": 4.2,
        "createdAt": make_timestamp(days_ago=3),
        "updatedAt": make_timestamp(days_ago=3),
    }
    row.update(overrides)
    return row


def make_brand_profile_row(user_id: str, **overrides) -> Dict[str, Any]:
    row = {
        "id": make_id("brp"),
        "userId": user_id,
        "companyName": "Acme Apparel",
        "industry": "fashion",
        "companySize": "11-50",
        "website": "https://acme.example.com",
        "createdAt": make_timestamp(days_ago=3),
        "updatedAt": make_timestamp(days_ago=3),
    }
    row.update(overrides)
    return row


def make_campaign_row(
    brand_user_id: str,
    status: str = "active",
    category: Optional[str] = "fashion",
    days_ago: int = 1,
    **overrides,
) -> Dict[str, Any]:
    row = {
        "id": make_id("cmp"),
        "brandUserId": brand_user_id,
        "title": "Summer Launch",
        "description": "Promote the summer collection",
        "requirements": "2 reels, 3 stories",
        "budget": 1500,
        "status": status,
        "category": category,
        "createdAt": make_timestamp(days_ago=days_ago),
        "updatedAt": make_timestamp(days_ago=days_ago),
    }
    row.update(overrides)
    return row


def make_application_row(
    campaign_id: str,
    creator_user_id: str,
    status: str = "pending",
    price: Optional[float] = 500,
    days_ago: int = 0,
    **overrides,
) -> Dict[str, Any]:
    row = {
        "id": make_id("app"),
        "campaignId": campaign_id,
        "creatorUserId": creator_user_id,
        "proposal": "Three reels over two weeks",
        "price": price,
        "status": status,
        "createdAt": make_timestamp(days_ago=days_ago),
        "updatedAt": make_timestamp(days_ago=days_ago),
    }
    row.update(overrides)
    return row


def make_event_row(
    event_type: str,
    user_id: Optional[str] = None,
    campaign_id: Optional[str] = None,
    timestamp: Optional[str] = None,
    **overrides,
) -> Dict[str, Any]:
    row = {
        "id": make_id("anl"),
        "eventType": event_type,
        "userId": user_id,
        "campaignId": campaign_id,
        "timestamp": timestamp or make_timestamp(),
        "metadata": "{}",
    }
    row.update(overrides)
    return {k: v for k, v in row.items() if v is not None}


def make_notification_row(user_id: str, is_read: Any = "false", **overrides) -> Dict[str, Any]:
    row = {
        "id": make_id("not"),
        "userId": user_id,
        "title": "Application approved",
        "message": "Your application is now approved.",
        "notificationType": "application_status",
        "isRead": is_read,
        "createdAt": make_timestamp(),
    }
    row.update(overrides)
    return row


def make_campaign_create_request(brand_user_id: str, **overrides) -> Dict[str, Any]:
    request = {
        "brandUserId": brand_user_id,
        "title": "Autumn Drop",
        "description": "Show off the autumn range",
        "requirements": ["1 reel", "2 stories"],
        "budget": 2500,
        "category": "fashion",
    }
    request.update(overrides)
    return request


def make_register_request(user_type: str = "creator", **overrides) -> Dict[str, Any]:
    request = {
        "email": make_email(),
        "password": "s3cretpass",
        "userType": user_type,
        "firstname": "Robin",
        "surname": "Lee",
    }
    request.update(overrides)
    return request
