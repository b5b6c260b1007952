"""
Shared Test Fixtures

Structure:
    - common.py: ID generators, emails, timestamps
    - earngage_fixtures.py: Row and request factories per table
"""

from .common import (
    make_id,
    make_user_id,
    make_email,
    make_timestamp,
)

from .earngage_fixtures import (
    make_user_row,
    make_creator_profile_row,
    make_brand_profile_row,
    make_campaign_row,
    make_application_row,
    make_event_row,
    make_notification_row,
    make_campaign_create_request,
    make_register_request,
)

__all__ = [
    "make_id",
    "make_user_id",
    "make_email",
    "make_timestamp",
    "make_user_row",
    "make_creator_profile_row",
    "make_brand_profile_row",
    "make_campaign_row",
    "make_application_row",
    "make_event_row",
    "make_notification_row",
    "make_campaign_create_request",
    "make_register_request",
]
