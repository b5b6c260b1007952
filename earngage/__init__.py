"""
EarnGage

Creator/brand marketplace service layer over the Rows spreadsheet API.

Packages:
- auth_service: login, registration, token validation
- user_service: creator and brand profiles
- campaign_service: campaign lifecycle, search, recommendations
- application_service: creator applications to campaigns
- analytics_service: event tracking and client-side aggregation
- notification_service: per-user notifications
- api: EarnGageAPI facade grouping all of the above
- main: FastAPI surface for the SPA
"""

__version__ = "1.0.0"
