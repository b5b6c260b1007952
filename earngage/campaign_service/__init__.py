"""
Campaign Service

Brand campaigns:
- Lifecycle: create (draft), update, status change, draft-only delete
- Listing, active campaigns and search
- Per-campaign application and view stats
- Category-based recommendations for creators
"""

__version__ = "1.0.0"
__service__ = "campaign_service"
