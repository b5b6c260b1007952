"""
Analytics Service

Event tracking (campaign views, applications, profile views) and
client-side reports for campaigns, creators, brands and the platform.
"""

__version__ = "1.0.0"
__service__ = "analytics_service"
