"""
Application Service

Creator applications to campaigns: one per (creator, campaign), pending-only
edits and withdrawal, and the review state machine.
"""

__version__ = "1.0.0"
__service__ = "application_service"
