"""
Notification Service

Per-user notifications: list (newest first), create, mark as read.
"""

__version__ = "1.0.0"
__service__ = "notification_service"
