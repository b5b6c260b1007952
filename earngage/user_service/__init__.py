"""
User Service

Creator and brand profiles:
- Profile lookup merged with the owner's email
- Profile creation and partial update
- Creator/brand listing and search
- Per-user application and campaign stats
"""

__version__ = "1.0.0"
__service__ = "user_service"
