"""
Authentication Service

Email/password sign-in and signup with bcrypt hashes and signed JWT access
tokens; token validation reloads the user on every call.
"""

__version__ = "1.0.0"
__service__ = "auth_service"
