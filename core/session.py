"""
Session token holder

The authenticated-user token lives in an explicit session object handed to
the HTTP client and the auth service instead of ambient browser storage.
"""

from typing import Optional, Protocol


class SessionProtocol(Protocol):
    """Holder for the current bearer token"""

    def get_token(self) -> Optional[str]:
        ...

    def set_token(self, token: str) -> None:
        ...

    def clear(self) -> None:
        ...


class InMemorySession:
    """Process-local session; one token string, no locking"""

    def __init__(self, token: Optional[str] = None):
        self._token = token

    def get_token(self) -> Optional[str]:
        return self._token

    def set_token(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


__all__ = ["SessionProtocol", "InMemorySession"]
