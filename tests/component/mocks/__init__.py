"""
Component Test Mocks

Mock implementations that replace real I/O (the Rows API and its HTTP
transport) in component tests.
"""

from .http_mock import MockHttpClient, MockHttpResponse
from .rows_mock import MockRowStore

__all__ = [
    'MockHttpClient',
    'MockHttpResponse',
    'MockRowStore',
]
