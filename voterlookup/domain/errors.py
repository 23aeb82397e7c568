"""
Error taxonomy for registry searches.
Validation and token failures reach the API boundary; paging failures
mostly degrade to partial results inside the use case.
"""

from typing import Optional


class RegistryError(Exception):
    """Base class for every failure raised by the search flow."""


class ValidationError(RegistryError):
    """Required search fields are missing or too short."""


class TokenUnavailable(RegistryError):
    """The anti-forgery token could not be fetched and nothing is cached."""


class UpstreamHttpError(RegistryError):
    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        super().__init__(message or f"Registry responded with HTTP {status_code}")


class NetworkError(RegistryError):
    """Transport-level failure (connect error, timeout, broken response)."""
