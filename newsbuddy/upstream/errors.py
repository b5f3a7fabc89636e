"""Structured errors raised at the upstream client boundary.

Every failure talking to a third-party API is classified exactly once,
where it happens, into an ``UpstreamErrorKind``. Callers branch on the
kind and never re-parse error text.
"""

import asyncio
from enum import Enum
from typing import Optional

import httpx


class UpstreamErrorKind(str, Enum):
    """Classification of an upstream failure."""

    TIMEOUT = "timeout"
    AUTH = "auth"
    QUOTA = "quota"
    MALFORMED = "malformed"
    NETWORK = "network"


PROVIDER_NAMES = {
    "gemini": "Gemini",
    "serpapi": "SerpAPI",
    "newsapi": "NewsAPI",
    "elevenlabs": "ElevenLabs",
}
CREDENTIAL_VARS = {
    "gemini": "GEMINI_API_KEY",
    "serpapi": "SERPAPI_API_KEY",
    "newsapi": "NEWSAPI_API_KEY",
    "elevenlabs": "ELEVENLABS_API_KEY",
}


class UpstreamError(Exception):
    """A classified failure from one upstream API."""

    def __init__(
        self,
        kind: UpstreamErrorKind,
        source: str,
        message: str,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.source = source
        self.message = message
        self.status_code = status_code

    @property
    def provider(self) -> str:
        return PROVIDER_NAMES.get(self.source, self.source)

    def user_message(self) -> str:
        """A message safe to show end users; never includes upstream bodies."""
        if self.kind == UpstreamErrorKind.AUTH:
            var = CREDENTIAL_VARS.get(self.source, "the API key")
            return f"Invalid or missing {self.provider} API key. Update {var} in the server's .env file and restart the server."
        if self.kind == UpstreamErrorKind.QUOTA:
            return f"{self.provider} rate limit exceeded. Please wait a few minutes before trying again."
        if self.kind == UpstreamErrorKind.TIMEOUT:
            return f"{self.provider} timed out. Please try again later."
        return f"{self.provider} request failed. Please try again."

    def __repr__(self) -> str:
        return f"UpstreamError(kind={self.kind.value!r}, source={self.source!r}, message={self.message!r})"


def classify_status(status_code: int) -> UpstreamErrorKind:
    """Map an HTTP error status to an error kind."""
    if status_code in (401, 403):
        return UpstreamErrorKind.AUTH
    if status_code == 429:
        return UpstreamErrorKind.QUOTA
    if status_code in (408, 504):
        return UpstreamErrorKind.TIMEOUT
    return UpstreamErrorKind.NETWORK


def classify_transport_error(exc: Exception) -> UpstreamErrorKind:
    """Map an exception raised while talking to an upstream to an error kind."""
    if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError)):
        return UpstreamErrorKind.TIMEOUT
    if isinstance(exc, ValueError):
        # json.JSONDecodeError is a ValueError
        return UpstreamErrorKind.MALFORMED
    return UpstreamErrorKind.NETWORK
