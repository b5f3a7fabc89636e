"""Clients for third-party APIs, with classified errors."""

from .base import UpstreamClient
from .errors import UpstreamError, UpstreamErrorKind
from .language_model import GenerationConfig, LanguageModelClient
from .news_search import HeadlinesClient, NewsSearchClient
from .speech import SpeechClient

__all__ = [
    "GenerationConfig",
    "HeadlinesClient",
    "LanguageModelClient",
    "NewsSearchClient",
    "SpeechClient",
    "UpstreamClient",
    "UpstreamError",
    "UpstreamErrorKind",
]
