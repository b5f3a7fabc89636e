"""Data models for chat resolution."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class IntentKind(str, Enum):
    NEWS_QUERY = "news_query"
    CHAT = "chat"
    CATEGORY_FILTER = "category_filter"
    SUMMARY_REQUEST = "summary_request"


@dataclass
class Intent:
    """Pre-classified hint about what a message asks for."""

    kind: IntentKind
    category: Optional[str] = None
    location: Optional[str] = None
    keywords: list[str] = field(default_factory=list)
    confidence: float = 0.5


@dataclass
class ChatRequest:
    """One chat message, optionally with an intent hint."""

    message: str
    intent: Optional[Intent] = None


@dataclass(frozen=True)
class AnswerCandidate:
    """A possible reply extracted from a search response. Lower rank wins."""

    source_rank: int
    text: str


@dataclass(frozen=True)
class Answer:
    """The single reply produced for a chat request."""

    text: str
    strategy: str
