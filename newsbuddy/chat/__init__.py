"""Chat answer resolution."""

from .extraction import NO_NEWS_REPLY, extract_candidates, extract_news_answer, select_answer
from .intent import IntentClassifier, default_intent, parse_intent
from .models import Answer, AnswerCandidate, ChatRequest, Intent, IntentKind
from .resolver import (
    GENERIC_FAILURE_REPLY,
    AnswerResolver,
    AnswerStrategy,
    LanguageModelStrategy,
    NewsSearchStrategy,
    ResolutionError,
    build_news_query,
)

__all__ = [
    "GENERIC_FAILURE_REPLY",
    "NO_NEWS_REPLY",
    "Answer",
    "AnswerCandidate",
    "AnswerResolver",
    "AnswerStrategy",
    "ChatRequest",
    "Intent",
    "IntentClassifier",
    "IntentKind",
    "LanguageModelStrategy",
    "NewsSearchStrategy",
    "ResolutionError",
    "build_news_query",
    "default_intent",
    "extract_candidates",
    "extract_news_answer",
    "parse_intent",
    "select_answer",
]
