"""Answer resolution for the chat endpoint.

A chat request is answered by the first applicable strategy that succeeds.
The default order is news search first (only for news-like requests), then
the general language model. Strategies run strictly one after another: the
language model is only called once the news path is known to have failed,
and exactly one reply is produced per request.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Optional

from ..upstream.errors import UpstreamError
from ..upstream.language_model import LanguageModelClient
from ..upstream.news_search import NewsSearchClient
from .extraction import MAX_NEWS_LINES, extract_news_answer
from .models import Answer, ChatRequest, IntentKind

logger = logging.getLogger(__name__)

GENERIC_FAILURE_REPLY = "Error contacting Gemini API."
EMPTY_MODEL_REPLY = "No response"

_NEWS_TRIGGER = re.compile("news", re.IGNORECASE)


class ResolutionError(Exception):
    """Raised when every applicable strategy failed."""

    def __init__(self, errors: list[UpstreamError]):
        super().__init__("All answer sources failed")
        self.errors = errors


def build_news_query(request: ChatRequest) -> Optional[str]:
    """
    Return the news search query for a request, or None if it is not a news request.

    With a ``news_query`` intent the query is the message followed by the
    category (unless "general"), the keywords and the location (unless
    "global"). Otherwise a message mentioning "news" is searched as-is.
    """
    intent = request.intent
    if intent is not None and intent.kind == IntentKind.NEWS_QUERY:
        parts = [request.message]
        if intent.category and intent.category.lower() != "general":
            parts.append(intent.category)
        keywords = " ".join(k for k in intent.keywords if k)
        if keywords:
            parts.append(keywords)
        if intent.location and intent.location.lower() != "global":
            parts.append(intent.location)
        return " ".join(parts)

    if _NEWS_TRIGGER.search(request.message):
        return request.message
    return None


class AnswerStrategy(ABC):
    """One way of answering a chat request."""

    name: str = "strategy"

    @abstractmethod
    def applies(self, request: ChatRequest) -> bool:
        """Whether this strategy should be tried for the request."""

    @abstractmethod
    async def attempt(self, request: ChatRequest) -> str:
        """Produce a reply or raise UpstreamError."""


class NewsSearchStrategy(AnswerStrategy):
    """Answers news requests from a search upstream's ranked fields."""

    name = "news_search"

    def __init__(self, client: NewsSearchClient, news_limit: int = MAX_NEWS_LINES):
        self.client = client
        self.news_limit = news_limit

    def applies(self, request: ChatRequest) -> bool:
        return build_news_query(request) is not None

    async def attempt(self, request: ChatRequest) -> str:
        query = build_news_query(request)
        payload = await self.client.search(query)
        return extract_news_answer(payload, self.news_limit)


class LanguageModelStrategy(AnswerStrategy):
    """Answers anything by sending the raw message to the language model."""

    name = "language_model"

    def __init__(self, client: LanguageModelClient):
        self.client = client

    def applies(self, request: ChatRequest) -> bool:
        return True

    async def attempt(self, request: ChatRequest) -> str:
        text = await self.client.generate(request.message)
        return text or EMPTY_MODEL_REPLY


class AnswerResolver:
    """Tries strategies in order until one produces a reply."""

    def __init__(self, strategies: list[AnswerStrategy]):
        self.strategies = list(strategies)

    @classmethod
    def default(cls, news: NewsSearchClient, llm: LanguageModelClient) -> "AnswerResolver":
        return cls([NewsSearchStrategy(news), LanguageModelStrategy(llm)])

    async def resolve(self, request: ChatRequest) -> Answer:
        """
        Resolve a request to exactly one answer.

        Raises:
            ResolutionError: every applicable strategy failed
        """
        errors: list[UpstreamError] = []
        for strategy in self.strategies:
            if not strategy.applies(request):
                continue
            try:
                text = await strategy.attempt(request)
            except UpstreamError as e:
                logger.warning(
                    "[RESOLVER] %s failed (%s from %s), trying next source",
                    strategy.name,
                    e.kind.value,
                    e.source,
                )
                errors.append(e)
                continue
            logger.info("[RESOLVER] Answered by %s", strategy.name)
            return Answer(text=text, strategy=strategy.name)

        raise ResolutionError(errors)

    async def reply(self, request: ChatRequest) -> tuple[str, bool]:
        """Return ``(reply_text, ok)``; on total failure the generic failure text."""
        try:
            answer = await self.resolve(request)
        except ResolutionError as e:
            logger.error(
                "[RESOLVER] No source could answer: %s",
                ", ".join(f"{err.source}:{err.kind.value}" for err in e.errors) or "none applicable",
            )
            return GENERIC_FAILURE_REPLY, False
        return answer.text, True
