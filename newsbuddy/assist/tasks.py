"""Small language-model helpers for the news UI.

Each task degrades to a fixed answer when the model is unavailable or
returns something unparseable.
"""

import logging
from dataclasses import dataclass

from ..prompts import render
from ..upstream.errors import UpstreamError
from ..upstream.language_model import GenerationConfig, LanguageModelClient
from ..utils.parsing import extract_json

logger = logging.getLogger(__name__)

SUMMARY_UNAVAILABLE = "Summary unavailable"
REPLY_UNAVAILABLE = "I'm sorry, I'm having trouble processing your request right now. Please try again."
DEFAULT_FOLLOW_UPS = ["Tell me more about this", "What are the implications?", "Any recent updates?"]
SENTIMENTS = {"positive", "negative", "neutral"}


@dataclass(frozen=True)
class Sentiment:
    sentiment: str
    confidence: float
    explanation: str


NEUTRAL_SENTIMENT = Sentiment("neutral", 0.5, "Unable to analyze")


class NewsAssistant:
    """Query enhancement, summaries, sentiment, topics and follow-up questions."""

    def __init__(self, llm: LanguageModelClient):
        self.llm = llm

    async def _generate(self, template: str, config: GenerationConfig, **values: str) -> str:
        return await self.llm.generate(render(template, **values), config)

    async def enhance_query(self, query: str) -> str:
        """Rewrite a news search query; the original query on failure."""
        try:
            enhanced = await self._generate(
                "enhance_query", GenerationConfig(temperature=0.3, max_output_tokens=100), query=query
            )
        except UpstreamError as e:
            logger.warning("[ASSIST] Query enhancement failed (%s)", e.kind.value)
            return query
        return enhanced.strip().strip('"') or query

    async def contextual_reply(self, message: str, context: str = "") -> str:
        context_block = f"\nContext: {context}\n" if context else ""
        try:
            reply = await self._generate(
                "contextual_reply",
                GenerationConfig(temperature=0.7, max_output_tokens=500),
                message=message,
                context_block=context_block,
            )
        except UpstreamError as e:
            logger.warning("[ASSIST] Contextual reply failed (%s)", e.kind.value)
            return REPLY_UNAVAILABLE
        return reply or REPLY_UNAVAILABLE

    async def summarize_content(self, content: str) -> str:
        try:
            summary = await self._generate(
                "content_summary", GenerationConfig(temperature=0.3, max_output_tokens=200), content=content
            )
        except UpstreamError as e:
            logger.warning("[ASSIST] Content summary failed (%s)", e.kind.value)
            return SUMMARY_UNAVAILABLE
        return summary or SUMMARY_UNAVAILABLE

    async def analyze_sentiment(self, text: str) -> Sentiment:
        try:
            raw = await self._generate(
                "sentiment", GenerationConfig(temperature=0.1, max_output_tokens=150), text=text
            )
        except UpstreamError as e:
            logger.warning("[ASSIST] Sentiment analysis failed (%s)", e.kind.value)
            return NEUTRAL_SENTIMENT

        data = extract_json(raw)
        if not isinstance(data, dict):
            return NEUTRAL_SENTIMENT
        label = str(data.get("sentiment", "")).lower()
        if label not in SENTIMENTS:
            return NEUTRAL_SENTIMENT
        try:
            confidence = min(max(float(data.get("confidence", 0.5)), 0.0), 1.0)
        except (TypeError, ValueError):
            confidence = 0.5
        return Sentiment(label, confidence, str(data.get("explanation", "")))

    async def extract_topics(self, text: str) -> list[str]:
        try:
            raw = await self._generate(
                "topics", GenerationConfig(temperature=0.2, max_output_tokens=100), text=text
            )
        except UpstreamError as e:
            logger.warning("[ASSIST] Topic extraction failed (%s)", e.kind.value)
            return []
        data = extract_json(raw)
        if not isinstance(data, list):
            return []
        return [str(t) for t in data if str(t).strip()]

    async def follow_up_questions(self, headline: str, summary: str) -> list[str]:
        try:
            raw = await self._generate(
                "follow_up",
                GenerationConfig(temperature=0.5, max_output_tokens=200),
                headline=headline,
                summary=summary,
            )
        except UpstreamError as e:
            logger.warning("[ASSIST] Follow-up questions failed (%s)", e.kind.value)
            return list(DEFAULT_FOLLOW_UPS)
        data = extract_json(raw)
        questions = [str(q) for q in data if str(q).strip()] if isinstance(data, list) else []
        return questions or list(DEFAULT_FOLLOW_UPS)
