"""One-line headline summaries with a deterministic fallback.

The language model is asked for a short summary; its output is cleaned and
checked. When the model is unavailable or answers with something too short
(or its own "No summary available" sentinel), a pure text heuristic over the
headline is used instead, so a summary is always produced.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..config.settings import Settings
from ..prompts import render
from ..upstream.errors import UpstreamError
from ..upstream.language_model import GenerationConfig, LanguageModelClient

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "No description available"
NO_SUMMARY_SENTINEL = "No summary available"

_LABEL_RE = re.compile(r"^summary:\s*", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")
_QUOTE_PAIRS = {'"': '"', "'": "'", "“": "”", "‘": "’"}


class SummaryOrigin(str, Enum):
    MODEL = "model"
    FALLBACK = "fallback-heuristic"


@dataclass(frozen=True)
class SummaryResult:
    """A non-empty summary and where it came from."""

    text: str
    origin: SummaryOrigin


def clean_summary(text: str) -> str:
    """Trim, drop a "Summary:" label, unwrap one pair of quotes, collapse whitespace."""
    cleaned = text.strip()
    cleaned = _LABEL_RE.sub("", cleaned)
    if len(cleaned) >= 2 and _QUOTE_PAIRS.get(cleaned[0]) == cleaned[-1]:
        cleaned = cleaned[1:-1]
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def fallback_summary(headline: str) -> str:
    """
    Network-free summary of a headline.

    Keeps the text after the first colon (or the whole headline), then the
    text before the first comma. Falls back to the untouched headline when
    that leaves nothing.
    """
    _, colon, tail = headline.partition(":")
    text = tail if colon else headline
    text = text.split(",", 1)[0].strip()
    return text or headline


class SummaryGenerator:
    """Summarizes headlines through the language model with a heuristic fallback."""

    def __init__(self, llm: LanguageModelClient, settings: Settings):
        """
        Initialize the generator.

        Args:
            llm: Language model client
            settings: Supplies the generation config and the acceptance threshold
        """
        self.llm = llm
        self.min_length = settings.summary_min_length
        self.config = GenerationConfig(
            temperature=settings.summary_temperature,
            max_output_tokens=settings.summary_max_output_tokens,
            top_p=settings.summary_top_p,
            top_k=settings.summary_top_k,
        )

    def is_acceptable(self, text: str) -> bool:
        return len(text) >= self.min_length and text != NO_SUMMARY_SENTINEL

    async def summarize(self, headline: str, description: Optional[str] = None) -> SummaryResult:
        """Return a summary for the headline; never raises for upstream failures."""
        prompt = render(
            "summary",
            headline=headline,
            description=description or DEFAULT_DESCRIPTION,
        )
        try:
            raw = await self.llm.generate(prompt, self.config)
        except UpstreamError as e:
            logger.warning("[SUMMARY] Model unavailable (%s), using fallback", e.kind.value)
            return SummaryResult(fallback_summary(headline), SummaryOrigin.FALLBACK)

        cleaned = clean_summary(raw)
        if self.is_acceptable(cleaned):
            return SummaryResult(cleaned, SummaryOrigin.MODEL)

        logger.info("[SUMMARY] Rejected model output %r, using fallback", cleaned)
        return SummaryResult(fallback_summary(headline), SummaryOrigin.FALLBACK)
