"""Intent detection for chat messages."""

import logging

from ..prompts import render
from ..upstream.errors import UpstreamError
from ..upstream.language_model import GenerationConfig, LanguageModelClient
from ..utils.parsing import extract_json
from .models import Intent, IntentKind

logger = logging.getLogger(__name__)

INTENT_CONFIG = GenerationConfig(temperature=0.1, max_output_tokens=150)


def default_intent() -> Intent:
    return Intent(kind=IntentKind.CHAT, category="general", location="global", keywords=[], confidence=0.5)


def parse_intent(data: object) -> Intent:
    """Build an Intent from the model's JSON object, or the default intent if unusable."""
    if not isinstance(data, dict):
        return default_intent()
    try:
        kind = IntentKind(str(data.get("intent", "")).strip().lower())
    except ValueError:
        return default_intent()

    keywords = data.get("keywords") or []
    if not isinstance(keywords, list):
        keywords = []
    try:
        confidence = float(data.get("confidence", 0.5))
    except (TypeError, ValueError):
        confidence = 0.5

    return Intent(
        kind=kind,
        category=str(data.get("category") or "general").lower(),
        location=str(data.get("location") or "global").lower(),
        keywords=[str(k) for k in keywords if str(k).strip()],
        confidence=min(max(confidence, 0.0), 1.0),
    )


class IntentClassifier:
    """Asks the language model to classify a message; never raises for upstream failures."""

    def __init__(self, llm: LanguageModelClient):
        self.llm = llm

    async def classify(self, message: str) -> Intent:
        try:
            raw = await self.llm.generate(render("intent", message=message), INTENT_CONFIG)
        except UpstreamError as e:
            logger.warning("[INTENT] Detection failed (%s), using default intent", e.kind.value)
            return default_intent()
        intent = parse_intent(extract_json(raw))
        logger.debug("[INTENT] %r -> %s (%.2f)", message, intent.kind.value, intent.confidence)
        return intent
