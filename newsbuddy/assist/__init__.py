"""Language-model helpers for the news UI."""

from .tasks import NewsAssistant, Sentiment

__all__ = ["NewsAssistant", "Sentiment"]
