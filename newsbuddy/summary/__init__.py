"""Headline summarization."""

from .generator import (
    NO_SUMMARY_SENTINEL,
    SummaryGenerator,
    SummaryOrigin,
    SummaryResult,
    clean_summary,
    fallback_summary,
)

__all__ = [
    "NO_SUMMARY_SENTINEL",
    "SummaryGenerator",
    "SummaryOrigin",
    "SummaryResult",
    "clean_summary",
    "fallback_summary",
]
