"""Ranked answer extraction from a search response."""

from typing import Any, Optional

from .models import AnswerCandidate

NO_NEWS_REPLY = "Sorry, I couldn't find any news right now."
MAX_NEWS_LINES = 5

RANK_INSTANT_ANSWER = 1
RANK_ANSWER_SNIPPET = 2
RANK_NEWS_LIST = 3
RANK_ORGANIC = 4


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _format_news(results: list, limit: int) -> str:
    lines = []
    for item in results:
        if len(lines) >= limit:
            break
        if not isinstance(item, dict):
            continue
        lines.append(f"{len(lines) + 1}. {item.get('title', '')} ({item.get('link', '')})")
    return "\n".join(lines)


def extract_candidates(payload: dict, news_limit: int = MAX_NEWS_LINES) -> list[AnswerCandidate]:
    """
    Extract every non-empty answer a search payload offers.

    Ranks, best first:
    1. ``answer_box.answer``
    2. ``answer_box.snippet``
    3. up to ``news_limit`` ``news_results`` as numbered "title (link)" lines
    4. the first organic result's snippet, or its title
    """
    candidates = []

    answer_box = payload.get("answer_box")
    if isinstance(answer_box, dict):
        answer = _text(answer_box.get("answer"))
        if answer:
            candidates.append(AnswerCandidate(RANK_INSTANT_ANSWER, answer))
        snippet = _text(answer_box.get("snippet"))
        if snippet:
            candidates.append(AnswerCandidate(RANK_ANSWER_SNIPPET, snippet))

    news = payload.get("news_results")
    if isinstance(news, list) and news:
        listing = _format_news(news, news_limit)
        if listing:
            candidates.append(AnswerCandidate(RANK_NEWS_LIST, listing))

    organic = payload.get("organic_results")
    if isinstance(organic, list) and organic and isinstance(organic[0], dict):
        first = organic[0]
        text = _text(first.get("snippet")) or _text(first.get("title"))
        if text:
            candidates.append(AnswerCandidate(RANK_ORGANIC, text))

    return candidates


def select_answer(candidates: list[AnswerCandidate]) -> Optional[AnswerCandidate]:
    """Pick the candidate with the lowest rank, or None."""
    if not candidates:
        return None
    return min(candidates, key=lambda c: c.source_rank)


def extract_news_answer(payload: dict, news_limit: int = MAX_NEWS_LINES) -> str:
    """Return the best answer in a search payload, or the canned no-news reply."""
    best = select_answer(extract_candidates(payload, news_limit))
    return best.text if best else NO_NEWS_REPLY
