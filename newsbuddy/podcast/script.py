"""Podcast script assembly and chunking for speech synthesis."""

import re
from datetime import datetime
from typing import Optional

from ..news.catalog import location_name

_INTROS = {
    "professional": "Good {part_of_day}, and welcome to your {topic} briefing{place}. Here are today's top stories.",
    "casual": "Hey there, and welcome back! Let's catch up on what's happening in {topic}{place} today.",
}
_OUTROS = {
    "professional": "That concludes today's briefing. Thank you for listening.",
    "casual": "And that's a wrap for today. Thanks for hanging out, see you next time!",
}
_TRANSITIONS = {
    "professional": ["Our top story.", "In other news.", "Also making headlines.", "Turning now to another story.", "And finally."],
    "casual": ["First up.", "Next up.", "Here's another one.", "Oh, and this one's interesting.", "Last but not least."],
}

_SENTENCE_RE = re.compile(r"(?<=[.!?])\s+")


def _part_of_day(now: datetime) -> str:
    if now.hour < 12:
        return "morning"
    if now.hour < 18:
        return "afternoon"
    return "evening"


def _transition(style: str, index: int, total: int) -> str:
    transitions = _TRANSITIONS[style]
    if index == 0:
        return transitions[0]
    if index == total - 1 and total > 1:
        return transitions[-1]
    middle = transitions[1:-1]
    return middle[(index - 1) % len(middle)]


def build_script(
    segments: list[tuple[str, str]],
    category: str,
    location: Optional[str],
    style: str = "professional",
    now: Optional[datetime] = None,
) -> str:
    """
    Build a spoken script from (title, summary) pairs.

    Args:
        segments: One (title, summary) pair per article, in presentation order
        category: News category used in the intro
        location: Location code used in the intro
        style: "professional" or "casual"; unknown styles read as professional
        now: Clock used to pick the greeting

    Returns:
        Paragraphs separated by blank lines
    """
    style = style if style in _INTROS else "professional"
    place = location_name(location)
    topic = "news" if not category or category.lower() == "general" else f"{category.lower()} news"
    intro = _INTROS[style].format(
        part_of_day=_part_of_day(now or datetime.now()),
        topic=topic,
        place=f" from {place}" if place else "",
    )

    paragraphs = [intro]
    for i, (title, summary) in enumerate(segments):
        title = title.strip().rstrip(".")
        line = f"{_transition(style, i, len(segments))} {title}."
        if summary and summary.strip().rstrip(".") != title:
            line += f" {summary.strip().rstrip('.')}."
        paragraphs.append(line)
    paragraphs.append(_OUTROS[style])
    return "\n\n".join(paragraphs)


def chunk_text(text: str, max_chars: int) -> list[str]:
    """
    Split text into chunks of at most ``max_chars`` characters.

    Splits on paragraph and sentence boundaries; a single sentence longer
    than the limit is split on words (and a single overlong word hard-cut).
    """
    if max_chars <= 0:
        raise ValueError("max_chars must be positive")

    pieces: list[str] = []
    for paragraph in text.split("\n\n"):
        for sentence in _SENTENCE_RE.split(paragraph.strip()):
            if sentence:
                pieces.extend(_split_long(sentence, max_chars))

    chunks: list[str] = []
    current = ""
    for piece in pieces:
        candidate = f"{current} {piece}" if current else piece
        if len(candidate) <= max_chars:
            current = candidate
        else:
            chunks.append(current)
            current = piece
    if current:
        chunks.append(current)
    return chunks


def _split_long(sentence: str, max_chars: int) -> list[str]:
    if len(sentence) <= max_chars:
        return [sentence]
    parts: list[str] = []
    current = ""
    for word in sentence.split():
        while len(word) > max_chars:
            if current:
                parts.append(current)
                current = ""
            parts.append(word[:max_chars])
            word = word[max_chars:]
        if not word:
            continue
        candidate = f"{current} {word}" if current else word
        if len(candidate) <= max_chars:
            current = candidate
        else:
            parts.append(current)
            current = word
    if current:
        parts.append(current)
    return parts
