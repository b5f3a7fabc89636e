"""Data models for news headlines."""

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True)
class Headline:
    """A headline fetched from a news upstream. Lives for one request."""

    title: str
    link: str
    source: Optional[str] = None
    snippet: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)
