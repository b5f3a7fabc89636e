"""Data models for podcast generation jobs."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..news.models import Headline


class PodcastStage(str, Enum):
    FETCHING = "fetching"
    SCRIPTING = "scripting"
    SYNTHESIZING = "synthesizing"
    DONE = "done"
    FAILED = "failed"


class FailureReason(str, Enum):
    AUTH = "auth"
    TIMEOUT = "timeout"
    RATE_LIMIT = "rate_limit"
    NEWS_UNAVAILABLE = "news_unavailable"
    GENERIC = "generic"


@dataclass(frozen=True)
class PodcastOptions:
    voice_style: str
    category: str = "general"
    location: str = "IN"
    style: str = "professional"


@dataclass(frozen=True)
class Voice:
    """A presenter voice from the voice catalogue."""

    id: str
    name: str
    description: str
    provider_voice_id: str
    style: str = "professional"


@dataclass(frozen=True)
class AudioArtifact:
    filename: str
    stream_url: str
    download_url: str


@dataclass(frozen=True)
class PodcastFailure:
    reason: FailureReason
    message: str


@dataclass
class PodcastJob:
    """One podcast generation, mutated stage by stage by the orchestrator."""

    options: PodcastOptions
    progress: float = 0.0
    stage: PodcastStage = PodcastStage.FETCHING
    script: Optional[str] = None
    articles: list[Headline] = field(default_factory=list)
    audio_artifact: Optional[AudioArtifact] = None
    failure: Optional[PodcastFailure] = None

    @property
    def succeeded(self) -> bool:
        return self.stage == PodcastStage.DONE

    def advance(self, stage: PodcastStage, progress: float) -> None:
        self.stage = stage
        self.progress = min(max(progress, self.progress), 100.0)

    def fail(self, reason: FailureReason, message: str) -> None:
        self.stage = PodcastStage.FAILED
        self.failure = PodcastFailure(reason, message)
