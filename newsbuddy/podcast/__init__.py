"""News podcast generation."""

from .models import (
    AudioArtifact,
    FailureReason,
    PodcastFailure,
    PodcastJob,
    PodcastOptions,
    PodcastStage,
    Voice,
)
from .orchestrator import PodcastOrchestrator, UnknownVoiceError, describe_failure
from .script import build_script, chunk_text
from .storage import AudioDetails, AudioStore
from .voices import find_voice, load_voices

__all__ = [
    "AudioArtifact",
    "AudioDetails",
    "AudioStore",
    "FailureReason",
    "PodcastFailure",
    "PodcastJob",
    "PodcastOptions",
    "PodcastOrchestrator",
    "PodcastStage",
    "UnknownVoiceError",
    "Voice",
    "build_script",
    "chunk_text",
    "describe_failure",
    "find_voice",
    "load_voices",
]
