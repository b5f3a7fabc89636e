"""Podcast generation: fetch news, write a script, synthesize, store.

Stages run strictly in order, each consuming the previous stage's output.
Any stage failure fails the whole job with a classified reason; audio is
only written once every chunk has been synthesized, so a failed or
abandoned job leaves no file behind.
"""

import asyncio
import logging

from ..config.settings import Settings
from ..news.catalog import build_category_query, location_name
from ..summary.generator import SummaryGenerator
from ..upstream.errors import UpstreamError, UpstreamErrorKind
from ..upstream.news_search import NewsSearchClient
from ..upstream.speech import SpeechClient
from .models import (
    AudioArtifact,
    FailureReason,
    PodcastJob,
    PodcastOptions,
    PodcastStage,
    Voice,
)
from .script import build_script, chunk_text
from .storage import AudioStore
from .voices import find_voice

logger = logging.getLogger(__name__)


class UnknownVoiceError(ValueError):
    """The requested voice is not in the catalogue."""


class NewsUnavailableError(Exception):
    """No articles could be fetched for the podcast."""


REASON_BY_KIND = {
    UpstreamErrorKind.AUTH: FailureReason.AUTH,
    UpstreamErrorKind.QUOTA: FailureReason.RATE_LIMIT,
    UpstreamErrorKind.TIMEOUT: FailureReason.TIMEOUT,
}
NEWS_SOURCES = ("serpapi", "newsapi")
NEWS_UNAVAILABLE_MESSAGE = "Unable to fetch latest news. Please try again later."


def describe_failure(error: UpstreamError) -> tuple[FailureReason, str]:
    """Turn a classified upstream error into a job failure reason and message."""
    reason = REASON_BY_KIND.get(error.kind)
    if reason is not None:
        return reason, error.user_message()
    if error.source in NEWS_SOURCES:
        return FailureReason.NEWS_UNAVAILABLE, NEWS_UNAVAILABLE_MESSAGE
    return FailureReason.GENERIC, error.user_message()


class PodcastOrchestrator:
    """Runs podcast jobs against the news, language-model and speech upstreams."""

    def __init__(
        self,
        news: NewsSearchClient,
        summaries: SummaryGenerator,
        speech: SpeechClient,
        store: AudioStore,
        voices: list[Voice],
        settings: Settings,
        url_prefix: str = "/api/podcast",
    ):
        self.news = news
        self.summaries = summaries
        self.speech = speech
        self.store = store
        self.voices = voices
        self.max_articles = settings.podcast_max_articles
        self.max_chars = settings.speech_max_chars
        self.timeout = settings.podcast_timeout_seconds
        self.url_prefix = url_prefix.rstrip("/")

    async def generate(self, options: PodcastOptions) -> PodcastJob:
        """
        Generate a podcast for the options.

        Returns:
            The job, either DONE with an audio artifact or FAILED with a reason

        Raises:
            UnknownVoiceError: the voice is not in the catalogue
        """
        voice = find_voice(self.voices, options.voice_style)
        if voice is None:
            raise UnknownVoiceError(f"Unknown voice: {options.voice_style}")

        job = PodcastJob(options=options)
        logger.info(
            "[PODCAST] Starting: voice=%s, category=%s, location=%s, style=%s",
            options.voice_style,
            options.category,
            options.location,
            options.style,
        )
        try:
            await asyncio.wait_for(self._run(job, voice), timeout=self.timeout)
        except UpstreamError as e:
            reason, message = describe_failure(e)
            job.fail(reason, message)
        except NewsUnavailableError:
            job.fail(FailureReason.NEWS_UNAVAILABLE, NEWS_UNAVAILABLE_MESSAGE)
        except asyncio.TimeoutError:
            job.fail(
                FailureReason.TIMEOUT,
                "Podcast generation took too long. Try a different category or try again later.",
            )

        if job.failure:
            logger.error("[PODCAST] Failed (%s): %s", job.failure.reason.value, job.failure.message)
        return job

    async def _run(self, job: PodcastJob, voice: Voice) -> None:
        options = job.options

        # Stage 1: fetch articles
        job.advance(PodcastStage.FETCHING, 10)
        headlines = await self.news.search_headlines(
            build_category_query(options.category, options.location),
            location=location_name(options.location),
            limit=self.max_articles,
        )
        if not headlines:
            raise NewsUnavailableError()
        job.articles = headlines
        logger.info("[PODCAST] Fetched %d articles", len(headlines))

        # Stage 2: write the script
        job.advance(PodcastStage.SCRIPTING, 30)
        segments = []
        for i, headline in enumerate(headlines):
            summary = await self.summaries.summarize(headline.title, headline.snippet)
            segments.append((headline.title, summary.text))
            job.advance(PodcastStage.SCRIPTING, 30 + 30 * (i + 1) / len(headlines))
        job.script = build_script(
            segments,
            category=options.category,
            location=options.location,
            style=options.style or voice.style,
        )

        # Stage 3: synthesize, chunk by chunk
        job.advance(PodcastStage.SYNTHESIZING, 60)
        chunks = chunk_text(job.script, self.max_chars)
        audio = bytearray()
        for i, chunk in enumerate(chunks):
            audio.extend(await self.speech.synthesize(chunk, voice.provider_voice_id))
            job.advance(PodcastStage.SYNTHESIZING, 60 + 35 * (i + 1) / len(chunks))
        logger.info("[PODCAST] Synthesized %d chunks (%d bytes)", len(chunks), len(audio))

        # Stage 4: store the artifact
        filename = self.store.new_filename(options.category, options.location)
        self.store.write(filename, bytes(audio))
        job.audio_artifact = AudioArtifact(
            filename=filename,
            stream_url=f"{self.url_prefix}/stream/{filename}",
            download_url=f"{self.url_prefix}/download/{filename}",
        )
        job.advance(PodcastStage.DONE, 100)
