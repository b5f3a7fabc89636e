"""FastAPI dependency providers.

Every upstream client is built from the injected settings here, so tests
swap any of them through ``app.dependency_overrides``.
"""

from fastapi import Depends

from ..assist.tasks import NewsAssistant
from ..chat.intent import IntentClassifier
from ..chat.resolver import AnswerResolver
from ..config.settings import Settings, settings
from ..podcast.models import Voice
from ..podcast.orchestrator import PodcastOrchestrator
from ..podcast.storage import AudioStore
from ..podcast.voices import load_voices
from ..summary.generator import SummaryGenerator
from ..upstream.language_model import LanguageModelClient
from ..upstream.news_search import HeadlinesClient, NewsSearchClient
from ..upstream.speech import SpeechClient


def get_settings() -> Settings:
    return settings


def get_language_model(s: Settings = Depends(get_settings)) -> LanguageModelClient:
    return LanguageModelClient(s)


def get_news_search(s: Settings = Depends(get_settings)) -> NewsSearchClient:
    return NewsSearchClient(s)


def get_headlines(s: Settings = Depends(get_settings)) -> HeadlinesClient:
    return HeadlinesClient(s)


def get_speech(s: Settings = Depends(get_settings)) -> SpeechClient:
    return SpeechClient(s)


def get_summary_generator(
    llm: LanguageModelClient = Depends(get_language_model),
    s: Settings = Depends(get_settings),
) -> SummaryGenerator:
    return SummaryGenerator(llm, s)


def get_answer_resolver(
    news: NewsSearchClient = Depends(get_news_search),
    llm: LanguageModelClient = Depends(get_language_model),
) -> AnswerResolver:
    return AnswerResolver.default(news, llm)


def get_intent_classifier(llm: LanguageModelClient = Depends(get_language_model)) -> IntentClassifier:
    return IntentClassifier(llm)


def get_assistant(llm: LanguageModelClient = Depends(get_language_model)) -> NewsAssistant:
    return NewsAssistant(llm)


def get_audio_store(s: Settings = Depends(get_settings)) -> AudioStore:
    return AudioStore(s.audio_dir)


def get_voices(s: Settings = Depends(get_settings)) -> list[Voice]:
    return load_voices(s.voices_file)


def get_podcast_orchestrator(
    news: NewsSearchClient = Depends(get_news_search),
    summaries: SummaryGenerator = Depends(get_summary_generator),
    speech: SpeechClient = Depends(get_speech),
    store: AudioStore = Depends(get_audio_store),
    voices: list[Voice] = Depends(get_voices),
    s: Settings = Depends(get_settings),
) -> PodcastOrchestrator:
    return PodcastOrchestrator(news, summaries, speech, store, voices, s)
