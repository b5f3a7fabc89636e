"""Test doubles for the upstream clients."""

from newsbuddy.config.settings import Settings
from newsbuddy.news.models import Headline
from newsbuddy.upstream.errors import UpstreamError, UpstreamErrorKind


def make_settings(**overrides) -> Settings:
    values = {
        "gemini_api_key": "test-gemini",
        "serpapi_api_key": "test-serp",
        "newsapi_api_key": "test-newsapi",
        "elevenlabs_api_key": "test-eleven",
    }
    values.update(overrides)
    return Settings(**values)


def upstream_error(kind=UpstreamErrorKind.NETWORK, source="gemini") -> UpstreamError:
    return UpstreamError(kind, source, f"{source} failed: {kind.value}")


class FakeLanguageModel:
    """Returns queued replies (or raises queued errors); repeats the last one."""

    source = "gemini"

    def __init__(self, *replies):
        self.replies = list(replies) or [""]
        self.calls = []

    async def generate(self, prompt, config=None):
        self.calls.append((prompt, config))
        reply = self.replies[min(len(self.calls) - 1, len(self.replies) - 1)]
        if isinstance(reply, Exception):
            raise reply
        return reply


class FakeNewsSearch:
    """Serves a fixed search payload and headline list, or raises an error."""

    source = "serpapi"

    def __init__(self, payload=None, headlines=None, error=None):
        self.payload = payload or {}
        self.headlines = headlines or []
        self.error = error
        self.calls = []

    async def search(self, query, location=None, news_only=False):
        self.calls.append(("search", query, location, news_only))
        if self.error:
            raise self.error
        return self.payload

    async def search_headlines(self, query, location=None, limit=5):
        self.calls.append(("search_headlines", query, location, limit))
        if self.error:
            raise self.error
        return self.headlines[:limit]


class FakeHeadlines:
    source = "newsapi"

    def __init__(self, headlines=None, error=None):
        self.headlines = headlines or []
        self.error = error
        self.calls = []

    async def top_headlines(self, category=None, limit=5):
        self.calls.append((category, limit))
        if self.error:
            raise self.error
        return self.headlines[:limit]


class FakeSpeech:
    """Returns ``b"<n>"`` audio per chunk; optionally fails on the n-th call."""

    source = "elevenlabs"

    def __init__(self, fail_on=None, error=None):
        self.fail_on = fail_on
        self.error = error
        self.calls = []

    async def synthesize(self, text, voice_id):
        self.calls.append((text, voice_id))
        if self.fail_on is not None and len(self.calls) == self.fail_on:
            raise self.error or upstream_error(UpstreamErrorKind.NETWORK, "elevenlabs")
        return f"<{len(self.calls)}>".encode()


def sample_headlines(n=3):
    return [
        Headline(
            title=f"Story {i}: something happened, officials say",
            link=f"https://example.com/{i}",
            source="Example News",
            snippet=f"Details about story {i}.",
        )
        for i in range(1, n + 1)
    ]
