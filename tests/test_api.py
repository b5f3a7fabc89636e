import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

from newsbuddy.app.dependencies import (
    get_headlines,
    get_language_model,
    get_news_search,
    get_settings,
    get_speech,
)
from newsbuddy.app.main import app
from newsbuddy.news.models import Headline
from newsbuddy.upstream.errors import UpstreamErrorKind

from .fakes import (
    FakeHeadlines,
    FakeLanguageModel,
    FakeNewsSearch,
    FakeSpeech,
    make_settings,
    sample_headlines,
    upstream_error,
)


class ApiTestCase(unittest.TestCase):
    """Runs the app against fake upstreams and a temporary audio directory."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.settings = make_settings(audio_dir=Path(self._tmp.name), speech_max_chars=200)
        self.llm = FakeLanguageModel("A fine model generated summary")
        self.news = FakeNewsSearch(headlines=sample_headlines(3))
        self.headlines = FakeHeadlines(headlines=sample_headlines(2))
        self.speech = FakeSpeech()

        app.dependency_overrides[get_settings] = lambda: self.settings
        app.dependency_overrides[get_language_model] = lambda: self.llm
        app.dependency_overrides[get_news_search] = lambda: self.news
        app.dependency_overrides[get_headlines] = lambda: self.headlines
        app.dependency_overrides[get_speech] = lambda: self.speech
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        self._tmp.cleanup()


class TestNewsEndpoints(ApiTestCase):
    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "healthy"})

    def test_api_news_default_query(self):
        response = self.client.get("/api/news")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()), 3)
        self.assertEqual(response.json()[0], {"title": sample_headlines(1)[0].title, "link": "https://example.com/1"})
        self.assertEqual(self.news.calls[0], ("search_headlines", "top news india", "India", 5))

    def test_api_news_custom_query(self):
        self.client.get("/api/news", params={"q": "cricket"})
        self.assertEqual(self.news.calls[0][1], "cricket")

    def test_api_news_quota_error(self):
        self.news.error = upstream_error(UpstreamErrorKind.QUOTA, "serpapi")
        response = self.client.get("/api/news")

        self.assertEqual(response.status_code, 429)
        self.assertEqual(response.json()["reason"], "quota")

    def test_top_headlines(self):
        response = self.client.get("/news", params={"category": "health"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["headlines"][1]["url"], "https://example.com/2")
        self.assertEqual(self.headlines.calls, [("health", 5)])

    def test_top_headlines_auth_error_names_credential(self):
        self.headlines.error = upstream_error(UpstreamErrorKind.AUTH, "newsapi")
        response = self.client.get("/news")

        self.assertEqual(response.status_code, 401)
        self.assertIn("NEWSAPI_API_KEY", response.json()["error"])


class TestChatEndpoints(ApiTestCase):
    def test_chat_from_language_model(self):
        self.llm.replies = ["Hi! How can I help?"]
        response = self.client.post("/chat", json={"message": "hello"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"reply": "Hi! How can I help?"})
        self.assertEqual(self.news.calls, [])

    def test_chat_news_with_intent_hint(self):
        self.news.payload = {"news_results": [{"title": "Win", "link": "https://w"}]}
        response = self.client.post(
            "/chat",
            json={"message": "scores", "intent": {"intent": "news_query", "category": "sports", "keywords": ["ipl"]}},
        )

        self.assertEqual(response.json(), {"reply": "1. Win (https://w)"})
        self.assertEqual(self.news.calls[0][1], "scores sports ipl")

    def test_chat_total_failure(self):
        self.news.error = upstream_error(UpstreamErrorKind.NETWORK, "serpapi")
        self.llm.replies = [upstream_error(UpstreamErrorKind.AUTH, "gemini")]
        response = self.client.post("/chat", json={"message": "news today"})

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json(), {"reply": "Error contacting Gemini API."})

    def test_blank_message_rejected(self):
        self.assertEqual(self.client.post("/chat", json={"message": "   "}).status_code, 422)
        self.assertEqual(self.client.post("/chat", json={}).status_code, 422)

    def test_generate_summary(self):
        response = self.client.post("/generate-summary", json={"headline": "Big: news, today"})
        self.assertEqual(response.json(), {"summary": "A fine model generated summary", "origin": "model"})

    def test_generate_summary_fallback(self):
        self.llm.replies = [upstream_error(UpstreamErrorKind.TIMEOUT)]
        response = self.client.post("/generate-summary", json={"headline": "Big: news, today"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"summary": "news", "origin": "fallback-heuristic"})

    def test_generate_summary_requires_headline(self):
        self.assertEqual(self.client.post("/generate-summary", json={"headline": ""}).status_code, 422)

    def test_intent(self):
        self.llm.replies = ['{"intent": "news_query", "category": "technology", "keywords": ["ai"], "confidence": 0.9}']
        response = self.client.post("/api/intent", json={"message": "latest ai news"})

        body = response.json()
        self.assertEqual(body["kind"], "news_query")
        self.assertEqual(body["category"], "technology")
        self.assertEqual(body["keywords"], ["ai"])

    def test_assist_endpoints(self):
        self.llm.replies = ['["economy", "jobs"]']
        self.assertEqual(self.client.post("/api/assist/topics", json={"text": "t"}).json(), {"topics": ["economy", "jobs"]})

        self.llm.replies = ['{"sentiment": "negative", "confidence": 0.8, "explanation": "bad"}']
        body = self.client.post("/api/assist/sentiment", json={"text": "t"}).json()
        self.assertEqual(body["sentiment"], "negative")

        self.llm.replies = ["Because markets fell."]
        body = self.client.post("/api/assist/reply", json={"message": "why?", "context": "markets"}).json()
        self.assertEqual(body, {"reply": "Because markets fell."})


class TestPodcastEndpoints(ApiTestCase):
    def generate(self, **overrides):
        body = {"voiceStyle": "professional_female", "category": "technology", "location": "US"}
        body.update(overrides)
        return self.client.post("/api/podcast/generate", json=body)

    def test_voices(self):
        voices = self.client.get("/api/podcast/voices").json()["voices"]
        ids = [v["id"] for v in voices]

        self.assertIn("casual_male", ids)
        self.assertNotIn("legacy_narrator", ids)
        self.assertEqual(set(voices[0]), {"id", "name", "description"})

    def test_generate_stream_download_details(self):
        response = self.generate()
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["progress"], 100)
        self.assertEqual(body["stage"], "done")
        self.assertEqual(len(body["articles"]), 3)
        self.assertEqual(self.news.calls[0][1], "top technology news United States")

        stream = self.client.get(body["streamUrl"])
        self.assertEqual(stream.status_code, 200)
        self.assertEqual(stream.headers["content-type"], "audio/mpeg")
        self.assertTrue(stream.content.startswith(b"<1>"))

        download = self.client.get(body["downloadUrl"])
        self.assertIn(body["filename"], download.headers["content-disposition"])

        details = self.client.get(f"/api/podcast/details/{body['filename']}").json()
        self.assertEqual(details["sizeBytes"], len(stream.content))

    def test_unknown_voice_is_422(self):
        self.assertEqual(self.generate(voiceStyle="robot").status_code, 422)

    def test_speech_auth_failure(self):
        self.speech.fail_on = 1
        self.speech.error = upstream_error(UpstreamErrorKind.AUTH, "elevenlabs")
        response = self.generate()

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["reason"], "auth")
        self.assertEqual(list(Path(self._tmp.name).iterdir()), [])

    def test_no_news_is_502(self):
        self.news.headlines = []
        response = self.generate()

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["reason"], "news_unavailable")

    def test_unknown_files_are_404(self):
        self.assertEqual(self.client.get("/api/podcast/stream/podcast_x.mp3").status_code, 404)
        self.assertEqual(self.client.get("/api/podcast/download/missing.mp3").status_code, 404)
        self.assertEqual(self.client.get("/api/podcast/details/missing.mp3").status_code, 404)


class TestHeadlineModel(unittest.TestCase):
    def test_to_dict(self):
        headline = Headline(title="T", link="https://t")
        self.assertEqual(headline.to_dict()["title"], "T")


if __name__ == "__main__":
    unittest.main()
