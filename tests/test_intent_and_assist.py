import unittest

from newsbuddy.assist.tasks import (
    DEFAULT_FOLLOW_UPS,
    NEUTRAL_SENTIMENT,
    REPLY_UNAVAILABLE,
    SUMMARY_UNAVAILABLE,
    NewsAssistant,
)
from newsbuddy.chat.intent import IntentClassifier, default_intent, parse_intent
from newsbuddy.chat.models import IntentKind
from newsbuddy.prompts import render, template_names
from newsbuddy.upstream.errors import UpstreamErrorKind
from newsbuddy.utils.parsing import extract_json

from .fakes import FakeLanguageModel, upstream_error


class TestPrompts(unittest.TestCase):
    def test_bundled_templates(self):
        names = template_names()
        for name in ("summary", "intent", "sentiment", "follow_up"):
            self.assertIn(name, names)

    def test_render_substitutes_and_keeps_json_braces(self):
        prompt = render("intent", message="any cricket scores?")
        self.assertIn("\"any cricket scores?\"", prompt)
        self.assertIn("{", prompt)

    def test_missing_template_or_value(self):
        with self.assertRaises(FileNotFoundError):
            render("does_not_exist")
        with self.assertRaises(KeyError):
            render("intent")


class TestExtractJson(unittest.TestCase):
    def test_plain_and_fenced_json(self):
        self.assertEqual(extract_json('{"a": 1}'), {"a": 1})
        self.assertEqual(extract_json('```json\n{"a": 2}\n```'), {"a": 2})
        self.assertEqual(extract_json('Here you go: ["x", "y"] done'), ["x", "y"])

    def test_unparseable(self):
        self.assertIsNone(extract_json(""))
        self.assertIsNone(extract_json("no json here"))


class TestParseIntent(unittest.TestCase):
    def test_full_object(self):
        intent = parse_intent(
            {"intent": "news_query", "category": "Health", "location": "India", "keywords": ["heart"], "confidence": 1.7}
        )
        self.assertEqual(intent.kind, IntentKind.NEWS_QUERY)
        self.assertEqual(intent.category, "health")
        self.assertEqual(intent.location, "india")
        self.assertEqual(intent.keywords, ["heart"])
        self.assertEqual(intent.confidence, 1.0)

    def test_unknown_kind_gives_default(self):
        self.assertEqual(parse_intent({"intent": "weather"}), default_intent())
        self.assertEqual(parse_intent(None), default_intent())


class TestIntentClassifier(unittest.IsolatedAsyncioTestCase):
    async def test_classify_from_model_json(self):
        llm = FakeLanguageModel('```json\n{"intent": "category_filter", "category": "sports", "keywords": []}\n```')
        intent = await IntentClassifier(llm).classify("show me sports")

        self.assertEqual(intent.kind, IntentKind.CATEGORY_FILTER)
        self.assertEqual(intent.category, "sports")
        self.assertEqual(intent.location, "global")
        self.assertIn('"show me sports"', llm.calls[0][0])

    async def test_upstream_failure_gives_default(self):
        llm = FakeLanguageModel(upstream_error(UpstreamErrorKind.TIMEOUT))
        self.assertEqual(await IntentClassifier(llm).classify("hi"), default_intent())


class TestNewsAssistant(unittest.IsolatedAsyncioTestCase):
    async def test_enhance_query(self):
        assistant = NewsAssistant(FakeLanguageModel('"india election results 2024"'))
        self.assertEqual(await assistant.enhance_query("elections"), "india election results 2024")

    async def test_enhance_query_keeps_original_on_failure(self):
        assistant = NewsAssistant(FakeLanguageModel(upstream_error()))
        self.assertEqual(await assistant.enhance_query("elections"), "elections")

    async def test_contextual_reply_includes_context(self):
        llm = FakeLanguageModel("Sure.")
        reply = await NewsAssistant(llm).contextual_reply("why?", "Markets fell today")

        self.assertEqual(reply, "Sure.")
        self.assertIn("Markets fell today", llm.calls[0][0])

    async def test_fallback_texts(self):
        assistant = NewsAssistant(FakeLanguageModel(upstream_error(UpstreamErrorKind.QUOTA)))
        self.assertEqual(await assistant.contextual_reply("why?"), REPLY_UNAVAILABLE)
        self.assertEqual(await assistant.summarize_content("long text"), SUMMARY_UNAVAILABLE)
        self.assertEqual(await assistant.analyze_sentiment("text"), NEUTRAL_SENTIMENT)
        self.assertEqual(await assistant.extract_topics("text"), [])
        self.assertEqual(await assistant.follow_up_questions("h", "s"), DEFAULT_FOLLOW_UPS)

    async def test_sentiment_parsed_and_clamped(self):
        llm = FakeLanguageModel('{"sentiment": "Positive", "confidence": 3, "explanation": "good news"}')
        result = await NewsAssistant(llm).analyze_sentiment("Team wins title")

        self.assertEqual(result.sentiment, "positive")
        self.assertEqual(result.confidence, 1.0)
        self.assertEqual(result.explanation, "good news")

    async def test_unknown_sentiment_label_is_neutral(self):
        llm = FakeLanguageModel('{"sentiment": "confused"}')
        self.assertEqual(await NewsAssistant(llm).analyze_sentiment("x"), NEUTRAL_SENTIMENT)

    async def test_topics_and_follow_ups(self):
        llm = FakeLanguageModel('["economy", "", "jobs"]', '["What next?"]')
        assistant = NewsAssistant(llm)
        self.assertEqual(await assistant.extract_topics("text"), ["economy", "jobs"])
        self.assertEqual(await assistant.follow_up_questions("h", "s"), ["What next?"])

    async def test_non_list_follow_ups_fall_back(self):
        assistant = NewsAssistant(FakeLanguageModel("no idea"))
        self.assertEqual(await assistant.follow_up_questions("h", "s"), DEFAULT_FOLLOW_UPS)


if __name__ == "__main__":
    unittest.main()
