import unittest

from newsbuddy.chat.extraction import (
    NO_NEWS_REPLY,
    extract_candidates,
    extract_news_answer,
    select_answer,
)
from newsbuddy.chat.models import AnswerCandidate


def news_results(n):
    return [{"title": f"Title {i}", "link": f"https://news.example/{i}"} for i in range(1, n + 1)]


class TestExtractNewsAnswer(unittest.TestCase):
    def test_news_results_only_gives_five_numbered_lines_in_order(self):
        answer = extract_news_answer({"news_results": news_results(7)})
        lines = answer.split("\n")
        self.assertEqual(len(lines), 5)
        self.assertEqual(lines[0], "1. Title 1 (https://news.example/1)")
        self.assertEqual(lines[4], "5. Title 5 (https://news.example/5)")

    def test_everything_empty_gives_canned_reply(self):
        payload = {"answer_box": {}, "news_results": [], "organic_results": []}
        self.assertEqual(extract_news_answer(payload), "Sorry, I couldn't find any news right now.")
        self.assertEqual(extract_news_answer({}), NO_NEWS_REPLY)

    def test_instant_answer_outranks_everything(self):
        payload = {
            "answer_box": {"answer": "42", "snippet": "a snippet"},
            "news_results": news_results(2),
            "organic_results": [{"snippet": "organic"}],
        }
        self.assertEqual(extract_news_answer(payload), "42")

    def test_snippet_used_when_answer_blank(self):
        payload = {"answer_box": {"answer": "  ", "snippet": "a snippet"}, "news_results": news_results(2)}
        self.assertEqual(extract_news_answer(payload), "a snippet")

    def test_organic_snippet_then_title(self):
        self.assertEqual(
            extract_news_answer({"organic_results": [{"snippet": "snip", "title": "t"}, {"snippet": "second"}]}),
            "snip",
        )
        self.assertEqual(extract_news_answer({"organic_results": [{"title": "only title"}]}), "only title")

    def test_news_list_outranks_organic(self):
        payload = {"news_results": news_results(1), "organic_results": [{"snippet": "organic"}]}
        self.assertEqual(extract_news_answer(payload), "1. Title 1 (https://news.example/1)")


class TestCandidates(unittest.TestCase):
    def test_all_shapes_extracted_with_ranks(self):
        payload = {
            "answer_box": {"answer": "a", "snippet": "s"},
            "news_results": news_results(1),
            "organic_results": [{"snippet": "o"}],
        }
        ranks = [c.source_rank for c in extract_candidates(payload)]
        self.assertEqual(ranks, [1, 2, 3, 4])

    def test_select_lowest_rank(self):
        chosen = select_answer([AnswerCandidate(3, "list"), AnswerCandidate(2, "snippet")])
        self.assertEqual(chosen.text, "snippet")
        self.assertIsNone(select_answer([]))


if __name__ == "__main__":
    unittest.main()
