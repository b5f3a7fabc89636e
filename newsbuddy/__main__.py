#!/usr/bin/env python3
"""
newsbuddy command line

Usage:
    python -m newsbuddy serve                      # Run the HTTP API
    python -m newsbuddy chat "latest tech news"    # Answer one chat message
    python -m newsbuddy summarize "Headline: ..."  # One-line summary
    python -m newsbuddy podcast --voice casual_male --category sports
"""

import argparse
import asyncio
import logging
import sys

from .chat.models import ChatRequest
from .chat.resolver import AnswerResolver
from .config.settings import settings
from .podcast.models import PodcastOptions
from .podcast.orchestrator import PodcastOrchestrator, UnknownVoiceError
from .podcast.storage import AudioStore
from .podcast.voices import load_voices
from .summary.generator import SummaryGenerator
from .upstream.language_model import LanguageModelClient
from .upstream.news_search import NewsSearchClient
from .upstream.speech import SpeechClient


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Chat and news assistant backend")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=settings.port)
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")

    chat = sub.add_parser("chat", help="Answer a single chat message")
    chat.add_argument("message")

    summarize = sub.add_parser("summarize", help="Summarize a headline")
    summarize.add_argument("headline")
    summarize.add_argument("--description", default=None)

    podcast = sub.add_parser("podcast", help="Generate a news podcast")
    podcast.add_argument("--voice", required=True, help="Voice id from voices.yaml")
    podcast.add_argument("--category", default="general")
    podcast.add_argument("--location", default="IN")
    podcast.add_argument("--style", default=None, help="casual or professional (default: voice style)")

    return parser.parse_args(argv)


async def run_chat(message: str) -> int:
    resolver = AnswerResolver.default(NewsSearchClient(settings), LanguageModelClient(settings))
    reply, ok = await resolver.reply(ChatRequest(message=message))
    print(reply)
    return 0 if ok else 1


async def run_summarize(headline: str, description: str | None) -> int:
    generator = SummaryGenerator(LanguageModelClient(settings), settings)
    result = await generator.summarize(headline, description)
    print(f"{result.text}  [{result.origin.value}]")
    return 0


async def run_podcast(args: argparse.Namespace) -> int:
    voices = load_voices(settings.voices_file)
    orchestrator = PodcastOrchestrator(
        news=NewsSearchClient(settings),
        summaries=SummaryGenerator(LanguageModelClient(settings), settings),
        speech=SpeechClient(settings),
        store=AudioStore(settings.audio_dir),
        voices=voices,
        settings=settings,
    )
    style = args.style or next((v.style for v in voices if v.id == args.voice), "professional")
    try:
        job = await orchestrator.generate(
            PodcastOptions(voice_style=args.voice, category=args.category, location=args.location, style=style)
        )
    except UnknownVoiceError as e:
        print(f"{e}. Available: {', '.join(v.id for v in voices)}", file=sys.stderr)
        return 2

    if job.failure:
        print(f"Podcast failed ({job.failure.reason.value}): {job.failure.message}", file=sys.stderr)
        return 1
    print(job.script)
    print(f"\nSaved to: {settings.audio_dir / job.audio_artifact.filename}")
    return 0


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)

    if args.command == "serve":
        import uvicorn

        uvicorn.run("newsbuddy.app.main:app", host=args.host, port=args.port, reload=args.reload)
        return

    if args.command == "chat":
        code = asyncio.run(run_chat(args.message))
    elif args.command == "summarize":
        code = asyncio.run(run_summarize(args.headline, args.description))
    else:
        code = asyncio.run(run_podcast(args))
    sys.exit(code)


if __name__ == "__main__":
    main()
