"""FastAPI web application for the newsbuddy chat and news assistant."""

import logging

from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)

import uvicorn
from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

from ..assist.tasks import SUMMARY_UNAVAILABLE, NewsAssistant
from ..chat.intent import IntentClassifier
from ..chat.models import ChatRequest
from ..chat.resolver import AnswerResolver
from ..config.settings import Settings, settings
from ..podcast.models import FailureReason, PodcastOptions, Voice
from ..podcast.orchestrator import PodcastOrchestrator, UnknownVoiceError
from ..podcast.storage import AudioStore
from ..summary.generator import SummaryGenerator, SummaryOrigin
from ..upstream.errors import UpstreamError, UpstreamErrorKind
from ..upstream.news_search import HeadlinesClient, NewsSearchClient
from .dependencies import (
    get_answer_resolver,
    get_assistant,
    get_audio_store,
    get_headlines,
    get_intent_classifier,
    get_news_search,
    get_podcast_orchestrator,
    get_settings,
    get_summary_generator,
    get_voices,
)
from .models import (
    ArticleInfo,
    ChatRequestBody,
    ChatResponse,
    ContentRequest,
    FollowUpRequest,
    FollowUpResponse,
    HeadlineItem,
    HeadlinesResponse,
    IntentModel,
    MessageRequest,
    NewsItem,
    PodcastDetails,
    PodcastRequest,
    PodcastResponse,
    QueryRequest,
    QueryResponse,
    ReplyRequest,
    SentimentResponse,
    SummaryRequest,
    SummaryResponse,
    TextRequest,
    TopicsResponse,
    VoiceInfo,
    VoicesResponse,
)

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    UpstreamErrorKind.AUTH: 401,
    UpstreamErrorKind.QUOTA: 429,
    UpstreamErrorKind.TIMEOUT: 504,
    UpstreamErrorKind.MALFORMED: 502,
    UpstreamErrorKind.NETWORK: 502,
}
STATUS_BY_REASON = {
    FailureReason.AUTH: 401,
    FailureReason.RATE_LIMIT: 429,
    FailureReason.TIMEOUT: 504,
    FailureReason.NEWS_UNAVAILABLE: 502,
    FailureReason.GENERIC: 500,
}

app = FastAPI(title="newsbuddy")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _upstream_error_response(error: UpstreamError, fallback: str) -> JSONResponse:
    """Error response for a failed upstream call; never echoes the upstream body."""
    message = error.user_message() if error.kind == UpstreamErrorKind.AUTH else fallback
    return JSONResponse(
        status_code=STATUS_BY_KIND[error.kind],
        content={"error": message, "reason": error.kind.value},
    )


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# ============================================================================
# News
# ============================================================================


@app.get("/api/news", response_model=list[NewsItem])
async def search_news(
    q: str | None = None,
    news: NewsSearchClient = Depends(get_news_search),
    s: Settings = Depends(get_settings),
):
    """Top news results for a query (at most five)."""
    query = q.strip() if q and q.strip() else s.default_news_query
    try:
        headlines = await news.search_headlines(
            query,
            location=s.default_news_location,
            limit=s.news_result_limit,
        )
    except UpstreamError as e:
        return _upstream_error_response(e, "Failed to fetch news")
    return [NewsItem(title=h.title, link=h.link) for h in headlines]


@app.get("/news", response_model=HeadlinesResponse)
async def top_headlines(
    category: str | None = None,
    headlines_client: HeadlinesClient = Depends(get_headlines),
    s: Settings = Depends(get_settings),
):
    """Top headlines for the configured country, optionally by category."""
    try:
        headlines = await headlines_client.top_headlines(category or None, limit=s.news_result_limit)
    except UpstreamError as e:
        return _upstream_error_response(e, "Error fetching news")
    return HeadlinesResponse(headlines=[HeadlineItem(title=h.title, url=h.link) for h in headlines])


# ============================================================================
# Chat
# ============================================================================


@app.post("/chat", response_model=ChatResponse)
async def chat(body: ChatRequestBody, resolver: AnswerResolver = Depends(get_answer_resolver)):
    """Answer a chat message from news search or the language model."""
    request = ChatRequest(
        message=body.message,
        intent=body.intent.to_intent() if body.intent else None,
    )
    reply, ok = await resolver.reply(request)
    if not ok:
        return JSONResponse(status_code=502, content={"reply": reply})
    return ChatResponse(reply=reply)


@app.post("/generate-summary", response_model=SummaryResponse)
async def generate_summary(
    body: SummaryRequest,
    generator: SummaryGenerator = Depends(get_summary_generator),
):
    """One-line summary of a headline; always succeeds for valid input."""
    result = await generator.summarize(body.headline, body.description)
    return SummaryResponse(summary=result.text, origin=result.origin.value)


@app.post("/api/intent", response_model=IntentModel)
async def detect_intent(
    body: MessageRequest,
    classifier: IntentClassifier = Depends(get_intent_classifier),
):
    """Classify a message into a news intent."""
    intent = await classifier.classify(body.message)
    return IntentModel.from_intent(intent)


# ============================================================================
# Assistant helpers
# ============================================================================


@app.post("/api/assist/enhance-query", response_model=QueryResponse)
async def enhance_query(body: QueryRequest, assistant: NewsAssistant = Depends(get_assistant)):
    return QueryResponse(query=await assistant.enhance_query(body.query))


@app.post("/api/assist/reply", response_model=ChatResponse)
async def contextual_reply(body: ReplyRequest, assistant: NewsAssistant = Depends(get_assistant)):
    return ChatResponse(reply=await assistant.contextual_reply(body.message, body.context))


@app.post("/api/assist/summarize", response_model=SummaryResponse)
async def summarize_content(body: ContentRequest, assistant: NewsAssistant = Depends(get_assistant)):
    summary = await assistant.summarize_content(body.content)
    origin = SummaryOrigin.FALLBACK if summary == SUMMARY_UNAVAILABLE else SummaryOrigin.MODEL
    return SummaryResponse(summary=summary, origin=origin.value)


@app.post("/api/assist/sentiment", response_model=SentimentResponse)
async def analyze_sentiment(body: TextRequest, assistant: NewsAssistant = Depends(get_assistant)):
    result = await assistant.analyze_sentiment(body.text)
    return SentimentResponse(
        sentiment=result.sentiment,
        confidence=result.confidence,
        explanation=result.explanation,
    )


@app.post("/api/assist/topics", response_model=TopicsResponse)
async def extract_topics(body: TextRequest, assistant: NewsAssistant = Depends(get_assistant)):
    return TopicsResponse(topics=await assistant.extract_topics(body.text))


@app.post("/api/assist/follow-up", response_model=FollowUpResponse)
async def follow_up_questions(body: FollowUpRequest, assistant: NewsAssistant = Depends(get_assistant)):
    questions = await assistant.follow_up_questions(body.headline, body.summary)
    return FollowUpResponse(questions=questions)


# ============================================================================
# Podcast
# ============================================================================


@app.get("/api/podcast/voices", response_model=VoicesResponse)
async def list_voices(voices: list[Voice] = Depends(get_voices)):
    """Return available voices for the selector."""
    return VoicesResponse(
        voices=[VoiceInfo(id=v.id, name=v.name, description=v.description) for v in voices]
    )


@app.post("/api/podcast/generate", response_model=PodcastResponse)
async def generate_podcast(
    body: PodcastRequest,
    orchestrator: PodcastOrchestrator = Depends(get_podcast_orchestrator),
):
    """Generate a news podcast. Long-running; clients should allow several minutes."""
    options = PodcastOptions(
        voice_style=body.voiceStyle,
        category=body.category,
        location=body.location,
        style=body.style,
    )
    try:
        job = await orchestrator.generate(options)
    except UnknownVoiceError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception:
        logger.exception("Podcast generation failed")
        return JSONResponse(
            status_code=500,
            content={"error": "Server error occurred during podcast generation", "reason": FailureReason.GENERIC.value},
        )

    if job.failure:
        return JSONResponse(
            status_code=STATUS_BY_REASON[job.failure.reason],
            content={"error": job.failure.message, "reason": job.failure.reason.value},
        )

    artifact = job.audio_artifact
    return PodcastResponse(
        filename=artifact.filename,
        script=job.script or "",
        articles=[ArticleInfo(title=a.title, link=a.link, source=a.source) for a in job.articles],
        streamUrl=artifact.stream_url,
        downloadUrl=artifact.download_url,
        progress=job.progress,
        stage=job.stage.value,
    )


@app.get("/api/podcast/details/{filename}", response_model=PodcastDetails)
async def podcast_details(filename: str, store: AudioStore = Depends(get_audio_store)):
    details = store.details(filename)
    if details is None:
        raise HTTPException(status_code=404, detail="Podcast not found")
    return PodcastDetails(
        filename=details.filename,
        sizeBytes=details.size_bytes,
        createdAt=details.created_at.isoformat(),
        streamUrl=f"/api/podcast/stream/{filename}",
        downloadUrl=f"/api/podcast/download/{filename}",
    )


@app.get("/api/podcast/stream/{filename}")
async def stream_podcast(filename: str, store: AudioStore = Depends(get_audio_store)):
    path = store.resolve(filename)
    if path is None:
        raise HTTPException(status_code=404, detail="Podcast not found")
    return FileResponse(str(path), media_type="audio/mpeg")


@app.get("/api/podcast/download/{filename}")
async def download_podcast(filename: str, store: AudioStore = Depends(get_audio_store)):
    path = store.resolve(filename)
    if path is None:
        raise HTTPException(status_code=404, detail="Podcast not found")
    return FileResponse(str(path), media_type="audio/mpeg", filename=filename)


if __name__ == "__main__":
    uvicorn.run(
        "newsbuddy.app.main:app",
        host="0.0.0.0",
        port=settings.port,
    )
