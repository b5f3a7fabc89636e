"""Pydantic request/response models for the web API."""

from typing import Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from ..chat.models import Intent, IntentKind


def _require_text(v: str, name: str) -> str:
    if not v or not v.strip():
        raise ValueError(f"{name} must not be empty")
    return v.strip()


class IntentModel(BaseModel):
    """Intent hint as sent by the client (``kind`` or ``intent`` key)."""

    kind: IntentKind = Field(validation_alias=AliasChoices("kind", "intent"))
    category: Optional[str] = None
    location: Optional[str] = None
    keywords: list[str] = []
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)

    def to_intent(self) -> Intent:
        return Intent(
            kind=self.kind,
            category=self.category,
            location=self.location,
            keywords=list(self.keywords),
            confidence=self.confidence,
        )

    @classmethod
    def from_intent(cls, intent: Intent) -> "IntentModel":
        return cls(
            kind=intent.kind,
            category=intent.category,
            location=intent.location,
            keywords=intent.keywords,
            confidence=intent.confidence,
        )


class ChatRequestBody(BaseModel):
    """Request body for the /chat endpoint."""

    message: str
    intent: Optional[IntentModel] = None

    @field_validator("message")
    @classmethod
    def validate_message(cls, v: str) -> str:
        return _require_text(v, "message")


class ChatResponse(BaseModel):
    reply: str


class NewsItem(BaseModel):
    title: str
    link: str


class HeadlineItem(BaseModel):
    title: str
    url: str


class HeadlinesResponse(BaseModel):
    headlines: list[HeadlineItem]


class SummaryRequest(BaseModel):
    """Request body for the /generate-summary endpoint."""

    headline: str
    description: Optional[str] = None

    @field_validator("headline")
    @classmethod
    def validate_headline(cls, v: str) -> str:
        return _require_text(v, "headline")


class SummaryResponse(BaseModel):
    summary: str
    origin: str


class MessageRequest(BaseModel):
    message: str

    @field_validator("message")
    @classmethod
    def validate_message(cls, v: str) -> str:
        return _require_text(v, "message")


class ReplyRequest(BaseModel):
    message: str
    context: str = ""

    @field_validator("message")
    @classmethod
    def validate_message(cls, v: str) -> str:
        return _require_text(v, "message")


class QueryRequest(BaseModel):
    query: str

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        return _require_text(v, "query")


class QueryResponse(BaseModel):
    query: str


class ContentRequest(BaseModel):
    content: str

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        return _require_text(v, "content")


class TextRequest(BaseModel):
    text: str

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        return _require_text(v, "text")


class SentimentResponse(BaseModel):
    sentiment: str
    confidence: float
    explanation: str


class TopicsResponse(BaseModel):
    topics: list[str]


class FollowUpRequest(BaseModel):
    headline: str
    summary: str = ""

    @field_validator("headline")
    @classmethod
    def validate_headline(cls, v: str) -> str:
        return _require_text(v, "headline")


class FollowUpResponse(BaseModel):
    questions: list[str]


class VoiceInfo(BaseModel):
    """Voice info for the voice selector."""

    id: str
    name: str
    description: str


class VoicesResponse(BaseModel):
    voices: list[VoiceInfo]


class PodcastRequest(BaseModel):
    """Request body for the /api/podcast/generate endpoint."""

    voiceStyle: str
    category: str = "general"
    location: str = "IN"
    style: str = "professional"

    @field_validator("voiceStyle")
    @classmethod
    def validate_voice(cls, v: str) -> str:
        return _require_text(v, "voiceStyle")


class ArticleInfo(BaseModel):
    title: str
    link: str
    source: Optional[str] = None


class PodcastResponse(BaseModel):
    """Response body for a completed podcast."""

    filename: str
    script: str
    articles: list[ArticleInfo]
    streamUrl: str
    downloadUrl: str
    progress: float
    stage: str


class PodcastDetails(BaseModel):
    filename: str
    sizeBytes: int
    createdAt: str
    streamUrl: str
    downloadUrl: str
