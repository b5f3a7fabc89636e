"""Language model client using LiteLLM.

Wraps ``litellm.acompletion`` so the rest of the app talks to Gemini (or any
other LiteLLM-supported model) through one classified-error boundary.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Optional

import litellm
from litellm.exceptions import (
    AuthenticationError,
    PermissionDeniedError,
    RateLimitError,
    Timeout,
)

from ..config.settings import Settings
from .errors import UpstreamError, UpstreamErrorKind

# Suppress verbose LiteLLM logging
litellm.set_verbose = False
logging.getLogger("LiteLLM").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationConfig:
    """Sampling options forwarded to the model. ``None`` means provider default."""

    temperature: Optional[float] = None
    max_output_tokens: Optional[int] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None

    def to_kwargs(self) -> dict:
        kwargs: dict[str, Any] = {}
        if self.temperature is not None:
            kwargs["temperature"] = self.temperature
        if self.max_output_tokens is not None:
            kwargs["max_tokens"] = self.max_output_tokens
        if self.top_p is not None:
            kwargs["top_p"] = self.top_p
        if self.top_k is not None:
            kwargs["top_k"] = self.top_k
        return kwargs


def classify_model_exception(exc: Exception) -> UpstreamErrorKind:
    """Map a LiteLLM (or transport) exception to an error kind."""
    # Timeout subclasses APIConnectionError, so it is checked first
    if isinstance(exc, (Timeout, asyncio.TimeoutError, TimeoutError)):
        return UpstreamErrorKind.TIMEOUT
    if isinstance(exc, (AuthenticationError, PermissionDeniedError)):
        return UpstreamErrorKind.AUTH
    if isinstance(exc, RateLimitError):
        return UpstreamErrorKind.QUOTA
    return UpstreamErrorKind.NETWORK


class LanguageModelClient:
    """
    Calls the generative-language upstream.

    The API key comes from the injected settings, never from process globals,
    so tests can construct clients with fake credentials.
    """

    source = "gemini"

    def __init__(
        self,
        settings: Settings,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the client.

        Args:
            settings: Injected configuration
            model: LiteLLM model identifier (default: settings.language_model)
            timeout: Per-call timeout in seconds
        """
        self.settings = settings
        self.model = model or settings.language_model
        self.timeout = timeout if timeout is not None else settings.upstream_timeout_seconds

    async def generate(self, prompt: str, config: Optional[GenerationConfig] = None) -> str:
        """
        Send a single-prompt request and return the generated text.

        Returns an empty string when the model answered without text.

        Raises:
            UpstreamError: classified failure
        """
        if not self.settings.gemini_api_key:
            raise UpstreamError(UpstreamErrorKind.AUTH, self.source, "GEMINI_API_KEY is not configured")

        kwargs = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "api_key": self.settings.gemini_api_key,
            "timeout": self.timeout,
        }
        kwargs.update((config or GenerationConfig()).to_kwargs())

        try:
            response = await litellm.acompletion(**kwargs)
        except Exception as e:
            kind = classify_model_exception(e)
            logger.warning("[LLM] %s call failed (%s): %s", self.model, kind.value, e)
            raise UpstreamError(kind, self.source, f"Language model call failed: {kind.value}") from e

        try:
            text = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            raise UpstreamError(
                UpstreamErrorKind.MALFORMED,
                self.source,
                "Language model response had no choices",
            ) from e

        return (text or "").strip()
