"""Text-to-speech upstream (ElevenLabs)."""

import logging

import httpx

from .base import UpstreamClient
from .errors import UpstreamErrorKind, classify_status

logger = logging.getLogger(__name__)

# ``detail.status`` values ElevenLabs reports for credential problems
AUTH_FAILURE_STATUSES = {"invalid_api_key", "missing_api_key", "unauthorized", "api_key_expired"}
QUOTA_STATUSES = {"quota_exceeded", "too_many_concurrent_requests", "system_busy"}


class SpeechClient(UpstreamClient):
    """Synthesizes speech one chunk of text at a time."""

    source = "elevenlabs"

    def __init__(self, settings, timeout=None, transport=None):
        super().__init__(
            settings,
            timeout=timeout if timeout is not None else settings.speech_timeout_seconds,
            transport=transport,
        )

    async def synthesize(self, text: str, voice_id: str) -> bytes:
        """
        Convert text to MP3 audio.

        Args:
            text: Text no longer than the provider's single-call limit
            voice_id: Provider voice identifier

        Returns:
            Encoded audio bytes

        Raises:
            UpstreamError: classified failure
        """
        api_key = self._require_key(self.settings.elevenlabs_api_key, "ELEVENLABS_API_KEY")
        logger.debug("[TTS] Synthesizing %d chars with voice %s", len(text), voice_id)
        return await self.call_bytes(
            f"{self.settings.elevenlabs_url}/text-to-speech/{voice_id}",
            {
                "text": text,
                "model_id": self.settings.speech_model,
                "voice_settings": {"stability": 0.5, "similarity_boost": 0.75},
            },
            headers={"xi-api-key": api_key, "Accept": "audio/mpeg"},
            params={"output_format": self.settings.speech_output_format},
        )

    def classify_response(self, response: httpx.Response) -> UpstreamErrorKind:
        try:
            detail = response.json().get("detail")
        except (ValueError, AttributeError):
            detail = None
        status = detail.get("status") if isinstance(detail, dict) else None
        if status in AUTH_FAILURE_STATUSES:
            return UpstreamErrorKind.AUTH
        if status in QUOTA_STATUSES:
            return UpstreamErrorKind.QUOTA
        return classify_status(response.status_code)
