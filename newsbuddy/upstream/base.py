"""Shared HTTP plumbing for JSON upstream APIs."""

import logging
from typing import Any, Optional

import httpx

from ..config.settings import Settings
from .errors import UpstreamError, UpstreamErrorKind, classify_status, classify_transport_error

logger = logging.getLogger(__name__)


class UpstreamClient:
    """
    Generic caller of one external HTTP API.

    Subclasses set ``source`` and implement the provider-specific calls on
    top of ``call``. No retries are performed here; retry policy belongs to
    the caller.
    """

    source: str = "upstream"

    def __init__(
        self,
        settings: Settings,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            settings: Injected configuration (credentials, endpoints)
            timeout: Per-call timeout in seconds (default: settings.upstream_timeout_seconds)
            transport: Optional httpx transport, used to substitute a fake upstream
        """
        self.settings = settings
        self.timeout = timeout if timeout is not None else settings.upstream_timeout_seconds
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport,
            follow_redirects=True,
        )

    def _require_key(self, key: str, env_name: str) -> str:
        """Return the credential or fail with a classified auth error."""
        if not key:
            raise UpstreamError(
                UpstreamErrorKind.AUTH,
                self.source,
                f"{env_name} is not configured",
            )
        return key

    async def call(
        self,
        endpoint: str,
        payload: Optional[dict] = None,
        *,
        method: str = "GET",
        headers: Optional[dict] = None,
    ) -> Any:
        """
        Call a JSON endpoint and return the parsed body.

        GET payloads are sent as query parameters, anything else as a JSON body.

        Raises:
            UpstreamError: classified failure (timeout, auth, quota, malformed, network)
        """
        response = await self._send(endpoint, payload, method=method, headers=headers)
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                UpstreamErrorKind.MALFORMED,
                self.source,
                f"Response from {self.source} was not valid JSON",
                status_code=response.status_code,
            ) from e

    async def call_bytes(
        self,
        endpoint: str,
        payload: Optional[dict] = None,
        *,
        method: str = "POST",
        headers: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> bytes:
        """Call an endpoint that answers with a binary body (e.g. audio)."""
        response = await self._send(endpoint, payload, method=method, headers=headers, params=params)
        if not response.content:
            raise UpstreamError(
                UpstreamErrorKind.MALFORMED,
                self.source,
                f"Empty response body from {self.source}",
                status_code=response.status_code,
            )
        return response.content

    async def _send(
        self,
        endpoint: str,
        payload: Optional[dict],
        *,
        method: str,
        headers: Optional[dict],
        params: Optional[dict] = None,
    ) -> httpx.Response:
        if method.upper() == "GET":
            request_kwargs = {"params": payload}
        else:
            request_kwargs = {"json": payload, "params": params}

        try:
            async with self._client() as client:
                response = await client.request(method, endpoint, headers=headers, **request_kwargs)
        except httpx.HTTPError as e:
            kind = classify_transport_error(e)
            logger.warning("[UPSTREAM] %s %s failed (%s): %s", self.source, method, kind.value, e)
            raise UpstreamError(kind, self.source, f"{self.source} request failed: {kind.value}") from e

        if response.is_error:
            kind = self.classify_response(response)
            logger.warning(
                "[UPSTREAM] %s returned HTTP %d (%s)",
                self.source,
                response.status_code,
                kind.value,
            )
            raise UpstreamError(
                kind,
                self.source,
                f"{self.source} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return response

    def classify_response(self, response: httpx.Response) -> UpstreamErrorKind:
        """Classify an error response. Providers override to read their error bodies."""
        return classify_status(response.status_code)
