"""News search upstreams: SerpAPI (search + news tab) and NewsAPI (top headlines)."""

import logging
from typing import Optional

import httpx

from ..news.models import Headline
from .base import UpstreamClient
from .errors import UpstreamError, UpstreamErrorKind, classify_status

logger = logging.getLogger(__name__)


def _error_body(response: httpx.Response) -> dict:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


class NewsSearchClient(UpstreamClient):
    """SerpAPI client. Returns raw search payloads or parsed news headlines."""

    source = "serpapi"

    async def search(
        self,
        query: str,
        location: Optional[str] = None,
        news_only: bool = False,
    ) -> dict:
        """
        Run a search and return the raw SerpAPI payload.

        Args:
            query: Search query
            location: Optional SerpAPI location (e.g. "India")
            news_only: Restrict to the news tab (``tbm=nws``)

        Raises:
            UpstreamError: classified failure
        """
        api_key = self._require_key(self.settings.serpapi_api_key, "SERPAPI_API_KEY")
        params = {"q": query, "api_key": api_key}
        if news_only:
            params["tbm"] = "nws"
        if location:
            params["location"] = location

        logger.info("[SERPAPI] Searching %r (news_only=%s, location=%s)", query, news_only, location)
        payload = await self.call(self.settings.serpapi_url, params)
        if not isinstance(payload, dict):
            raise UpstreamError(UpstreamErrorKind.MALFORMED, self.source, "Search payload was not an object")
        return payload

    async def search_headlines(
        self,
        query: str,
        location: Optional[str] = None,
        limit: int = 5,
    ) -> list[Headline]:
        """Search the news tab and return up to ``limit`` headlines in upstream order."""
        payload = await self.search(query, location=location, news_only=True)
        headlines = []
        for item in payload.get("news_results") or []:
            if not isinstance(item, dict):
                continue
            title = item.get("title")
            link = item.get("link")
            if not title or not link:
                continue
            source = item.get("source")
            if isinstance(source, dict):
                source = source.get("name")
            headlines.append(
                Headline(title=title, link=link, source=source, snippet=item.get("snippet"))
            )
            if len(headlines) >= limit:
                break
        return headlines

    def classify_response(self, response: httpx.Response) -> UpstreamErrorKind:
        message = str(_error_body(response).get("error", "")).lower()
        if "run out of searches" in message:
            return UpstreamErrorKind.QUOTA
        if "invalid api key" in message:
            return UpstreamErrorKind.AUTH
        return classify_status(response.status_code)


class HeadlinesClient(UpstreamClient):
    """NewsAPI top-headlines client, filtered by country and category."""

    source = "newsapi"

    async def top_headlines(self, category: Optional[str] = None, limit: int = 5) -> list[Headline]:
        """
        Fetch top headlines for the configured country.

        Raises:
            UpstreamError: classified failure
        """
        api_key = self._require_key(self.settings.newsapi_api_key, "NEWSAPI_API_KEY")
        params = {"country": self.settings.headlines_country, "pageSize": limit}
        if category:
            params["category"] = category

        payload = await self.call(
            self.settings.newsapi_url,
            params,
            headers={"X-Api-Key": api_key},
        )
        if not isinstance(payload, dict) or not isinstance(payload.get("articles", []), list):
            raise UpstreamError(UpstreamErrorKind.MALFORMED, self.source, "Unexpected headlines payload")

        headlines = []
        for item in payload.get("articles", []):
            title = item.get("title")
            url = item.get("url")
            if not title or not url:
                continue
            headlines.append(
                Headline(
                    title=title,
                    link=url,
                    source=(item.get("source") or {}).get("name"),
                    snippet=item.get("description"),
                )
            )
        logger.info("[NEWSAPI] Fetched %d headlines (category=%s)", len(headlines), category)
        return headlines[:limit]

    def classify_response(self, response: httpx.Response) -> UpstreamErrorKind:
        code = _error_body(response).get("code", "")
        if code in ("apiKeyInvalid", "apiKeyMissing", "apiKeyDisabled", "apiKeyExhausted"):
            return UpstreamErrorKind.AUTH
        if code == "rateLimited":
            return UpstreamErrorKind.QUOTA
        return classify_status(response.status_code)
