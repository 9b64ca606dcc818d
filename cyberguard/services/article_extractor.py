from __future__ import annotations

import logging
from typing import Any

import httpx
from langchain_community.document_transformers import Html2TextTransformer
from langchain_core.documents import Document
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from cyberguard.core.constants import AppSettings
from cyberguard.core.errors import ExtractionFailure

logger = logging.getLogger(__name__)


class ArticleExtractor:
    """
    Turns a URL into plain article text.

    Features:
    - Retry logic on connection failures
    - HTML to text conversion with ``Html2TextTransformer``
    - Plain-text pages passed through as-is
    - Never raises from ``extract``: any failure yields an empty string
    - Async context manager support
    """

    HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")
    PLAIN_CONTENT_TYPES = ("text/plain",)

    def __init__(
        self,
        timeout: float = AppSettings.EXTRACTOR_TIMEOUT,
        user_agent: str = AppSettings.EXTRACTOR_USER_AGENT,
    ):
        self.timeout = httpx.Timeout(timeout)
        self._http_client = httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers={"User-Agent": user_agent},
        )
        self._transformer = Html2TextTransformer(ignore_links=True, ignore_images=True)

    async def extract(self, url: str) -> str:
        """
        Fetch ``url`` and return its readable text.

        Failures are logged and reported as empty content, so callers
        cannot tell an unreachable page from an empty one.
        """
        try:
            return await self._fetch(url)
        except (ExtractionFailure, httpx.HTTPError) as e:
            logger.warning("Article extraction failed for %s: %s", url, e)
            return ""
        except Exception:
            logger.exception("Unexpected error extracting article from %s", url)
            return ""

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type((httpx.ConnectError, httpx.ReadTimeout)),
        reraise=True
    )
    async def _fetch(self, url: str) -> str:
        try:
            response = await self._http_client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ExtractionFailure(
                f"Failed to fetch article: {e.response.status_code}") from e

        content_type = response.headers.get("content-type", "")
        if any(t in content_type for t in self.PLAIN_CONTENT_TYPES):
            return response.text.strip()
        if content_type and not any(t in content_type for t in self.HTML_CONTENT_TYPES):
            raise ExtractionFailure(f"Unsupported content type: {content_type}")
        return self._to_text(response.text)

    def _to_text(self, html: str) -> str:
        if not html.strip():
            return ""
        docs = self._transformer.transform_documents([Document(page_content=html)])
        return docs[0].page_content.strip() if docs else ""

    async def aclose(self) -> None:
        """Close underlying HTTP client"""
        await self._http_client.aclose()

    async def __aenter__(self) -> "ArticleExtractor":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()
