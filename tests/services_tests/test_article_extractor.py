import httpx
import pytest
from unittest.mock import Mock

from cyberguard.services.article_extractor import ArticleExtractor


@pytest.mark.asyncio
async def test_extracts_text_from_html(mock_httpx_client):
    extractor = ArticleExtractor()

    content = await extractor.extract("https://example.com/patch-tuesday")

    assert "critical remote code execution flaw" in content
    assert "<p>" not in content
    mock_httpx_client.get.assert_awaited_once_with("https://example.com/patch-tuesday")


@pytest.mark.asyncio
async def test_http_error_yields_empty_content(mock_httpx_client):
    response = mock_httpx_client.get.return_value
    response.raise_for_status.side_effect = httpx.HTTPStatusError(
        "Not Found", request=Mock(), response=Mock(status_code=404)
    )

    assert await ArticleExtractor().extract("https://example.com/missing") == ""


@pytest.mark.asyncio
async def test_protocol_error_yields_empty_content(mock_httpx_client):
    mock_httpx_client.get.side_effect = httpx.RemoteProtocolError("server hung up")

    assert await ArticleExtractor().extract("https://example.com/a") == ""
    assert mock_httpx_client.get.await_count == 1


@pytest.mark.asyncio
async def test_non_html_content_yields_empty_content(mock_httpx_client):
    response = mock_httpx_client.get.return_value
    response.headers = {"content-type": "application/pdf"}

    assert await ArticleExtractor().extract("https://example.com/report.pdf") == ""


@pytest.mark.asyncio
async def test_blank_page_yields_empty_content(mock_httpx_client):
    mock_httpx_client.get.return_value.text = "   "

    assert await ArticleExtractor().extract("https://example.com/blank") == ""


@pytest.mark.asyncio
async def test_context_manager_closes_client(mock_httpx_client):
    async with ArticleExtractor() as extractor:
        await extractor.extract("https://example.com/a")

    mock_httpx_client.aclose.assert_awaited_once()


@pytest.mark.asyncio
async def test_plain_text_page_is_passed_through(mock_httpx_client):
    response = mock_httpx_client.get.return_value
    response.headers = {"content-type": "text/plain; charset=utf-8"}
    response.text = "  CVE-2024-6387: regreSSHion, a signal handler race in OpenSSH.\n"

    content = await ArticleExtractor().extract("https://example.com/advisory.txt")

    assert content == "CVE-2024-6387: regreSSHion, a signal handler race in OpenSSH."
