from __future__ import annotations

import asyncio
import json
from typing import Any, Optional

import aiohttp
import pytest

from adapters.discord_editor import DiscordMessageEditor
from adapters.discord_search import DiscordMessageSource
from adapters.mediawiki import MediaWikiArticleSource
from core.errors import ContentSourceError, EditError, TransportError
from core.models import RawMessage


class DummyResponse:
    def __init__(self, status: int = 200, payload: Any = None, body: Optional[str] = None) -> None:
        self.status = status
        self._body = body if body is not None else json.dumps(payload)

    async def __aenter__(self) -> "DummyResponse":
        return self

    async def __aexit__(self, *exc_info) -> None:
        return None

    async def text(self) -> str:
        return self._body

    async def json(self, content_type: Optional[str] = "application/json") -> Any:
        return json.loads(self._body)


class DummySession:
    def __init__(self, responses: "list[DummyResponse | Exception]") -> None:
        self._responses = list(responses)
        self.calls: list[tuple[str, str, dict]] = []

    def _next(self, method: str, url: str, **kwargs) -> DummyResponse:
        self.calls.append((method, url, kwargs))
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url: str, **kwargs) -> DummyResponse:
        return self._next("GET", url, **kwargs)

    def patch(self, url: str, **kwargs) -> DummyResponse:
        return self._next("PATCH", url, **kwargs)


def test_search_requests_author_page() -> None:
    payload = {"total_results": 1, "messages": [[{"id": "100", "channel_id": "1", "content": "a"}]]}
    session = DummySession([DummyResponse(payload=payload)])
    source = DiscordMessageSource(session)

    messages = asyncio.run(source.fetch_page(42, 7, 25))

    assert messages == [RawMessage(channel_id=1, message_id=100, content="a")]
    method, url, kwargs = session.calls[0]
    assert method == "GET"
    assert url == "https://discord.com/api/v9/guilds/7/messages/search"
    assert kwargs["params"] == {"author_id": "42", "include_nsfw": "true", "offset": "25", "limit": "25"}


def test_search_sends_configured_limit() -> None:
    session = DummySession([DummyResponse(payload={"total_results": 0, "messages": []})])
    source = DiscordMessageSource(session, page_size=10)

    asyncio.run(source.fetch_page(42, 7, 0))

    assert session.calls[0][2]["params"]["limit"] == "10"


@pytest.mark.parametrize(
    "response",
    [
        DummyResponse(status=401, body='{"message": "401: Unauthorized"}'),
        DummyResponse(status=202, payload={"message": "Index not yet available"}),
        DummyResponse(status=200, body="<html>not json</html>"),
        DummyResponse(status=200, payload={"unexpected": True}),
        aiohttp.ClientConnectionError("connection reset"),
        asyncio.TimeoutError(),
    ],
)
def test_search_failures_raise_transport_error(response) -> None:
    source = DiscordMessageSource(DummySession([response]))

    with pytest.raises(TransportError):
        asyncio.run(source.fetch_page(42, 7, 0))


def test_edit_patches_message_content() -> None:
    session = DummySession([DummyResponse(payload={"id": "100"})])
    editor = DiscordMessageEditor(session)

    asyncio.run(editor.edit_content(1, 100, "# Title\n\n> body\n"))

    method, url, kwargs = session.calls[0]
    assert method == "PATCH"
    assert url == "https://discord.com/api/v9/channels/1/messages/100"
    assert kwargs["json"] == {"content": "# Title\n\n> body\n"}


@pytest.mark.parametrize(
    "response",
    [
        DummyResponse(status=403, body='{"message": "Missing Access", "code": 50001}'),
        aiohttp.ClientConnectionError("connection reset"),
    ],
)
def test_edit_failures_raise_edit_error(response) -> None:
    editor = DiscordMessageEditor(DummySession([response]))

    with pytest.raises(EditError) as excinfo:
        asyncio.run(editor.edit_content(1, 100, "x"))
    assert excinfo.value.channel_id == 1
    assert excinfo.value.message_id == 100


API_URL = "https://en.uncyclopedia.co/w/api.php"


def test_article_title_then_extract() -> None:
    session = DummySession(
        [
            DummyResponse(payload={"query": {"random": [{"id": 9, "ns": 0, "title": "Cheese"}]}}),
            DummyResponse(payload={"query": {"pages": [{"title": "Cheese", "extract": "Cheese is food."}]}}),
        ]
    )
    articles = MediaWikiArticleSource(session, API_URL, excerpt_sentences=10)

    title = asyncio.run(articles.random_title())
    extract = asyncio.run(articles.fetch_extract(title))

    assert (title, extract) == ("Cheese", "Cheese is food.")
    random_params = session.calls[0][2]["params"]
    assert random_params["list"] == "random"
    assert random_params["rnnamespace"] == "0"
    extract_params = session.calls[1][2]["params"]
    assert extract_params["titles"] == "Cheese"
    assert extract_params["exsentences"] == "10"
    assert extract_params["explaintext"] == "1"


def test_no_random_articles_is_content_error() -> None:
    session = DummySession([DummyResponse(payload={"query": {"random": []}})])
    articles = MediaWikiArticleSource(session, API_URL)

    with pytest.raises(ContentSourceError):
        asyncio.run(articles.random_title())


def test_missing_article_is_content_error() -> None:
    session = DummySession([DummyResponse(payload={"query": {"pages": [{"title": "Ghost", "missing": True}]}})])
    articles = MediaWikiArticleSource(session, API_URL)

    with pytest.raises(ContentSourceError):
        asyncio.run(articles.fetch_extract("Ghost"))


def test_article_http_error_is_content_error() -> None:
    articles = MediaWikiArticleSource(DummySession([DummyResponse(status=503, body="down")]), API_URL)

    with pytest.raises(ContentSourceError):
        asyncio.run(articles.random_title())
