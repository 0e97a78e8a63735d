import json

import httpx
import pytest
from pydantic import ValidationError

from newsdesk.services.remote import NewsApiClient, NewsApiError
from newsdesk.settings import Settings

ARTICLE = {
    "source": {"id": None, "name": "Reuters"},
    "author": None,
    "title": "Markets rally",
    "description": None,
    "url": "https://www.reuters.com/markets/rally",
    "urlToImage": None,
    "publishedAt": "2024-03-01T10:00:00Z",
    "content": None,
}


def _client(handler, tmp_path) -> tuple[httpx.AsyncClient, NewsApiClient]:
    settings = Settings(data_dir=tmp_path, api_key="secret", api_base_url="https://news.test/v2/")
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return http, NewsApiClient(client=http, settings=settings)


@pytest.mark.asyncio
async def test_top_headlines_sends_key_and_paging(tmp_path) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"status": "ok", "totalResults": 1, "articles": [ARTICLE]})

    http, client = _client(handler, tmp_path)
    async with http:
        response = await client.top_headlines("gb", 2)

    assert response.articles[0].title == "Markets rally"
    request = seen[0]
    assert request.url.path == "/v2/top-headlines"
    assert request.headers["X-Api-Key"] == "secret"
    assert request.url.params["country"] == "gb"
    assert request.url.params["page"] == "2"
    assert request.url.params["pageSize"] == "20"


@pytest.mark.asyncio
async def test_category_and_search_query_shapes(tmp_path) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"status": "ok", "totalResults": 0, "articles": []})

    http, client = _client(handler, tmp_path)
    async with http:
        await client.headlines_by_category("science", 1)
        await client.search("mars rover", 3)

    category, search = seen
    assert category.url.path == "/v2/top-headlines"
    assert category.url.params["category"] == "science"
    assert category.url.params["country"] == "us"
    assert search.url.path == "/v2/everything"
    assert search.url.params["q"] == "mars rover"
    assert search.url.params["sortBy"] == "publishedAt"
    assert search.url.params["language"] == "en"
    assert search.url.params["page"] == "3"


@pytest.mark.asyncio
async def test_api_error_payload_raises_news_api_error(tmp_path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            401,
            json={"status": "error", "code": "apiKeyInvalid", "message": "Your API key is invalid."},
        )

    http, client = _client(handler, tmp_path)
    async with http:
        with pytest.raises(NewsApiError) as excinfo:
            await client.top_headlines("us", 1)

    assert excinfo.value.code == "apiKeyInvalid"
    assert str(excinfo.value) == "Your API key is invalid."


@pytest.mark.asyncio
async def test_server_error_without_json_raises_http_error(tmp_path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="upstream unavailable")

    http, client = _client(handler, tmp_path)
    async with http:
        with pytest.raises(httpx.HTTPStatusError):
            await client.search("anything", 1)


@pytest.mark.asyncio
async def test_malformed_bodies_raise_value_errors(tmp_path) -> None:
    bodies = iter([b"{not json", json.dumps({"articles": "nope"}).encode()])

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=next(bodies), headers={"content-type": "application/json"})

    http, client = _client(handler, tmp_path)
    async with http:
        with pytest.raises(ValueError):
            await client.top_headlines("us", 1)
        with pytest.raises(ValidationError):
            await client.top_headlines("us", 1)
