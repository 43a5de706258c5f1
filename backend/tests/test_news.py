import httpx
import pytest
from httpx import AsyncClient

from sportsapp.api.v1.endpoints.news import get_news_service
from sportsapp.core.config import settings
from sportsapp.main import app
from sportsapp.services.news_service import NewsService


class FakeCache:
    """In-memory stand-in for the Redis cache"""

    def __init__(self):
        self.store = {}
        self.expiries = {}

    async def cache_get(self, key):
        return self.store.get(key)

    async def cache_set(self, key, value, expire=3600):
        self.store[key] = value
        self.expiries[key] = expire
        return True


def article(title, description="Highlights from the match", published_at="2026-10-01T10:00:00Z", **overrides):
    data = {
        "title": title,
        "description": description,
        "url": f"https://news.example.com/{abs(hash(title))}",
        "urlToImage": "https://news.example.com/image.jpg",
        "publishedAt": published_at,
        "source": {"id": None, "name": "Example Sports"},
    }
    data.update(overrides)
    return data


def news_service(handler, cache=None) -> NewsService:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return NewsService(api_key="test-news-key", cache=cache or FakeCache(), client=client)


@pytest.fixture
def use_news_service():
    def _use(service: NewsService):
        app.dependency_overrides[get_news_service] = lambda: service
        return service
    return _use


@pytest.mark.asyncio
async def test_news_without_api_key(client: AsyncClient):
    response = await client.get("/api/v1/sports-news")

    assert response.status_code == 503
    assert response.json()["detail"] == "News API key not configured"


@pytest.mark.asyncio
async def test_news_is_filtered_and_ranked(client: AsyncClient, use_news_service):
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        articles = [
            article("Premier League weekend round-up", published_at="2026-10-02T10:00:00Z"),
            article("India win the cricket final", description="Indian team lifts the trophy"),
            article("India win the cricket final", description="duplicate from another query"),
            article("Stock markets rally", description="Shares closed higher"),
            article("[Removed]", description="[Removed]"),
            article("Hockey semifinal tonight", urlToImage=None),
        ]
        return httpx.Response(200, json={"status": "ok", "articles": articles})

    use_news_service(news_service(handler))

    response = await client.get("/api/v1/sports-news")

    assert response.status_code == 200
    data = response.json()
    titles = [item["title"] for item in data["articles"]]
    assert titles == ["India win the cricket final", "Premier League weekend round-up"]
    assert data["page"] == 1
    assert data["total_results"] == 2
    assert data["has_more"] is False

    top = data["articles"][0]
    assert top["title_hi"] == "भारत जीत the क्रिकेट फाइनल"
    assert top["source"] == "Example Sports"
    assert top["description"] == "Indian team lifts the trophy"

    assert len(requests) == 5
    assert {request.url.path for request in requests} == {"/v2/everything", "/v2/top-headlines"}
    assert all(request.url.params["apiKey"] == "test-news-key" for request in requests)


@pytest.mark.asyncio
async def test_failed_queries_are_skipped(client: AsyncClient, use_news_service):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("top-headlines"):
            return httpx.Response(429, json={"status": "error", "code": "rateLimited"})
        return httpx.Response(200, json={"articles": [article("Kabaddi league opener")]})

    use_news_service(news_service(handler))

    response = await client.get("/api/v1/sports-news")

    assert response.status_code == 200
    assert [item["title"] for item in response.json()["articles"]] == ["Kabaddi league opener"]


@pytest.mark.asyncio
async def test_full_page_has_more(client: AsyncClient, use_news_service):
    def handler(request: httpx.Request) -> httpx.Response:
        articles = [article(f"Tennis match report {number}") for number in range(settings.NEWS_PAGE_SIZE + 3)]
        return httpx.Response(200, json={"articles": articles})

    use_news_service(news_service(handler))

    response = await client.get("/api/v1/sports-news", params={"page": 2})

    data = response.json()
    assert len(data["articles"]) == settings.NEWS_PAGE_SIZE
    assert data["has_more"] is True
    assert data["page"] == 2


@pytest.mark.asyncio
async def test_pages_are_cached(client: AsyncClient, use_news_service):
    calls = []
    cache = FakeCache()

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        return httpx.Response(200, json={"articles": [article("Chess olympiad gold for India")]})

    use_news_service(news_service(handler, cache=cache))

    first = await client.get("/api/v1/sports-news")
    second = await client.get("/api/v1/sports-news")

    assert first.json() == second.json()
    assert len(calls) == 5
    assert cache.expiries[NewsService.cache_key(1)] == settings.NEWS_CACHE_TTL_SECONDS


@pytest.mark.asyncio
async def test_invalid_page(client: AsyncClient):
    response = await client.get("/api/v1/sports-news", params={"page": 0})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_news_outage_is_bad_gateway_and_not_cached(client: AsyncClient, use_news_service):
    cache = FakeCache()

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"status": "error"})

    use_news_service(news_service(handler, cache))

    response = await client.get("/api/v1/sports-news")

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "EXTERNAL_SERVICE_ERROR"
    assert response.json()["error"]["details"] == {"service": "NewsAPI"}
    assert cache.store == {}
