"""
Sports News Service

Aggregates sports headlines from NewsAPI. Five queries are issued
concurrently (Indian sports first, then global coverage); the merged
results are filtered to sports content, given a rough Hindi rendering of
common sports terms and ranked with Indian content first.
"""

import asyncio
import re
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

import httpx

from sportsapp.core.config import settings
from sportsapp.core.exceptions import ExternalServiceError, ServiceNotConfiguredError
from sportsapp.core.logging_config import logger
from sportsapp.core.redis_client import RedisClient, redis_client
from sportsapp.schemas.news import NewsArticle, NewsResponse


REMOVED_MARKER = "[Removed]"
MAX_DAYS_BACK = 30

SPORTS_KEYWORDS = [
    "cricket", "football", "soccer", "hockey", "badminton", "kabaddi", "wrestling", "boxing",
    "tennis", "athletics", "track", "field", "swimming", "basketball", "volleyball", "golf",
    "chess", "formula 1", "f1", "nfl", "nba", "mlb", "premier league", "la liga", "champions league",
    "ipl", "isl", "pkl", "bcci", "aiff", "sai", "olympics", "commonwealth", "asian games", "fifa",
    "match", "tournament", "championship", "league", "team", "player", "coach", "stadium",
    "sports", "game", "score", "win", "victory", "defeat", "final", "semifinal", "trophy",
    "world cup", "super bowl", "playoff", "qualifier", "medal", "record", "mvp", "captain",
]
INDIAN_KEYWORDS = ["india", "indian", "cricket", "chess", "kabaddi", "ipl", "bcci", "pkl"]
MAJOR_SPORTS_KEYWORDS = ["football", "soccer", "tennis", "basketball", "olympics", "fifa", "nfl", "nba"]

# Applied in order, so single words win over phrases that contain them
HINDI_TERMS = {
    "cricket": "क्रिकेट",
    "football": "फुटबॉल",
    "soccer": "फुटबॉल",
    "basketball": "बास्केटबॉल",
    "tennis": "टेनिस",
    "badminton": "बैडमिंटन",
    "hockey": "हॉकी",
    "kabaddi": "कबड्डी",
    "athletics": "एथलेटिक्स",
    "wrestling": "कुश्ती",
    "boxing": "बॉक्सिंग",
    "chess": "शतरंज",
    "team": "टीम",
    "teams": "टीमों",
    "player": "खिलाड़ी",
    "players": "खिलाड़ियों",
    "match": "मैच",
    "matches": "मैचों",
    "game": "खेल",
    "games": "खेलों",
    "tournament": "टूर्नामेंट",
    "championship": "चैंपियनशिप",
    "series": "श्रृंखला",
    "season": "सीज़न",
    "league": "लीग",
    "indian": "भारतीय",
    "india": "भारत",
    "world": "विश्व",
    "international": "अंतर्राष्ट्रीय",
    "national": "राष्ट्रीय",
    "victory": "जीत",
    "win": "जीत",
    "wins": "जीत",
    "won": "जीता",
    "defeat": "हार",
    "lost": "हारा",
    "final": "फाइनल",
    "semi-final": "सेमी-फाइनल",
    "training": "प्रशिक्षण",
    "coach": "कोच",
    "captain": "कप्तान",
    "debut": "पदार्पण",
    "record": "रिकॉर्ड",
    "score": "स्कोर",
    "performance": "प्रदर्शन",
    "medal": "पदक",
    "gold": "स्वर्ण",
    "silver": "रजत",
    "bronze": "कांस्य",
    "champion": "चैंपियन",
    "competition": "प्रतियोगिता",
    "stadium": "स्टेडियम",
    "ground": "मैदान",
    "field": "मैदान",
    "olympics": "ओलंपिक",
    "commonwealth": "राष्ट्रमंडल",
    "asian games": "एशियाई खेल",
    "world cup": "विश्व कप",
    "ipl": "आईपीएल",
    "isl": "आईएसएल",
    "pro kabaddi": "प्रो कबड्डी",
    "pv sindhu": "पीवी सिंधु",
    "virat kohli": "विराट कोहली",
    "ms dhoni": "एमएस धोनी",
    "rohit sharma": "रोहित शर्मा",
    "mary kom": "मैरी कॉम",
    "sania mirza": "सानिया मिर्जा",
    "abhinav bindra": "अभिनव बिंद्रा",
    "bcci": "बीसीसीआई",
    "aiff": "एआईएफएफ",
    "hockey india": "हॉकी इंडिया",
    "badminton association": "बैडमिंटन संघ",
    "wrestling federation": "कुश्ती महासंघ",
}
_HINDI_PATTERNS = [
    (re.compile(rf"\b{re.escape(english)}\b", re.IGNORECASE), hindi)
    for english, hindi in HINDI_TERMS.items()
]


def translate_to_hindi(text: str) -> str:
    """Substitute known sports terms with their Hindi equivalents"""
    if not text:
        return text
    for pattern, hindi in _HINDI_PATTERNS:
        text = pattern.sub(hindi, text)
    return text


def _count_matches(keywords: List[str], title: str, description: str) -> int:
    return sum(1 for keyword in keywords if keyword in title or keyword in description)


def relevance_score(article: Dict[str, Any]) -> int:
    title = (article.get("title") or "").lower()
    description = (article.get("description") or "").lower()
    return (
        _count_matches(INDIAN_KEYWORDS, title, description) * 3
        + _count_matches(MAJOR_SPORTS_KEYWORDS, title, description) * 2
        + _count_matches(SPORTS_KEYWORDS, title, description)
    )


def is_displayable(article: Dict[str, Any]) -> bool:
    title = article.get("title")
    description = article.get("description")
    if not title or not description or not article.get("urlToImage"):
        return False
    if title == REMOVED_MARKER or description == REMOVED_MARKER:
        return False
    return _count_matches(SPORTS_KEYWORDS, title.lower(), description.lower()) > 0


def days_back_for_page(page: int) -> int:
    return 1 if page == 1 else min(page * 2, MAX_DAYS_BACK)


def build_queries(page: int, from_date: str) -> List[tuple]:
    """(endpoint, params) pairs for one page of news"""
    return [
        ("everything", {
            "q": "(India OR Indian) AND (cricket OR chess OR kabaddi OR hockey OR wrestling OR badminton OR athletics)",
            "language": "en", "sortBy": "publishedAt", "from": from_date, "page": page, "pageSize": 6,
        }),
        ("top-headlines", {
            "category": "sports", "language": "en", "page": page, "pageSize": 8,
        }),
        ("top-headlines", {
            "country": "in", "category": "sports", "page": page, "pageSize": 5,
        }),
        ("everything", {
            "q": "football OR soccer OR basketball OR tennis OR golf OR Olympics OR championship OR tournament",
            "language": "en", "sortBy": "popularity", "from": from_date,
            "page": (page + 1) // 2, "pageSize": 8,
        }),
        ("everything", {
            "q": 'IPL OR ISL OR PKL OR BCCI OR "Indian Premier League" OR "Pro Kabaddi" OR "Indian chess"',
            "language": "en", "sortBy": "publishedAt", "from": from_date, "page": page, "pageSize": 5,
        }),
    ]


def rank_articles(raw_articles: List[Dict[str, Any]], page_size: int) -> List[NewsArticle]:
    """Deduplicate by title, filter, translate, and order by relevance then recency"""
    seen_titles = set()
    unique = []
    for article in raw_articles:
        title = article.get("title")
        if title in seen_titles:
            continue
        seen_titles.add(title)
        unique.append(article)

    ranked = [
        NewsArticle(
            title=article["title"],
            description=article["description"],
            url=article.get("url"),
            url_to_image=article["urlToImage"],
            published_at=article.get("publishedAt") or "",
            source=(article.get("source") or {}).get("name"),
            title_hi=translate_to_hindi(article["title"]),
            description_hi=translate_to_hindi(article["description"]),
            relevance_score=relevance_score(article),
        )
        for article in unique
        if is_displayable(article)
    ]

    # Two stable sorts: newest first, then by score
    ranked.sort(key=lambda a: a.published_at, reverse=True)
    ranked.sort(key=lambda a: a.relevance_score, reverse=True)
    return ranked[:page_size]


class NewsService:
    """Fetches and ranks sports news, caching each page in Redis when available"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        cache: Optional[RedisClient] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.NEWS_API_KEY
        self.cache = cache or redis_client
        self.client = client

    @staticmethod
    def cache_key(page: int) -> str:
        return f"sports_news:page:{page}"

    async def _fetch(self, client: httpx.AsyncClient, endpoint: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        response = await client.get(
            f"{settings.NEWS_API_BASE_URL}/{endpoint}",
            params={**params, "apiKey": self.api_key},
            headers={"User-Agent": f"{settings.APP_NAME}/1.0"},
        )
        response.raise_for_status()
        return response.json().get("articles") or []

    async def _fetch_all(self, page: int) -> List[Dict[str, Any]]:
        from_date = (datetime.utcnow() - timedelta(days=days_back_for_page(page))).strftime("%Y-%m-%d")
        queries = build_queries(page, from_date)

        if self.client is not None:
            results = await asyncio.gather(
                *(self._fetch(self.client, endpoint, params) for endpoint, params in queries),
                return_exceptions=True,
            )
        else:
            async with httpx.AsyncClient(timeout=settings.NEWS_REQUEST_TIMEOUT) as client:
                results = await asyncio.gather(
                    *(self._fetch(client, endpoint, params) for endpoint, params in queries),
                    return_exceptions=True,
                )

        articles: List[Dict[str, Any]] = []
        for (endpoint, _), result in zip(queries, results):
            if isinstance(result, Exception):
                logger.warning(f"News query to {endpoint} failed: {result}")
                continue
            articles.extend(result)

        if all(isinstance(result, Exception) for result in results):
            raise ExternalServiceError("NewsAPI", "Sports news is temporarily unavailable")
        return articles

    async def get_sports_news(self, page: int = 1) -> NewsResponse:
        if not self.api_key:
            raise ServiceNotConfiguredError("News API key not configured")
        page = max(page, 1)

        if cached := await self.cache.cache_get(self.cache_key(page)):
            logger.debug(f"Sports news page {page} served from cache")
            return NewsResponse(**cached)

        start = datetime.utcnow()
        articles = rank_articles(await self._fetch_all(page), settings.NEWS_PAGE_SIZE)
        news = NewsResponse(
            articles=articles,
            total_results=len(articles),
            page=page,
            has_more=len(articles) == settings.NEWS_PAGE_SIZE,
        )
        logger.log_performance(
            "sports_news_fetch",
            (datetime.utcnow() - start).total_seconds() * 1000,
            page=page,
            articles=len(articles),
        )

        await self.cache.cache_set(self.cache_key(page), news.model_dump(), expire=settings.NEWS_CACHE_TTL_SECONDS)
        return news
