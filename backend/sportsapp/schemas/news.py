from pydantic import BaseModel
from typing import Optional, List


class NewsArticle(BaseModel):
    title: str
    description: str
    url: Optional[str] = None
    url_to_image: str
    published_at: str
    source: Optional[str] = None
    title_hi: str
    description_hi: str
    relevance_score: int = 0


class NewsResponse(BaseModel):
    articles: List[NewsArticle]
    total_results: int
    page: int
    has_more: bool
