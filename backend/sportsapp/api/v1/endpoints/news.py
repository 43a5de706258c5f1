from fastapi import APIRouter, Depends, Query

from sportsapp.schemas.news import NewsResponse
from sportsapp.services.news_service import NewsService


router = APIRouter()


def get_news_service() -> NewsService:
    return NewsService()


@router.get("/sports-news", response_model=NewsResponse)
async def get_sports_news(
    page: int = Query(1, ge=1),
    news: NewsService = Depends(get_news_service)
):
    """Sports headlines ranked for Indian readers, with Hindi titles"""
    return await news.get_sports_news(page)
