"""
Unit Tests for sports news filtering, scoring and translation
"""
import pytest

from sportsapp.services.news_service import (
    MAX_DAYS_BACK,
    build_queries,
    days_back_for_page,
    is_displayable,
    rank_articles,
    relevance_score,
    translate_to_hindi,
)


def raw(title, description="Match report", published_at="2026-10-01T00:00:00Z", image="https://img.example/a.jpg"):
    return {
        "title": title,
        "description": description,
        "urlToImage": image,
        "publishedAt": published_at,
        "url": "https://news.example/a",
        "source": {"name": "Wire"},
    }


class TestTranslation:

    def test_whole_words_only(self):
        assert translate_to_hindi("Cricket team wins") == "क्रिकेट टीम जीत"
        assert translate_to_hindi("Teamwork") == "Teamwork"

    def test_case_insensitive(self):
        assert translate_to_hindi("HOCKEY") == "हॉकी"

    def test_empty(self):
        assert translate_to_hindi("") == ""


class TestScoring:

    def test_weights(self):
        assert relevance_score({"title": "Chess", "description": "Chess"}) == 4

    def test_indian_content_outranks_major_sports(self):
        indian = relevance_score({"title": "Kabaddi", "description": ""})
        major = relevance_score({"title": "Tennis", "description": ""})

        assert indian == 4
        assert major == 3
        assert indian > major

    def test_missing_fields(self):
        assert relevance_score({}) == 0


class TestDisplayable:

    def test_complete_sports_article(self):
        assert is_displayable(raw("Hockey final preview")) is True

    @pytest.mark.parametrize("article", [
        raw("[Removed]", "[Removed]"),
        raw("Hockey final", image=None),
        raw("Hockey final", description=None),
        raw("Quarterly earnings beat estimates", description="Stocks rose"),
    ])
    def test_rejected(self, article):
        assert is_displayable(article) is False


class TestPaging:

    @pytest.mark.parametrize("page,days", [(1, 1), (2, 4), (10, 20), (15, MAX_DAYS_BACK), (40, MAX_DAYS_BACK)])
    def test_days_back(self, page, days):
        assert days_back_for_page(page) == days

    def test_queries_for_page(self):
        queries = build_queries(3, "2026-10-01")

        assert [endpoint for endpoint, _ in queries] == [
            "everything", "top-headlines", "top-headlines", "everything", "everything",
        ]
        assert queries[2][1]["country"] == "in"
        assert queries[3][1]["page"] == 2
        assert all(params["page"] == 3 for index, (_, params) in enumerate(queries) if index != 3)
        assert "from" not in queries[1][1]


class TestRanking:

    def test_score_then_recency(self):
        ranked = rank_articles([
            raw("Golf open round two", published_at="2026-10-03T00:00:00Z"),
            raw("Golf open round one", published_at="2026-10-01T00:00:00Z"),
            raw("India cricket squad named"),
        ], page_size=10)

        assert [item.title for item in ranked] == [
            "India cricket squad named",
            "Golf open round two",
            "Golf open round one",
        ]

    def test_duplicates_and_page_size(self):
        articles = [raw(f"Football story {number}") for number in range(5)] + [raw("Football story 0")]

        ranked = rank_articles(articles, page_size=3)

        assert len(ranked) == 3
        assert len({item.title for item in ranked}) == 3

    def test_duplicate_keeps_first_occurrence(self):
        ranked = rank_articles([
            raw("Hockey final", description="first"),
            raw("Hockey final", description="second"),
        ], page_size=10)

        assert [item.description for item in ranked] == ["first"]
