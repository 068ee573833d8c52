import asyncio
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from tension_dashboard.sources.common import SourceUnavailableError, extract_domain_from_url
from tension_dashboard.sources.gnews import GNewsFetcher, parse_article, parse_articles

FETCHED_AT = datetime(2024, 1, 3, 12, 0, tzinfo=timezone.utc)

ENTRY = {
    "title": "Troops  attack near\nborder",
    "description": "Officials report shelling overnight",
    "content": "Full text...",
    "url": "https://www.dawn.com/news/1",
    "image": "https://www.dawn.com/img/1.jpg",
    "publishedAt": "2024-01-02T20:30:00+05:00",
    "source": {"name": "Dawn", "url": "https://www.dawn.com"},
}


def test_parse_article_fields():
    article = parse_article(ENTRY, FETCHED_AT)
    assert article.title == "Troops attack near border"
    assert article.description == "Officials report shelling overnight"
    assert article.source == "Dawn"
    assert article.image == ENTRY["image"]
    assert article.published_at == datetime(2024, 1, 2, 15, 30, tzinfo=timezone.utc)
    assert len(article.id) == 16


def test_article_id_is_stable():
    assert parse_article(ENTRY, FETCHED_AT).id == parse_article(dict(ENTRY), FETCHED_AT).id


def test_missing_published_date_uses_fetch_time():
    entry = {k: v for k, v in ENTRY.items() if k != "publishedAt"}
    assert parse_article(entry, FETCHED_AT).published_at == FETCHED_AT


def test_missing_source_name_falls_back_to_domain():
    entry = dict(ENTRY, source={"url": "https://www.thehindu.com"})
    assert parse_article(entry, FETCHED_AT).source == "thehindu.com"
    entry = dict(ENTRY, source=None)
    assert parse_article(entry, FETCHED_AT).source == "dawn.com"


def test_missing_text_fields_stay_empty():
    article = parse_article({"publishedAt": "2024-01-01T00:00:00Z"}, FETCHED_AT)
    assert article.title == ""
    assert article.description == ""


def test_parse_articles_skips_malformed_entries():
    payload = {"articles": [ENTRY, "not an article", dict(ENTRY, publishedAt="yesterday-ish??")]}
    articles, skipped = parse_articles(payload, FETCHED_AT)
    assert len(articles) == 1
    assert skipped == 2


def test_parse_articles_skips_non_string_fields():
    payload = {"articles": [
        ENTRY,
        dict(ENTRY, title=123),
        dict(ENTRY, source={"name": 7}),
        dict(ENTRY, description=["a", "list"]),
        dict(ENTRY, image={"src": "x"}),
    ]}
    articles, skipped = parse_articles(payload, FETCHED_AT)
    assert [a.title for a in articles] == ["Troops attack near border"]
    assert skipped == 4


def test_non_string_title_is_rejected():
    with pytest.raises(ValueError, match="title"):
        parse_article(dict(ENTRY, title=123), FETCHED_AT)


def test_published_offset_is_kept():
    article = parse_article(dict(ENTRY, publishedAt="2024-01-02T02:00:00+05:30"), FETCHED_AT)
    assert article.published_at.utcoffset() == timedelta(hours=5, minutes=30)
    assert article.published_at.day == 2


def test_naive_published_date_is_utc():
    article = parse_article(dict(ENTRY, publishedAt="2024-01-02 08:00:00"), FETCHED_AT)
    assert article.published_at == datetime(2024, 1, 2, 8, 0, tzinfo=timezone.utc)



@pytest.mark.parametrize("payload", [
    {},
    {"errors": ["You did not provide an API key."]},
    {"articles": None},
    [],
])
def test_parse_articles_rejects_payload_without_articles(payload):
    with pytest.raises(SourceUnavailableError):
        parse_articles(payload, FETCHED_AT)


def test_extract_domain_from_url():
    assert extract_domain_from_url("https://www.example.com/a/b") == "example.com"
    assert extract_domain_from_url(None) == ""


def fetcher_for(handler):
    return GNewsFetcher(
        api_key="secret",
        query="India Pakistan",
        max_articles=5,
        transport=httpx.MockTransport(handler),
    )


def test_fetch_sends_query_and_parses_response():
    seen = {}

    def handler(request):
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"totalArticles": 1, "articles": [ENTRY]})

    articles, skipped = asyncio.run(fetcher_for(handler).fetch(FETCHED_AT))

    assert seen["params"] == {"q": "India Pakistan", "lang": "en", "max": "5", "token": "secret"}
    assert [a.title for a in articles] == ["Troops attack near border"]
    assert skipped == 0


def test_fetch_http_error_is_source_unavailable():
    def handler(request):
        return httpx.Response(403, json={"errors": ["Forbidden"]})

    with pytest.raises(SourceUnavailableError, match="403"):
        asyncio.run(fetcher_for(handler).fetch(FETCHED_AT))


def test_fetch_transport_error_is_source_unavailable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(SourceUnavailableError):
        asyncio.run(fetcher_for(handler).fetch(FETCHED_AT))


def test_fetch_non_json_body_is_source_unavailable():
    def handler(request):
        return httpx.Response(200, text="<html>maintenance</html>")

    with pytest.raises(SourceUnavailableError):
        asyncio.run(fetcher_for(handler).fetch(FETCHED_AT))
