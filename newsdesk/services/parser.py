from __future__ import annotations

import logging
from typing import Any

import orjson

from ..models.news import NOT_AVAILABLE, Article, FeedResult

logger = logging.getLogger(__name__)

EMPTY_BODY = "empty response body"


def parse_feed(raw: str | None) -> FeedResult:
    """
    Turn a search response body into articles, in feed order.

    Expected shape: ``{"response": {"results": [ {...}, ... ]}}``. The first
    malformed result stops the batch; articles read before it are kept and
    ``FeedResult.error`` says what went wrong.
    """
    if raw is None or not raw.strip():
        logger.debug("Nothing to parse: %s", EMPTY_BODY)
        return FeedResult(error=EMPTY_BODY)

    try:
        payload = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        return _failed([], f"invalid JSON: {exc}")

    response = _get_dict(payload, "response")
    if response is None:
        return _failed([], "missing object 'response'")
    results = _get_list(response, "results")
    if results is None:
        return _failed([], "missing array 'response.results'")

    articles: list[Article] = []
    for index, entry in enumerate(results):
        article, problem = _build_article(entry)
        if article is None:
            return _failed(articles, f"result {index}: {problem}")
        articles.append(article)
    return FeedResult(articles=articles)


def extract_articles(raw: str | None) -> list[Article]:
    return parse_feed(raw).articles


def _build_article(entry: Any) -> tuple[Article | None, str | None]:
    if not isinstance(entry, dict):
        return None, "not an object"

    title = _get_text(entry, "webTitle")
    if title is None:
        return None, "missing 'webTitle'"
    category = _get_text(entry, "sectionName")
    if category is None:
        return None, "missing 'sectionName'"
    url = _get_text(entry, "webUrl")
    if url is None:
        return None, "missing 'webUrl'"

    published = entry.get("webPublicationDate")
    if not isinstance(published, str):
        published = NOT_AVAILABLE

    tags = _get_list(entry, "tags")
    if tags is None:
        return None, "missing array 'tags'"
    author = NOT_AVAILABLE
    if len(tags) == 1:
        tag = tags[0]
        name = tag.get("webTitle") if isinstance(tag, dict) else None
        if not isinstance(name, str):
            return None, "tag without 'webTitle'"
        author = f"by: {name}. "

    return (
        Article(
            title=title,
            category=category,
            author=author,
            published_at=published,
            url=url,
        ),
        None,
    )


def _failed(articles: list[Article], reason: str) -> FeedResult:
    logger.error(
        "Problem parsing the news JSON results (%d kept): %s", len(articles), reason
    )
    return FeedResult(articles=articles, error=reason)


def _get_dict(obj: Any, key: str) -> dict[str, Any] | None:
    value = obj.get(key) if isinstance(obj, dict) else None
    return value if isinstance(value, dict) else None


def _get_list(obj: dict[str, Any], key: str) -> list[Any] | None:
    value = obj.get(key)
    return value if isinstance(value, list) else None


def _get_text(obj: dict[str, Any], key: str) -> str | None:
    value = obj.get(key)
    if isinstance(value, str) and value:
        return value
    return None
