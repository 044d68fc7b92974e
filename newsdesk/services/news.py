from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from ..config import Settings, get_settings
from ..models.news import Article, FeedResult
from .fetcher import fetch_feed_body
from .parser import parse_feed
from .query import build_search_url

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class NewsService:
    settings: Settings | None = None
    client: httpx.Client | None = None

    def __post_init__(self) -> None:
        if self.settings is None:
            self.settings = get_settings()

    def fetch(self, url: str) -> str:
        return fetch_feed_body(url, client=self.client, settings=self.settings)

    def parse(self, raw: str | None) -> FeedResult:
        return parse_feed(raw)

    def fetch_news(self, url: str) -> list[Article]:
        """Fetch one search page and return its articles in feed order."""
        return self.parse(self.fetch(url)).articles

    def search(
        self,
        query: str | None = None,
        *,
        section: str | None = None,
        order_by: str | None = None,
    ) -> FeedResult:
        url = build_search_url(
            query,
            settings=self.settings,
            section=section,
            order_by=order_by,
        )
        result = self.parse(self.fetch(url))
        logger.info(
            "News: %d articles for query %r (ok=%s)",
            len(result.articles),
            query,
            result.ok,
        )
        return result
