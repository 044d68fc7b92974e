from .fetcher import fetch_feed_body
from .news import NewsService
from .parser import extract_articles, parse_feed
from .query import build_search_url

__all__ = [
    "NewsService",
    "build_search_url",
    "extract_articles",
    "fetch_feed_body",
    "parse_feed",
]
