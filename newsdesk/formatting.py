from __future__ import annotations

import logging

from dateutil import parser as date_parser

from .models.news import NOT_AVAILABLE, Article, ArticleView

logger = logging.getLogger(__name__)

# English names regardless of the process locale.
_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def format_published_date(value: str | None) -> str | None:
    """Render a ``yyyy-MM-ddTHH:mm:ss`` timestamp as e.g. ``Thu 02 Jan 2020``."""
    if not value or value == NOT_AVAILABLE:
        return None
    try:
        parsed = date_parser.isoparse(value)
    except (ValueError, OverflowError):
        logger.debug("Unparseable publication date %r", value)
        return None
    return (
        f"{_WEEKDAYS[parsed.weekday()]} {parsed.day:02d} "
        f"{_MONTHS[parsed.month - 1]} {parsed.year:04d}"
    )


def to_view(article: Article) -> ArticleView:
    return ArticleView(
        **article.model_dump(),
        display_date=format_published_date(article.published_at),
    )
