from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Query
from fastapi.responses import ORJSONResponse
from mangum import Mangum

from newsdesk.config import get_settings
from newsdesk.formatting import to_view
from newsdesk.models.news import SearchResponse
from newsdesk.services import NewsService

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Newsdesk",
    version="0.1.0",
    description="Latest articles from the Guardian content search API.",
    default_response_class=ORJSONResponse,
)


def get_news_service() -> NewsService:
    return NewsService()


@app.get("/health", tags=["system"])
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


# Plain def: FastAPI runs it in the threadpool, so the blocking fetch
# never sits on the event loop.
@app.get("/news/search", tags=["news"], response_model=SearchResponse)
def news_search(
    q: str | None = Query(None, max_length=200, description="Search term"),
    section: str | None = Query(
        None, pattern=r"^[a-z0-9-]{1,40}$", description="Section slug (e.g. world)"
    ),
    order_by: str | None = Query(None, pattern=r"^(newest|oldest|relevance)$"),
    service: NewsService = Depends(get_news_service),
) -> SearchResponse:
    result = service.search(q, section=section, order_by=order_by)
    return SearchResponse(
        query=q if q is not None else service.settings.default_query,
        fetched_at=datetime.now(timezone.utc),
        ok=result.ok,
        error=result.error,
        items=[to_view(article) for article in result.articles],
    )


handler = Mangum(app)
