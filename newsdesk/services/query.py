from __future__ import annotations

import httpx

from ..config import Settings, get_settings

SEARCH_PATH = "/search"


def build_search_url(
    query: str | None = None,
    *,
    settings: Settings | None = None,
    section: str | None = None,
    order_by: str | None = None,
    page_size: int | None = None,
) -> str:
    settings = settings or get_settings()
    base = str(settings.guardian_base_url).rstrip("/") + SEARCH_PATH

    params: dict[str, str | int] = {}
    term = (query if query is not None else settings.default_query).strip()
    if term:
        params["q"] = term
    if section:
        params["section"] = section.strip().lower()
    # contributor tags carry the author name
    params["show-tags"] = "contributor"
    params["order-by"] = order_by or settings.order_by
    params["page-size"] = page_size or settings.page_size
    params["api-key"] = settings.guardian_api_key
    return str(httpx.URL(base, params=params))
