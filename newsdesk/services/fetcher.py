from __future__ import annotations

import logging
from typing import Annotated

import httpx
from pydantic import AnyUrl, TypeAdapter, UrlConstraints, ValidationError

from ..config import Settings
from ..http_client import build_timeout, create_http_client

logger = logging.getLogger(__name__)

# Syntax and scheme only; unlike HttpUrl there is no length cap.
FeedUrl = Annotated[
    AnyUrl, UrlConstraints(allowed_schemes=["http", "https"], host_required=True)
]

_url_adapter = TypeAdapter(FeedUrl)


def validate_url(url: str | None) -> str | None:
    """Return ``url`` unchanged if it is a usable http(s) URL, else None."""
    if not url or not url.strip():
        logger.error("Problem building the URL: empty value")
        return None
    try:
        _url_adapter.validate_python(url)
    except ValidationError as exc:
        logger.error("Problem building the URL %r: %s", url, exc.errors()[0]["msg"])
        return None
    return url


def fetch_feed_body(
    url: str | None,
    client: httpx.Client | None = None,
    settings: Settings | None = None,
) -> str:
    """
    GET ``url`` and return the body as text.

    Returns an empty string for a malformed URL, a non-200 response or any
    transport failure. Each case is logged; nothing is raised. The connect
    and read timeouts are fixed, whatever client is passed in.
    """
    target = validate_url(url)
    if target is None:
        return ""

    if client is not None:
        return _read_body(client, target)
    with create_http_client(settings) as owned:
        return _read_body(owned, target)


def _read_body(client: httpx.Client, url: str) -> str:
    try:
        with client.stream("GET", url, timeout=build_timeout()) as response:
            if response.status_code != httpx.codes.OK:
                logger.error(
                    "Error response code: %s for %s", response.status_code, url
                )
                return ""
            body = response.read()
    except httpx.TimeoutException as exc:
        logger.error("Timed out retrieving the news JSON results from %s: %s", url, exc)
        return ""
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.error(
            "Problem retrieving the news JSON results from %s: %s", url, exc
        )
        return ""
    return body.decode("utf-8", errors="replace")
