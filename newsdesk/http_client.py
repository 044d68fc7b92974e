import httpx

from .config import (
    DEFAULT_MAX_CONNECTIONS,
    DEFAULT_MAX_KEEPALIVE,
    DEFAULT_USER_AGENT,
    Settings,
)

# Seconds. Fixed for every feed request, not exposed through Settings.
CONNECT_TIMEOUT = 15.0
READ_TIMEOUT = 10.0


def build_timeout() -> httpx.Timeout:
    return httpx.Timeout(READ_TIMEOUT, connect=CONNECT_TIMEOUT)


def create_http_client(settings: Settings | None = None) -> httpx.Client:
    """
    Return a new client; the caller owns it and must close it.

    Without ``settings`` the built-in defaults are used and the environment is
    not read, so a bad configuration surfaces where ``Settings`` is loaded
    (``NewsService`` or the app module), not in the middle of a fetch.
    """
    if settings is None:
        max_connections = DEFAULT_MAX_CONNECTIONS
        max_keepalive = DEFAULT_MAX_KEEPALIVE
        user_agent = DEFAULT_USER_AGENT
    else:
        max_connections = settings.http_max_connections
        max_keepalive = settings.http_max_keepalive
        user_agent = settings.http_user_agent
    return httpx.Client(
        timeout=build_timeout(),
        limits=httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive,
        ),
        headers={
            "User-Agent": user_agent,
            "Accept": "application/json",
        },
    )
