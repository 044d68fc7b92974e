import logging

import httpx
import pytest
import respx
from pydantic import ValidationError

import newsdesk.services.fetcher as fetcher_module
from newsdesk.config import Settings, get_settings
from newsdesk.http_client import CONNECT_TIMEOUT, READ_TIMEOUT, create_http_client
from newsdesk.services import NewsService
from newsdesk.services.fetcher import fetch_feed_body, validate_url

FEED_URL = "https://content.guardianapis.com/search"


def test_returns_body_on_200() -> None:
    with respx.mock(assert_all_called=True) as mock:
        mock.get(FEED_URL).respond(200, text='{"response": {"results": []}}')
        body = fetch_feed_body(FEED_URL)

    assert body == '{"response": {"results": []}}'


def test_decodes_body_as_utf8() -> None:
    payload = '{"webTitle": "Café – naïve"}'
    with respx.mock(assert_all_called=True) as mock:
        mock.get(FEED_URL).respond(
            200,
            content=payload.encode("utf-8"),
            headers={"Content-Type": "application/json; charset=latin-1"},
        )
        body = fetch_feed_body(FEED_URL)

    assert body == payload


@pytest.mark.parametrize("status", [204, 301, 404, 500])
def test_non_200_returns_empty_and_logs_status(status, caplog) -> None:
    with respx.mock(assert_all_called=True) as mock:
        mock.get(FEED_URL).respond(status)
        with caplog.at_level(logging.ERROR, logger="newsdesk.services.fetcher"):
            body = fetch_feed_body(FEED_URL)

    assert body == ""
    assert f"Error response code: {status}" in caplog.text


@pytest.mark.parametrize(
    "error",
    [
        httpx.ConnectError("Name or service not known"),
        httpx.ConnectTimeout("connect timed out"),
        httpx.ReadTimeout("read timed out"),
        httpx.RemoteProtocolError("connection reset"),
    ],
)
def test_transport_failure_returns_empty(error, caplog) -> None:
    with respx.mock(assert_all_called=True) as mock:
        mock.get("http://unreachable.invalid/search").mock(side_effect=error)
        with caplog.at_level(logging.ERROR, logger="newsdesk.services.fetcher"):
            body = fetch_feed_body("http://unreachable.invalid/search")

    assert body == ""
    assert "unreachable.invalid" in caplog.text


@pytest.mark.parametrize("url", [None, "", "   ", "search?q=x", "mailto:a@b.c"])
def test_malformed_url_skips_request(url, caplog) -> None:
    with respx.mock(assert_all_called=False) as mock:
        with caplog.at_level(logging.ERROR, logger="newsdesk.services.fetcher"):
            body = fetch_feed_body(url)

    assert body == ""
    assert not mock.calls
    assert "Problem building the URL" in caplog.text
    assert validate_url(url) is None


def test_injected_client_stays_open() -> None:
    with httpx.Client() as client:
        with respx.mock(assert_all_called=True) as mock:
            mock.get(FEED_URL).mock(
                side_effect=[httpx.Response(404), httpx.Response(200, text="ok")]
            )
            assert fetch_feed_body(FEED_URL, client=client) == ""
            assert fetch_feed_body(FEED_URL, client=client) == "ok"
        assert not client.is_closed


def test_client_uses_fixed_timeouts() -> None:
    with create_http_client() as client:
        assert client.timeout.connect == CONNECT_TIMEOUT == 15.0
        assert client.timeout.read == READ_TIMEOUT == 10.0


def test_injected_client_gets_fixed_timeouts() -> None:
    seen: dict[str, float] = {}

    def record(request: httpx.Request) -> httpx.Response:
        seen.update(request.extensions["timeout"])
        return httpx.Response(200, text="{}")

    with httpx.Client(timeout=2.0) as client:
        service = NewsService(settings=Settings(), client=client)
        with respx.mock(assert_all_called=True) as mock:
            mock.get(FEED_URL).mock(side_effect=record)
            assert service.fetch(FEED_URL) == "{}"

    assert seen["connect"] == CONNECT_TIMEOUT
    assert seen["read"] == READ_TIMEOUT


def test_long_url_is_fetched() -> None:
    url = f"{FEED_URL}?q={'a' * 2100}"
    assert len(url) > 2083
    with respx.mock(assert_all_called=True) as mock:
        route = mock.get(FEED_URL).respond(200, text="long")
        body = fetch_feed_body(url)

    assert route.called
    assert body == "long"


@pytest.fixture
def opened(monkeypatch):
    """Record every client the fetcher creates and every response it streams."""
    clients: list[httpx.Client] = []
    responses: list[httpx.Response] = []

    def spy(settings=None):
        client = create_http_client(settings)
        client.event_hooks["response"].append(responses.append)
        clients.append(client)
        return client

    monkeypatch.setattr(fetcher_module, "create_http_client", spy)
    return clients, responses


@pytest.mark.parametrize(
    ("outcome", "expected"),
    [
        (httpx.Response(200, text="ok"), "ok"),
        (httpx.Response(500), ""),
        (httpx.ConnectError("connection refused"), ""),
    ],
)
def test_owned_client_is_closed_on_every_path(opened, outcome, expected) -> None:
    clients, _ = opened
    with respx.mock(assert_all_called=True) as mock:
        mock.get(FEED_URL).mock(side_effect=[outcome])
        assert fetch_feed_body(FEED_URL) == expected

    assert len(clients) == 1
    assert clients[0].is_closed


def test_response_is_closed_after_error_status(opened) -> None:
    clients, responses = opened
    with respx.mock(assert_all_called=True) as mock:
        mock.get(FEED_URL).respond(404)
        assert fetch_feed_body(FEED_URL) == ""

    assert len(responses) == 1
    assert responses[0].is_closed
    assert clients[0].is_closed


class _StalledStream(httpx.SyncByteStream):
    def __iter__(self):
        yield b'{"response": '
        raise httpx.ReadTimeout("read timed out")


def test_timeout_while_reading_body_closes_response(opened, caplog) -> None:
    clients, responses = opened
    with respx.mock(assert_all_called=True) as mock:
        mock.get(FEED_URL).respond(200, stream=_StalledStream())
        with caplog.at_level(logging.ERROR, logger="newsdesk.services.fetcher"):
            body = fetch_feed_body(FEED_URL)

    assert body == ""
    assert "Timed out" in caplog.text
    assert len(responses) == 1
    assert responses[0].is_closed
    assert clients[0].is_closed


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_bad_environment_does_not_break_fetch(monkeypatch, fresh_settings) -> None:
    monkeypatch.setenv("NEWS_PAGE_SIZE", "abc")

    with respx.mock(assert_all_called=True) as mock:
        mock.get(FEED_URL).respond(200, text="ok")
        assert fetch_feed_body(FEED_URL) == "ok"

    # surfaces when settings are loaded, as a configuration error
    with pytest.raises(ValidationError):
        NewsService()
