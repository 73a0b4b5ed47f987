from unittest import mock

import pytest
import requests

import feed_fetcher
from errors import FetchError
from feed_fetcher import HEADERS, fetch_feed


def fake_response(status=200, content=b'{"upcoming": []}'):
    resp = requests.Response()
    resp.status_code = status
    resp._content = content
    resp.headers["Content-Type"] = "application/json"
    resp.headers["Content-Length"] = str(len(content))
    resp.url = "http://feed.test/events"
    return resp


def test_returns_body_bytes():
    with mock.patch.object(feed_fetcher.requests, "get", return_value=fake_response()) as get:
        body = fetch_feed("http://feed.test/events", timeout=5)
    assert body == b'{"upcoming": []}'
    get.assert_called_once_with("http://feed.test/events", headers=HEADERS, timeout=5)


def test_connection_error_becomes_fetch_error():
    boom = requests.ConnectionError("connection refused")
    with mock.patch.object(feed_fetcher.requests, "get", side_effect=boom):
        with pytest.raises(FetchError) as excinfo:
            fetch_feed("http://feed.test/events")
    assert excinfo.value.url == "http://feed.test/events"
    assert "connection refused" in str(excinfo.value)


def test_error_status_becomes_fetch_error():
    with mock.patch.object(feed_fetcher.requests, "get", return_value=fake_response(status=503)):
        with pytest.raises(FetchError):
            fetch_feed("http://feed.test/events")


def test_failure_and_headers_are_logged():
    logger = mock.Mock()
    with mock.patch.object(feed_fetcher.requests, "get", return_value=fake_response()):
        fetch_feed("http://feed.test/events", logger=logger)
    messages = [c.args[0] for c in logger.info.call_args_list]
    assert any("response headers" in m for m in messages)
    assert any("content-length" in m for m in messages)

    with mock.patch.object(feed_fetcher.requests, "get", side_effect=requests.Timeout("slow")):
        with pytest.raises(FetchError):
            fetch_feed("http://feed.test/events", logger=logger)
    logger.error.assert_called_once()
