"""
feed_fetcher.py
Download the raw JSON feed body from the configured source.
"""
from __future__ import annotations

import logging

import requests

from errors import FetchError

HEADERS = {"User-Agent": "feed2ical/1.0 (+https://example.com)"}
DEFAULT_TIMEOUT = 30

log = logging.getLogger(__name__)


def fetch_feed(url: str, *, timeout: float | None = DEFAULT_TIMEOUT,
               logger: logging.Logger = log) -> bytes:
    """GET ``url`` once and return the body bytes, or raise ``FetchError``."""
    try:
        resp = requests.get(url, headers=HEADERS, timeout=timeout)
        resp.raise_for_status()
        body = resp.content
    except requests.RequestException as e:
        logger.error("could not open URL '%s' (%s)", url, e)
        raise FetchError(url, str(e)) from e

    logger.info("received response headers: %s", dict(resp.headers))
    logger.info("content-length: %s", resp.headers.get("Content-Length", len(body)))
    return body
