#!/usr/bin/env python3
"""
feed_server.py
Serve the configured JSON event feed as an iCalendar document.

Every request must carry a ``url`` parameter.  The calendar is always built
from the source given by ``--src``; the parameter is only checked for
presence.

Usage:
    python3 feed_server.py [--src URL] [--port 8080] [--no-srv] [--autoappend]

Responses:
    200  VCALENDAR text, sent as text/calendar; charset=utf-8 (falcon would
         otherwise label it with its JSON default media type)
    405  empty body (missing ``url``, source unreachable, or a bad feed)
"""
from __future__ import annotations

import logging
import socketserver
import sys
from typing import Callable, Sequence
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

import falcon

from calendar_renderer import render_calendar
from errors import FeedError
from feed_fetcher import fetch_feed
from feed_models import decode_feed
from settings import Settings, load_settings

CALENDAR_CONTENT_TYPE = "text/calendar; charset=utf-8"
LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"

log = logging.getLogger("feed2ical")

Fetcher = Callable[..., bytes]


def calendar_for(settings: Settings, *, fetch: Fetcher = fetch_feed,
                 logger: logging.Logger = log) -> str:
    """Run fetch → decode → render once for the configured source."""
    raw = fetch(settings.source_url, timeout=settings.timeout, logger=logger)
    feed = decode_feed(raw, logger=logger)
    text = render_calendar(feed)
    logger.info("done parsing %d event(s)", len(feed.events))
    return text


class FeedCalendarResource:
    """Catch-all sink: any path, any method."""

    def __init__(self, settings: Settings, *, fetch: Fetcher = fetch_feed,
                 logger: logging.Logger = log):
        self.settings = settings
        self.fetch = fetch
        self.log = logger

    def __call__(self, req: falcon.Request, resp: falcon.Response, **kwargs) -> None:
        url = req.get_param("url") or ""
        if not url:
            self.log.warning("could not find url in request")
            resp.status = falcon.HTTP_405
            return

        self.log.debug("fetching resources at '%s'", url)
        try:
            body = calendar_for(self.settings, fetch=self.fetch, logger=self.log)
        except FeedError as e:
            self.log.error("could not fetch events (%s)", e)
            resp.status = falcon.HTTP_405
            return

        resp.status = falcon.HTTP_200
        resp.content_type = CALENDAR_CONTENT_TYPE
        resp.text = body
        self.log.info("sending parsed ical format to requester")


def create_app(settings: Settings, *, fetch: Fetcher = fetch_feed,
               logger: logging.Logger = log) -> falcon.App:
    app = falcon.App()
    app.add_sink(FeedCalendarResource(settings, fetch=fetch, logger=logger), "/")
    return app


class ThreadingWSGIServer(socketserver.ThreadingMixIn, WSGIServer):
    daemon_threads = True


class LoggingRequestHandler(WSGIRequestHandler):

    def log_message(self, format, *args):
        # Access lines go through our logger instead of stderr
        log.info("request: %s %s", self.address_string(), format % args)


def log_mode(settings: Settings) -> None:
    if settings.server_mode:
        log.info("running in server mode")
    else:
        log.info("running in single request mode")
    log.info("auto-appending is %s", "ON" if settings.auto_append else "OFF")
    log.info("fetching events from %s", settings.source_url)


def serve(settings: Settings, app: falcon.App) -> None:
    try:
        httpd = make_server(settings.host, settings.port, app,
                            server_class=ThreadingWSGIServer,
                            handler_class=LoggingRequestHandler)
    except OSError as e:
        log.critical("cannot listen on %s:%d (%s)", settings.host, settings.port, e)
        sys.exit(f"❌ Cannot listen on port {settings.port}: {e}")

    log.info("running server on port %d", settings.port)
    with httpd:
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            log.info("server stopped")


def main(argv: Sequence[str] | None = None) -> None:
    settings = load_settings(argv)
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    log_mode(settings)
    serve(settings, create_app(settings))


if __name__ == "__main__":
    main()
