"""Exceptions raised by the fetch → decode pipeline."""


class FeedError(Exception):
    """Base class for anything that stops a feed from becoming a calendar."""


class FetchError(FeedError):
    """The source feed could not be downloaded or read."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"could not fetch {url!r}: {reason}")
        self.url = url
        self.reason = reason


class DecodeError(FeedError):
    """The downloaded body is not a feed document."""
