"""
calendar_renderer.py
Turn a decoded feed into VCALENDAR text.

Each event becomes one VEVENT with UID, DTSTART, DTEND, SUMMARY and
DESCRIPTION in that order.  The calendar carries VERSION only (no PRODID).
"""
from __future__ import annotations

from icalendar import Calendar, Event, vText

from feed_models import EventRecord, FeedDocument
from text_utils import format_utc, strip_tags


def build_event(record: EventRecord) -> Event:
    event = Event()
    event.add("uid", record.id)
    # Pre-formatted UTC stamps; vText leaves [0-9TZ] untouched
    event.add("dtstart", vText(format_utc(record.start_date)))
    event.add("dtend", vText(format_utc(record.end_date)))
    event.add("summary", record.title)
    event.add("description", strip_tags(record.body))
    return event


def build_calendar(feed: FeedDocument) -> Calendar:
    cal = Calendar()
    cal.add("version", "2.0")
    for record in feed.events:
        cal.add_component(build_event(record))
    return cal


def render_calendar(feed: FeedDocument) -> str:
    """Return the CRLF-terminated iCalendar text for ``feed``, events in feed order."""
    # sorted=False keeps properties in insertion order instead of icalendar's canonical one
    return build_calendar(feed).to_ical(sorted=False).decode("utf-8")
