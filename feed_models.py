"""
feed_models.py
Typed view of the upstream "upcoming events" JSON feed.

The feed looks like::

    {"upcoming": [{"id": "...", "startDate": 1700000000000, "endDate": ...,
                   "title": "...", "body": "<p>...</p>", "author": {...}}]}

Decoding is strict: a value of the wrong JSON type anywhere rejects the whole
feed.  Missing keys and nulls fall back to empty/zero values and unknown keys
are ignored.
"""
from __future__ import annotations

import logging
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from errors import DecodeError

log = logging.getLogger(__name__)


class FeedModel(BaseModel):
    model_config = ConfigDict(strict=True, populate_by_name=True, extra="ignore", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # null leaves a field (or a whole object) at its zero value
        if data is None:
            return {}
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class Author(FeedModel):
    id: str = ""
    last_login_on: int = Field(0, alias="lastLoginOn")
    last_active_on: int = Field(0, alias="lastActiveOn")
    is_deactivated: bool = Field(False, alias="isDeactivated")
    deleted: bool = False
    display_name: str = Field("", alias="displayName")
    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
    email_verified: bool = Field(False, alias="emailVerified")
    bio: str = ""
    revalidate_timestamp: int = Field(0, alias="revalidateTimestamp")
    system_generated: bool = Field(False, alias="systemGenerated")


class StructuredContent(FeedModel):
    type: str = Field("", alias="_type")
    start_date: int = Field(0, alias="startDate")
    end_date: int = Field(0, alias="endDate")


class Item(FeedModel):
    """Gallery/list item attached to an event; its content is not used."""


class EventRecord(FeedModel):
    id: str = ""
    collection_id: str = Field("", alias="collectionId")
    record_type: int = Field(0, alias="recordType")
    added_on: int = Field(0, alias="addedOn")
    updated_on: int = Field(0, alias="updatedOn")
    publish_on: int = Field(0, alias="publishOn")
    author_id: str = Field("", alias="authorId")
    url_id: str = Field("", alias="urlId")
    title: str = ""
    source_url: str = Field("", alias="sourceUrl")
    body: str = ""
    author: Author = Field(default_factory=Author)
    full_url: str = Field("", alias="fullUrl")
    asset_url: str = Field("", alias="assetUrl")
    content_type: str = Field("", alias="contentType")
    structured_content: StructuredContent = Field(default_factory=StructuredContent, alias="structuredContent")
    start_date: int = Field(0, alias="startDate")
    end_date: int = Field(0, alias="endDate")
    items: List[Item] = Field(default_factory=list)


class FeedDocument(FeedModel):
    events: List[EventRecord] = Field(default_factory=list, alias="upcoming")


def decode_feed(raw: bytes | str, *, logger: logging.Logger = log) -> FeedDocument:
    """Parse the raw feed body, raising ``DecodeError`` if it does not fit."""
    try:
        feed = FeedDocument.model_validate_json(raw)
    except ValidationError as e:
        logger.error("could not unmarshal feed (%d problem(s)): %s", e.error_count(), e)
        raise DecodeError(f"feed does not match the expected shape: {e.errors()[0]['msg']}") from e
    logger.info("source format OK, decoded %d event(s)", len(feed.events))
    return feed
