import json

import pytest

MEETUP = {
    "id": "abc",
    "startDate": 1700000000000,
    "endDate": 1700003600000,
    "title": "Meetup",
    "body": "<p>Join us</p>",
    "author": {"displayName": "Jo", "bio": "", "deleted": False},
}


@pytest.fixture
def meetup():
    return dict(MEETUP)


@pytest.fixture
def feed_bytes():
    def make(*events):
        return json.dumps({"upcoming": list(events)}).encode("utf-8")
    return make
