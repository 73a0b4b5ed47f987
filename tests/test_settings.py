import argparse
import dataclasses

import pytest

from settings import PORT_DEFAULT, SRC_DEFAULT, Settings, load_settings, parse_timeout

ENV_KEYS = [
    "FEED2ICAL_SRC", "FEED2ICAL_PORT", "FEED2ICAL_AUTOAPPEND", "FEED2ICAL_SERVER",
    "FEED2ICAL_HOST", "FEED2ICAL_TIMEOUT", "FEED2ICAL_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # setenv first so teardown also removes anything load_dotenv adds
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


def test_defaults():
    s = load_settings([], env_file=None)
    assert s.source_url == SRC_DEFAULT
    assert s.port == PORT_DEFAULT == 8080
    assert s.auto_append is False
    assert s.server_mode is True
    assert s.timeout == 30.0


def test_short_flags():
    s = load_settings(["-s", "http://feed.test/x", "-p", "9000", "-a", "--no-srv"], env_file=None)
    assert s.source_url == "http://feed.test/x"
    assert s.port == 9000
    assert s.auto_append is True
    assert s.server_mode is False


def test_environment_defaults(monkeypatch):
    monkeypatch.setenv("FEED2ICAL_SRC", "http://env.test/feed")
    monkeypatch.setenv("FEED2ICAL_PORT", "9999")
    monkeypatch.setenv("FEED2ICAL_SERVER", "false")
    s = load_settings([], env_file=None)
    assert s.source_url == "http://env.test/feed"
    assert s.port == 9999
    assert s.server_mode is False
    assert load_settings(["--port", "81"], env_file=None).port == 81


def test_dotenv_file(tmp_path):
    env = tmp_path / ".env"
    env.write_text("FEED2ICAL_SRC=http://dotenv.test/feed\nFEED2ICAL_LOG_LEVEL=info\n")
    s = load_settings([], env_file=env)
    assert s.source_url == "http://dotenv.test/feed"
    assert s.log_level == "INFO"


def test_settings_are_frozen():
    s = Settings()
    with pytest.raises(dataclasses.FrozenInstanceError):
        s.port = 1


def test_parse_timeout():
    assert parse_timeout("12.5") == 12.5
    assert parse_timeout("0") is None
    assert parse_timeout("none") is None
    with pytest.raises(argparse.ArgumentTypeError):
        parse_timeout("-1")
    with pytest.raises(argparse.ArgumentTypeError):
        parse_timeout("soon")
