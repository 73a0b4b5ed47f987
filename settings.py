"""
settings.py
Process-wide configuration, parsed once at startup and never changed.

Command-line flags win; their defaults come from the environment, which is
seeded from a ``.env`` file beside this module when one exists:

    FEED2ICAL_SRC=https://example.com/events?format=json
    FEED2ICAL_PORT=8080
    FEED2ICAL_AUTOAPPEND=false
    FEED2ICAL_SERVER=true
    FEED2ICAL_HOST=0.0.0.0
    FEED2ICAL_TIMEOUT=30
    FEED2ICAL_LOG_LEVEL=DEBUG
"""
from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from dotenv import load_dotenv

HERE = Path(__file__).resolve().parent
ENV_FILE = HERE / ".env"

SRC_DEFAULT = "http://localhost/events/index.txt"
PORT_DEFAULT = 8080
HOST_DEFAULT = "0.0.0.0"
TIMEOUT_DEFAULT = 30.0
LOG_LEVEL_DEFAULT = "DEBUG"


@dataclass(frozen=True)
class Settings:
    source_url: str = SRC_DEFAULT
    auto_append: bool = False  # parsed and logged only
    server_mode: bool = True   # parsed and logged only
    port: int = PORT_DEFAULT
    host: str = HOST_DEFAULT
    timeout: float | None = TIMEOUT_DEFAULT
    log_level: str = LOG_LEVEL_DEFAULT


def env_bool(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def parse_timeout(raw: str) -> float | None:
    """``0`` or ``none`` disables the upstream timeout."""
    if raw.strip().lower() in {"none", ""}:
        return None
    try:
        value = float(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"timeout must be a number, got {raw!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"timeout must be >= 0, got {raw!r}")
    return value or None


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="feed2ical",
        description="Serve a JSON event feed as an iCalendar document.",
    )
    ap.add_argument("-s", "--src", default=os.getenv("FEED2ICAL_SRC", SRC_DEFAULT),
                    help="source URL to fetch the event feed from")
    ap.add_argument("-a", "--autoappend", action=argparse.BooleanOptionalAction,
                    default=env_bool("FEED2ICAL_AUTOAPPEND", False),
                    help="append 'format=pretty-json' to the source URL (currently has no effect)")
    ap.add_argument("-d", "--srv", action=argparse.BooleanOptionalAction,
                    default=env_bool("FEED2ICAL_SERVER", True),
                    help="run as server; --no-srv is logged but still serves (currently has no effect)")
    ap.add_argument("-p", "--port", type=int, default=int(os.getenv("FEED2ICAL_PORT", PORT_DEFAULT)),
                    help=f"port to listen for incoming requests on (default: {PORT_DEFAULT})")
    ap.add_argument("--host", default=os.getenv("FEED2ICAL_HOST", HOST_DEFAULT),
                    help=f"interface to bind (default: {HOST_DEFAULT})")
    ap.add_argument("--timeout", type=parse_timeout,
                    default=parse_timeout(os.getenv("FEED2ICAL_TIMEOUT", str(TIMEOUT_DEFAULT))),
                    help="seconds to wait for the source feed, 0 to wait forever (default: 30)")
    ap.add_argument("--log-level", default=os.getenv("FEED2ICAL_LOG_LEVEL", LOG_LEVEL_DEFAULT),
                    type=str.upper, choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                    help=f"logging threshold (default: {LOG_LEVEL_DEFAULT})")
    return ap


def load_settings(argv: Sequence[str] | None = None, *, env_file: Path | None = ENV_FILE) -> Settings:
    """Read ``.env``, parse ``argv`` and freeze the result."""
    if env_file is not None:
        load_dotenv(dotenv_path=env_file)
    args = build_parser().parse_args(argv)
    return Settings(
        source_url=args.src,
        auto_append=args.autoappend,
        server_mode=args.srv,
        port=args.port,
        host=args.host,
        timeout=args.timeout,
        log_level=args.log_level,
    )
