"""Detects which dialect a log is written in and dispatches to its parser.

Detection order (first match wins):
  1. Starts with '[' not followed by a digit, and contains "method"
     -> Protocol Monitor JSON export
  2. puppeteer:protocol:SEND / RECV in the first 50 lines -> Puppeteer
  3. "Protocol message:" in the first 50 lines -> WPT
  4. "Starting ChromeDriver" / "DevTools WebSocket" -> ChromeDriver
  5. Fallback -> ChromeDriver (its framing tolerates arbitrary text)

The loosest substring checks run last so they cannot shadow the more
specific formats.
"""

import logging
import re
from enum import Enum
from typing import Callable

from cdplog import chromedriver, protocol_monitor, puppeteer, wpt
from cdplog.models import LogEntry

logger = logging.getLogger(__name__)

DETECTION_WINDOW_LINES = 50

_LEADING_TIMESTAMP_RE = re.compile(r"^\[\d")

PUPPETEER_MARKERS = (puppeteer.SEND_MARKER, puppeteer.RECV_MARKER)
WPT_MARKERS = ("Protocol message:",)
CHROMEDRIVER_MARKERS = ("Starting ChromeDriver", "DevTools WebSocket")


class Dialect(str, Enum):
    CHROMEDRIVER = "chromedriver"
    PUPPETEER = "puppeteer"
    WPT = "wpt"
    PROTOCOL_MONITOR = "protocol-monitor"


PARSERS: dict[Dialect, Callable[[str], list[LogEntry]]] = {
    Dialect.CHROMEDRIVER: chromedriver.parse,
    Dialect.PUPPETEER: puppeteer.parse,
    Dialect.WPT: wpt.parse,
    Dialect.PROTOCOL_MONITOR: protocol_monitor.parse,
}


def _looks_like_json_array(text: str) -> bool:
    trimmed = text.strip()
    if not trimmed.startswith("["):
        return False
    if _LEADING_TIMESTAMP_RE.match(trimmed):
        return False
    return '"method"' in text


def detect_format(text: str) -> Dialect:
    """Pick the dialect for *text*. Always returns a dialect."""
    if _looks_like_json_array(text):
        return Dialect.PROTOCOL_MONITOR

    head = "\n".join(text.split("\n")[:DETECTION_WINDOW_LINES])

    if any(marker in head for marker in PUPPETEER_MARKERS):
        return Dialect.PUPPETEER

    if any(marker in head for marker in WPT_MARKERS):
        return Dialect.WPT

    if any(marker in head for marker in CHROMEDRIVER_MARKERS):
        return Dialect.CHROMEDRIVER

    logger.debug("No dialect markers found; falling back to ChromeDriver")
    return Dialect.CHROMEDRIVER


def get_parser(text: str) -> Callable[[str], list[LogEntry]]:
    return PARSERS[detect_format(text)]


def parse_logs(text: str, dialect: Dialect | str | None = None) -> list[LogEntry]:
    """Detect the dialect (unless one is forced) and parse *text*."""
    chosen = Dialect(dialect) if dialect is not None else detect_format(text)
    entries = PARSERS[chosen](text)
    logger.info("Parsed %d entries as %s", len(entries), chosen.value)
    return entries
