"""Output formatters: text with a lane gutter, colorized ANSI text and NDJSON."""

import json
from typing import Callable

from cdplog.models import LogEntry, entry_to_dict
from cdplog.summary import get_inline_summary

# ANSI color codes
COLORS = {
    "DEBUG": "\033[36m",    # cyan
    "INFO": "\033[32m",     # green
    "WARNING": "\033[33m",  # yellow
    "SEVERE": "\033[31m",   # red
    "ERROR": "\033[31m",    # red
}
KIND_COLORS = {
    "command": "\033[34m",   # blue
    "response": "\033[35m",  # magenta
    "event": "\033[90m",     # grey
}
RESET = "\033[0m"

KIND_MARKERS = {"command": "->", "response": "<-", "event": "  "}

LANE_START = "┌"
LANE_END = "└"
LANE_OPEN = "│"
LANE_IDLE = " "


def render_gutter(entry: LogEntry, width: int) -> str:
    """One column per lane: opening, closing, open or idle."""
    config = entry.lane_config
    if config is None or width == 0:
        return ""
    active = set(config.active_lanes)
    cells = []
    for lane in range(width):
        if lane == config.start_lane:
            cells.append(LANE_START)
        elif lane == config.end_lane:
            cells.append(LANE_END)
        elif lane in active:
            cells.append(LANE_OPEN)
        else:
            cells.append(LANE_IDLE)
    return "".join(cells)


def lane_width(entries: list[LogEntry]) -> int:
    """Number of gutter columns needed to draw every lane in *entries*."""
    highest = -1
    for entry in entries:
        if entry.lane_config and entry.lane_config.active_lanes:
            highest = max(highest, entry.lane_config.active_lanes[-1])
    return highest + 1


def describe(entry: LogEntry, summaries: bool = True) -> str:
    """Inline summary for known methods, else the entry's message."""
    if summaries:
        summary = get_inline_summary(entry.method, entry.payload)
        if summary:
            return summary
    return entry.message


def format_text(entry: LogEntry, width: int = 0, summaries: bool = True) -> str:
    gutter = render_gutter(entry, width)
    marker = KIND_MARKERS[entry.kind]
    timestamp = f"{entry.timestamp} " if entry.timestamp else ""
    prefix = f"{entry.line_number:>6} {timestamp}[{entry.level}]"
    if gutter:
        prefix = f"{prefix} {gutter}"
    return f"{prefix} {marker} {describe(entry, summaries)}"


def format_color(entry: LogEntry, width: int = 0, summaries: bool = True) -> str:
    level_color = COLORS.get(entry.level.upper(), "")
    kind_color = KIND_COLORS[entry.kind]
    gutter = render_gutter(entry, width)
    timestamp = f"{entry.timestamp} " if entry.timestamp else ""
    prefix = f"{entry.line_number:>6} {timestamp}[{level_color}{entry.level}{RESET}]"
    if gutter:
        prefix = f"{prefix} {gutter}"
    marker = f"{kind_color}{KIND_MARKERS[entry.kind]}{RESET}"
    return f"{prefix} {marker} {describe(entry, summaries)}"


def format_json(entry: LogEntry, width: int = 0, summaries: bool = True) -> str:
    """Return one JSON object per line, compatible with jq."""
    return json.dumps(entry_to_dict(entry), ensure_ascii=False)


def get_formatter(
    output_format: str = "text", color: bool = False
) -> Callable[..., str]:
    """Factory that returns the right formatter based on args."""
    if output_format == "json":
        return format_json
    if color:
        return format_color
    return format_text
