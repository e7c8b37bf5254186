"""Tests for cdplog/formatter.py"""

import json

from cdplog.correlator import post_process
from cdplog.formatter import (
    RESET,
    format_color,
    format_json,
    format_text,
    get_formatter,
    lane_width,
    render_gutter,
)
from conftest import make_entry


def _pair():
    return post_process([
        make_entry(0, "command", command_id=1),
        make_entry(1, "event"),
        make_entry(2, "response", command_id=1),
    ])


class TestGutter:
    def test_lane_width(self):
        assert lane_width(_pair()) == 1

    def test_lane_width_without_lanes(self):
        assert lane_width([make_entry(0)]) == 0

    def test_open_hold_close(self):
        cmd, event, res = _pair()
        assert render_gutter(cmd, 1) == "┌"
        assert render_gutter(event, 1) == "│"
        assert render_gutter(res, 1) == "└"

    def test_idle_columns(self):
        _, event, _ = _pair()
        assert render_gutter(event, 3) == "│  "

    def test_zero_width(self):
        cmd, _, _ = _pair()
        assert render_gutter(cmd, 0) == ""


class TestFormatText:
    def test_basic_line(self):
        entry = make_entry(4, "event", message="Starting ChromeDriver")
        assert format_text(entry) == "     5 [INFO]    Starting ChromeDriver"

    def test_timestamp_and_marker(self):
        entry = make_entry(0, "command", timestamp="[01-01-2024 12:00:00.000000]",
                           message="COMMAND InitSession")
        line = format_text(entry)
        assert line == "     1 [01-01-2024 12:00:00.000000] [INFO] -> COMMAND InitSession"

    def test_gutter_included(self):
        cmd, _, res = _pair()
        assert format_text(cmd, width=1) == "     1 [INFO] ┌ -> command 0"
        assert format_text(res, width=1) == "     3 [INFO] └ <- response 2"

    def test_summary_replaces_message(self):
        entry = make_entry(0, "response", method="GetWindows", payload={"value": ["A"]},
                           message="RESPONSE GetWindows")
        assert format_text(entry).endswith("<- Windows: A")
        assert format_text(entry, summaries=False).endswith("<- RESPONSE GetWindows")


class TestFormatColor:
    def test_contains_ansi_codes(self):
        line = format_color(make_entry(0, "command", level="DEBUG"))
        assert "\033[36mDEBUG" in line
        assert "\033[34m->" in line
        assert RESET in line

    def test_unknown_level_uncolored(self):
        line = format_color(make_entry(0, level="TRACE"))
        assert "[TRACE\033[0m]" in line


class TestFormatJson:
    def test_single_line_json(self):
        cmd, _, _ = _pair()
        line = format_json(cmd)
        assert "\n" not in line
        data = json.loads(line)
        assert data["isCommand"] is True
        assert data["relatedIds"] == [2]
        assert data["laneConfig"]["startLane"] == 0


class TestGetFormatter:
    def test_default(self):
        assert get_formatter() is format_text

    def test_color(self):
        assert get_formatter("text", color=True) is format_color

    def test_json_ignores_color(self):
        assert get_formatter("json", color=True) is format_json
