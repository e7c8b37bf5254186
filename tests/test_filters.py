"""Tests for cdplog/filters.py"""

from argparse import Namespace

from cdplog.filters import (
    build_filter_chain,
    filter_by_kind,
    filter_by_level,
    filter_by_query,
    filter_entries,
    find_line_index,
    jump_target,
)
from conftest import make_entry


def _entries():
    return [
        make_entry(0, "command", message="DevTools WebSocket Command: Page.navigate",
                   method="Page.navigate", level="DEBUG"),
        make_entry(1, "event", message="Starting ChromeDriver", tags=["ABCDEF1234"]),
        make_entry(2, "response", message="Response", method="Runtime.evaluate"),
    ]


class TestFilterByQuery:
    def test_matches_message_case_insensitive(self):
        assert filter_by_query(_entries()[1], "chromedriver")

    def test_matches_tag(self):
        assert filter_by_query(_entries()[1], "abcdef")

    def test_matches_method(self):
        assert filter_by_query(_entries()[2], "runtime.EVAL")

    def test_no_match(self):
        assert not filter_by_query(_entries()[2], "navigate")


class TestFilterEntries:
    def test_blank_query_keeps_all(self):
        entries = _entries()
        assert filter_entries(entries, "   ") == entries

    def test_jump_to_line_query_keeps_all(self):
        entries = _entries()
        assert filter_entries(entries, ":42") == entries

    def test_filters(self):
        result = filter_entries(_entries(), "navigate")
        assert [e.id for e in result] == [0]


class TestFindLineIndex:
    def _lines(self, *numbers):
        entries = []
        for i, n in enumerate(numbers):
            entry = make_entry(i)
            entry.line_number = n
            entries.append(entry)
        return entries

    def test_exact_match(self):
        assert find_line_index(self._lines(1, 4, 9, 12), 9) == 2

    def test_closest_before(self):
        assert find_line_index(self._lines(1, 4, 9, 12), 10) == 2

    def test_past_the_end(self):
        assert find_line_index(self._lines(1, 4, 9, 12), 100) == 3

    def test_before_first_entry(self):
        assert find_line_index(self._lines(5, 6), 2) == -1

    def test_empty(self):
        assert find_line_index([], 3) == -1


class TestSimplePredicates:
    def test_level(self):
        assert filter_by_level(_entries()[0], "debug")
        assert not filter_by_level(_entries()[1], "DEBUG")

    def test_kind(self):
        command, event, response = _entries()
        assert filter_by_kind(command, "command")
        assert filter_by_kind(event, "event")
        assert filter_by_kind(response, "response")
        assert not filter_by_kind(response, "command")


class TestBuildFilterChain:
    def test_no_filters_keeps_everything(self):
        keep = build_filter_chain(Namespace(search=None, level=None, type=None))
        assert all(keep(e) for e in _entries())

    def test_filters_are_anded(self):
        keep = build_filter_chain(Namespace(search="page", level="DEBUG", type="command"))
        assert [e.id for e in _entries() if keep(e)] == [0]

        keep = build_filter_chain(Namespace(search="page", level="INFO", type=None))
        assert [e.id for e in _entries() if keep(e)] == []

    def test_jump_query_does_not_filter(self):
        keep = build_filter_chain(Namespace(search=":2", level=None, type=None))
        assert all(keep(e) for e in _entries())

    def test_blank_search_does_not_filter(self):
        keep = build_filter_chain(Namespace(search="  ", level=None, type=None))
        assert all(keep(e) for e in _entries())


class TestJumpTarget:
    def test_line_number(self):
        assert jump_target(":120") == 120
        assert jump_target(" :7 ") == 7

    def test_not_a_jump(self):
        assert jump_target("navigate") is None
        assert jump_target(":abc") is None
        assert jump_target("") is None
        assert jump_target(None) is None
