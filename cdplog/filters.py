"""Filter predicates for parsed entries: free-text query, level and kind."""

import re
from typing import Callable

from cdplog.models import LogEntry

JUMP_TO_LINE_RE = re.compile(r"^:(\d+)$")


def filter_by_query(entry: LogEntry, query: str) -> bool:
    """True if query appears in the message, a tag or the method (case-insensitive)."""
    q = query.lower()
    if q in entry.message.lower():
        return True
    if any(q in tag.lower() for tag in entry.tags):
        return True
    return bool(entry.method) and q in entry.method.lower()


def filter_by_level(entry: LogEntry, level: str) -> bool:
    return entry.level.upper() == level.upper()


def filter_by_kind(entry: LogEntry, kind: str) -> bool:
    """True if entry is a 'command', 'response' or 'event'."""
    return entry.kind == kind


def jump_target(query: str | None) -> int | None:
    """Line number requested by a ``:N`` query, else None."""
    m = JUMP_TO_LINE_RE.match((query or "").strip())
    return int(m.group(1)) if m else None


def filter_entries(entries: list[LogEntry], query: str) -> list[LogEntry]:
    """Apply a free-text query.

    A blank query keeps everything, and so does a ``:N`` jump-to-line query,
    which moves the view instead of filtering it.
    """
    if not query.strip():
        return entries
    if jump_target(query) is not None:
        return entries
    return [e for e in entries if filter_by_query(e, query)]


def find_line_index(entries: list[LogEntry], line_number: int) -> int:
    """Index of the entry at *line_number*, else the closest one before it.

    Entries must be ordered by line number. Returns -1 if every entry starts
    after the requested line.
    """
    low, high = 0, len(entries) - 1
    best = -1
    while low <= high:
        mid = (low + high) // 2
        value = entries[mid].line_number
        if value == line_number:
            return mid
        if value < line_number:
            best = mid
            low = mid + 1
        else:
            high = mid - 1
    return best


def build_filter_chain(args) -> Callable[[LogEntry], bool]:
    """Combine the active filters from parsed args into a single callable."""
    predicates = []

    query = getattr(args, "search", None)
    if query and query.strip() and jump_target(query) is None:
        predicates.append(lambda entry, q=query: filter_by_query(entry, q))

    if getattr(args, "level", None):
        level = args.level
        predicates.append(lambda entry, l=level: filter_by_level(entry, l))

    if getattr(args, "type", None):
        kind = args.type
        predicates.append(lambda entry, k=kind: filter_by_kind(entry, k))

    if not predicates:
        return lambda entry: True

    def combined(entry: LogEntry) -> bool:
        return all(p(entry) for p in predicates)

    return combined
