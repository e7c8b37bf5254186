"""Web Platform Tests protocol dump parser, one ``Protocol message: {...}`` per line."""

import logging

from cdplog.correlator import post_process
from cdplog.metadata import find_metadata
from cdplog.models import LogEntry
from cdplog.payloads import is_truthy, native_id, try_parse_json

logger = logging.getLogger(__name__)

LINE_PREFIX = "Protocol message: "


def parse_line(line: str, line_number: int, entry_id: int) -> LogEntry | None:
    """Parse one prefixed line. Returns None for other lines or bad JSON."""
    if not line.startswith(LINE_PREFIX):
        return None
    json_part = line[len(LINE_PREFIX):]
    payload = try_parse_json(json_part)
    if payload is None:
        logger.debug("Skipping line %d: unparseable protocol message", line_number)
        return None

    fields = payload if isinstance(payload, dict) else {}
    method = fields.get("method")
    has_id = is_truthy(fields.get("id"))
    is_command = is_truthy(method) and has_id
    is_response = has_id and (is_truthy(fields.get("result")) or is_truthy(fields.get("error")))

    target_ids, session_ids = find_metadata(payload)
    return LogEntry(
        id=entry_id,
        line_number=line_number,
        timestamp="",
        level="INFO",
        message=json_part,
        payload=payload,
        target_ids=target_ids,
        session_ids=session_ids,
        command_id=native_id(fields.get("id")),
        method=method if isinstance(method, str) else None,
        is_command=is_command,
        is_response=is_response,
        log_type="DevTools",
        raw=line,
    )


def parse(text: str) -> list[LogEntry]:
    """Parse a WPT protocol dump into correlated entries."""
    entries: list[LogEntry] = []
    for i, line in enumerate(text.split("\n")):
        entry = parse_line(line.rstrip("\r"), i + 1, len(entries))
        if entry is not None:
            entries.append(entry)
    return post_process(entries)
