"""ChromeDriver verbose log parser.

Entry header (one per entry):
    [01-01-2024 12:00:00.001000][DEBUG]: DevTools WebSocket Command: ...
Any line that does not match the header continues the current entry, which is
how multi-line JSON payloads follow a header line.
"""

import re
from dataclasses import dataclass, field

from cdplog.correlator import post_process
from cdplog.metadata import find_metadata
from cdplog.models import LogEntry, dedupe
from cdplog.payloads import is_truthy, try_parse_json

LINE_PATTERN = re.compile(
    r"^\[(\d{2}-\d{2}-\d{4} \d{2}:\d{2}:\d{2}\.\d{6})\]\[(\w+)\]: (.+)$"
)

TARGET_TAG_RE = re.compile(r"\[([a-f0-9]{32})\]")
SESSION_RE = re.compile(r"\(session_id=([a-zA-Z0-9]+)\)")
COMMAND_ID_RE = re.compile(r"\(id=(\d+)\)")
WEBDRIVER_RE = re.compile(r"(?:^|\s)(COMMAND|RESPONSE)\s+([a-zA-Z0-9_.]+)")
METHOD_RE = re.compile(r"^([A-Za-z0-9_.]+)")

# Brackets that frame the header rather than open a JSON array
_TIMESTAMP_BRACKET_RE = re.compile(r"\d")
_LEVEL_BRACKET_RE = re.compile(r"[A-Z]+\]")
_TARGET_BRACKET_RE = re.compile(r"[a-f0-9]{32}\]")

DEVTOOLS_COMMAND = "DevTools WebSocket Command"
DEVTOOLS_RESPONSE = "DevTools WebSocket Response"
DEVTOOLS_EVENT = "DevTools WebSocket Event"


@dataclass
class _PendingEntry:
    line_number: int
    timestamp: str
    level: str
    message: str
    raw_lines: list[str] = field(default_factory=list)


def _is_framing_bracket(text: str, idx: int) -> bool:
    rest = text[idx + 1: idx + 50]
    return bool(
        _TIMESTAMP_BRACKET_RE.match(rest)
        or _LEVEL_BRACKET_RE.match(rest)
        or _TARGET_BRACKET_RE.match(rest)
    )


def find_json_start(text: str) -> int:
    """Index where an embedded JSON value starts, or -1.

    The first '{' competes with the first '[' that is not part of the
    timestamp, level or 32-hex target tag framing.
    """
    brace = text.find("{")
    bracket = text.find("[")
    while bracket != -1 and _is_framing_bracket(text, bracket):
        bracket = text.find("[", bracket + 1)

    if brace == -1:
        return bracket
    if bracket == -1:
        return brace
    return min(brace, bracket)


def extract_payload(text: str):
    """Parse the JSON embedded in an entry's raw text, or return None."""
    start = find_json_start(text)
    if start == -1:
        return None
    candidate = text[start:]
    end = max(candidate.rfind("}"), candidate.rfind("]"))
    if end != -1:
        candidate = candidate[: end + 1]
    return try_parse_json(candidate)


def _devtools_method(message: str) -> str | None:
    parts = message.split(":")
    if len(parts) < 2:
        return None
    m = METHOD_RE.match(parts[1].strip())
    return m.group(1) if m else None


def _finalize(pending: _PendingEntry, entry_id: int) -> LogEntry:
    full_raw = "\n".join(pending.raw_lines)
    payload = extract_payload(full_raw)
    msg = pending.message

    target_ids = []
    tag_match = TARGET_TAG_RE.search(msg)
    if tag_match:
        target_ids.append(tag_match.group(1))

    session_ids = []
    session_match = SESSION_RE.search(msg)
    if session_match:
        session_ids.append(session_match.group(1))

    if is_truthy(payload):
        target_ids, session_ids = find_metadata(payload, target_ids, session_ids)

    is_command = False
    is_response = False
    method = None
    log_type = "Other"

    if DEVTOOLS_COMMAND in msg:
        is_command = True
        log_type = "DevTools"
    elif DEVTOOLS_RESPONSE in msg:
        is_response = True
        log_type = "DevTools"
    elif DEVTOOLS_EVENT in msg:
        log_type = "DevTools"
    else:
        wd = WEBDRIVER_RE.search(msg)
        if wd:
            is_command = wd.group(1) == "COMMAND"
            is_response = not is_command
            log_type = "WebDriver"
            method = wd.group(2)

    id_match = COMMAND_ID_RE.search(msg)
    command_id = int(id_match.group(1)) if id_match else None

    if log_type == "DevTools":
        method = _devtools_method(msg)

    target_ids = dedupe(target_ids)
    session_ids = dedupe(session_ids)
    return LogEntry(
        id=entry_id,
        line_number=pending.line_number,
        timestamp=pending.timestamp,
        level=pending.level,
        message=msg,
        payload=payload,
        target_ids=target_ids,
        session_ids=session_ids,
        command_id=command_id,
        method=method,
        is_command=is_command,
        is_response=is_response,
        log_type=log_type,
        raw=full_raw,
        tags=dedupe(target_ids + session_ids),
    )


def parse(text: str) -> list[LogEntry]:
    """Parse a ChromeDriver log into correlated entries."""
    entries: list[LogEntry] = []
    current: _PendingEntry | None = None

    for i, line in enumerate(text.split("\n")):
        line = line.rstrip("\r")
        m = LINE_PATTERN.match(line)
        if m:
            if current is not None:
                entries.append(_finalize(current, len(entries)))
            timestamp, level, rest = m.groups()
            current = _PendingEntry(
                line_number=i + 1,
                timestamp=timestamp,
                level=level,
                message=rest,
                raw_lines=[line],
            )
        elif current is not None:
            current.raw_lines.append(line)

    if current is not None:
        entries.append(_finalize(current, len(entries)))

    return post_process(entries)
