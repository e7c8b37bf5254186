"""Puppeteer protocol transcript parser (DEBUG=puppeteer:protocol:* output).

A block opens on a SEND/RECV line whose payload starts with '[' and runs
until the next opener:

    puppeteer:protocol:SEND ► [ '{"method":"Browser.getVersion","id":1}' ] +0ms
    puppeteer:protocol:RECV ◀ [
    puppeteer:protocol:RECV ◀   '{"id":1,"result":{...}}'
    puppeteer:protocol:RECV ◀ ] +0ms
"""

import json
import logging
import re
from dataclasses import dataclass, field

from cdplog.correlator import post_process
from cdplog.metadata import find_metadata
from cdplog.models import LogEntry
from cdplog.payloads import is_truthy, native_id, try_parse_json

logger = logging.getLogger(__name__)

SEND_MARKER = "puppeteer:protocol:SEND"
RECV_MARKER = "puppeteer:protocol:RECV"

SEND_RE = re.compile(r"puppeteer:protocol:SEND ► \[")
RECV_RE = re.compile(r"puppeteer:protocol:RECV ◀ \[")
PREFIX_RE = re.compile(r"^.*?puppeteer:protocol:(?:SEND|RECV) [►◀]\s*")


@dataclass
class _Block:
    line_number: int
    is_send: bool
    raw_lines: list[str] = field(default_factory=list)


def _unwrap_literal(inner: str) -> str:
    """Strip the quoting the debug module puts around the JSON text."""
    if inner.startswith("'") and inner.endswith("'"):
        return inner[1:-1].replace("\\'", "'")
    if inner.startswith('"') and inner.endswith('"'):
        try:
            decoded = json.loads(inner)
        except (json.JSONDecodeError, RecursionError):
            return inner
        if isinstance(decoded, str):
            return decoded
    return inner


def extract_payload(raw_lines: list[str]):
    """Rebuild and parse the JSON message carried by a block, or None."""
    full_text = "\n".join(PREFIX_RE.sub("", line, count=1) for line in raw_lines)
    start = full_text.find("[")
    end = full_text.rfind("]")
    if start == -1 or end == -1 or end <= start:
        return None
    inner = _unwrap_literal(full_text[start + 1: end].strip())
    return try_parse_json(inner)


def _finalize(block: _Block, entry_id: int) -> LogEntry | None:
    payload = extract_payload(block.raw_lines)
    if not is_truthy(payload):
        logger.debug("Skipping transcript block at line %d: no payload", block.line_number)
        return None

    fields = payload if isinstance(payload, dict) else {}
    method = fields.get("method") if is_truthy(fields.get("method")) else None
    command_id = native_id(fields.get("id")) if is_truthy(fields.get("id")) else None

    # direction alone decides; a SEND carrying result or error is still a command
    is_command = block.is_send
    is_response = not is_command and ("result" in fields or "error" in fields)

    target_ids, session_ids = find_metadata(payload)
    return LogEntry(
        id=entry_id,
        line_number=block.line_number,
        timestamp="",
        level="INFO",
        message=method or ("Response" if is_response else "Event"),
        payload=payload,
        target_ids=target_ids,
        session_ids=session_ids,
        command_id=command_id,
        method=method,
        is_command=is_command,
        is_response=is_response,
        log_type="DevTools",
        raw="\n".join(block.raw_lines),
    )


def parse(text: str) -> list[LogEntry]:
    """Parse a Puppeteer protocol transcript into correlated entries."""
    entries: list[LogEntry] = []
    current: _Block | None = None

    def flush(block: _Block) -> None:
        entry = _finalize(block, len(entries))
        if entry is not None:
            entries.append(entry)

    for i, line in enumerate(text.split("\n")):
        is_send = bool(SEND_RE.search(line))
        if is_send or RECV_RE.search(line):
            if current is not None:
                flush(current)
            current = _Block(line_number=i + 1, is_send=is_send, raw_lines=[line])
        elif current is not None:
            current.raw_lines.append(line)

    if current is not None:
        flush(current)

    return post_process(entries)
