"""DevTools Protocol Monitor export parser.

The export is one JSON array. Records that carry an ``id`` hold a command and
its outcome together and are split into a command entry and a response entry;
records without one are events.
"""

import itertools
import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Iterator

from cdplog.correlator import post_process
from cdplog.metadata import find_metadata
from cdplog.models import LogEntry
from cdplog.payloads import compact_json, is_truthy, native_id, try_parse_json

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _number(value) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        value = float(value)
    except OverflowError:
        return None
    if not math.isfinite(value):
        return None
    return value if value else None


def format_timestamp(ms: float) -> str:
    """Render epoch milliseconds as ``[MM-DD-YYYY HH:MM:SS.mmm]`` (UTC).

    Fractional milliseconds are truncated. Returns "" for out-of-range values.
    """
    # epsilon absorbs float error such as 1700000.123 * 1000 -> ...122.9999998
    try:
        whole_ms = int(ms + 1e-6) if ms >= 0 else -int(-ms + 1e-6)
        dt = _EPOCH + timedelta(milliseconds=whole_ms)
    except (OverflowError, ValueError):
        logger.debug("Timestamp %r out of range", ms)
        return ""
    return dt.strftime("[%m-%d-%Y %H:%M:%S.") + f"{dt.microsecond // 1000:03d}]"


def _record_entries(record: dict, ids: Iterator[int]) -> list[LogEntry]:
    method = record.get("method")
    if not isinstance(method, str):
        method = None
    wall_time = _number(record.get("wallTime"))
    elapsed = _number(record.get("elapsedTime"))
    timestamp = format_timestamp(wall_time * 1000) if wall_time else ""

    seed_sessions = [record["sessionId"]] if isinstance(record.get("sessionId"), str) else []
    seed_targets = [record["target"]] if isinstance(record.get("target"), str) else []

    def build(payload, **kwargs) -> LogEntry:
        target_ids, session_ids = find_metadata(payload, seed_targets, seed_sessions)
        return LogEntry(
            id=next(ids),
            line_number=0,
            level="INFO",
            log_type="DevTools",
            method=method,
            payload=payload,
            target_ids=target_ids,
            session_ids=session_ids,
            **kwargs,
        )

    if "id" not in record:
        params = record.get("params")
        payload = params if is_truthy(params) else record.get("result")
        return [build(payload, timestamp=timestamp, message=method or "", raw=compact_json(record))]

    command_id = native_id(record["id"])
    command = build(
        record.get("params"),
        timestamp=timestamp,
        message=method or "",
        is_command=True,
        command_id=command_id,
        raw=compact_json(record),
    )

    response_timestamp = timestamp
    if wall_time and elapsed:
        response_timestamp = format_timestamp(wall_time * 1000 + elapsed)

    result = record.get("result")
    error = record.get("error")
    is_error = is_truthy(error)
    response = build(
        error if is_error else result,
        timestamp=response_timestamp,
        message="Error" if is_error else "Response",
        is_response=True,
        command_id=command_id,
        raw=compact_json(result if is_truthy(result) else error),
    )
    return [command, response]


def parse(text: str) -> list[LogEntry]:
    """Parse a Protocol Monitor JSON export into correlated entries.

    Returns an empty list when the text is not a JSON array.
    """
    records = try_parse_json(text)
    if not isinstance(records, list):
        logger.info("Protocol monitor input is not a JSON array; no entries produced")
        return []

    entries: list[LogEntry] = []
    ids = itertools.count()
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            logger.debug("Skipping protocol monitor record %d: not an object", index)
            continue
        entries.extend(_record_entries(record, ids))

    return post_process(entries)
