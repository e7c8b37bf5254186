"""Collects target and session identifiers from nested protocol payloads."""

from typing import Any

from cdplog.models import dedupe

TARGET_FIELD = "targetId"
SESSION_FIELD = "sessionId"

# Payloads come from JSON and are acyclic; the bound only caps pathological nesting.
MAX_DEPTH = 64


def _walk(obj: Any, targets: list[str], sessions: list[str], depth: int) -> None:
    if depth > MAX_DEPTH:
        return
    if isinstance(obj, dict):
        target = obj.get(TARGET_FIELD)
        if isinstance(target, str) and target:
            targets.append(target)
        session = obj.get(SESSION_FIELD)
        if isinstance(session, str) and session:
            sessions.append(session)
        children = obj.values()
    elif isinstance(obj, list):
        children = obj
    else:
        return

    for child in children:
        if isinstance(child, (dict, list)):
            _walk(child, targets, sessions, depth + 1)


def find_metadata(
    payload: Any,
    target_ids: list[str] | None = None,
    session_ids: list[str] | None = None,
) -> tuple[list[str], list[str]]:
    """Return (target_ids, session_ids) found anywhere inside *payload*.

    Values already present in the seed lists keep their position; new values
    are appended in the order they are first met.
    """
    targets = list(target_ids or [])
    sessions = list(session_ids or [])
    _walk(payload, targets, sessions, 0)
    return dedupe(targets), dedupe(sessions)
