"""Lenient JSON helpers shared by the dialect parsers."""

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)


def try_parse_json(text: str) -> Any:
    """Parse *text* as JSON, returning None when it is not valid JSON."""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError, ValueError, RecursionError) as e:
        logger.debug("Discarding malformed JSON fragment: %s", e)
        return None


def is_truthy(value: Any) -> bool:
    """Truthiness of a decoded JSON value as protocol tooling treats it.

    Objects and arrays count as present even when empty; scalars follow the
    usual rules (0, "", false and null are absent).
    """
    if isinstance(value, (dict, list)):
        return True
    return bool(value)


def native_id(value: Any) -> int | None:
    """Return *value* as a protocol id.

    Plain integers and strings of ASCII digits (``"5"``) are ids; anything
    else, bools included, is not.
    """
    if isinstance(value, str) and value.isascii() and value.isdigit():
        try:
            return int(value)
        except ValueError:
            return None
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def compact_json(value: Any) -> str:
    if value is None:
        return ""
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    except RecursionError:
        logger.debug("Value too deeply nested to re-encode")
        return ""
