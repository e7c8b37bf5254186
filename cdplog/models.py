"""Normalized log entry dataclass. Every dialect maps to this schema."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class LaneConfig:
    active_lanes: list[int] = field(default_factory=list)   # ascending
    lane_details: dict[int, int] = field(default_factory=dict)  # lane -> command id
    lane_entry_indices: dict[int, int] = field(default_factory=dict)  # lane -> opening entry index
    start_lane: int | None = None
    end_lane: int | None = None


@dataclass
class LogEntry:
    id: int
    line_number: int
    timestamp: str
    level: str
    message: str
    payload: Any = None
    target_ids: list[str] = field(default_factory=list)
    session_ids: list[str] = field(default_factory=list)
    command_id: int | None = None
    related_ids: list[int] = field(default_factory=list)
    method: str | None = None
    is_command: bool = False
    is_response: bool = False
    log_type: str = "Other"  # "DevTools", "WebDriver", "Other"
    raw: str = ""
    tags: list[str] = field(default_factory=list)
    lane_config: LaneConfig | None = None

    @property
    def kind(self) -> str:
        if self.is_command:
            return "command"
        if self.is_response:
            return "response"
        return "event"


def dedupe(values: list[str]) -> list[str]:
    """Drop repeats, keeping the first occurrence of each value."""
    return list(dict.fromkeys(values))


def lane_config_to_dict(config: LaneConfig) -> dict[str, Any]:
    result: dict[str, Any] = {
        "activeLanes": list(config.active_lanes),
        "laneDetails": dict(config.lane_details),
        "laneEntryIndices": dict(config.lane_entry_indices),
    }
    if config.start_lane is not None:
        result["startLane"] = config.start_lane
    if config.end_lane is not None:
        result["endLane"] = config.end_lane
    return result


def entry_to_dict(entry: LogEntry) -> dict[str, Any]:
    """Convert a LogEntry to the camelCase wire shape, dropping absent values."""
    result: dict[str, Any] = {
        "id": entry.id,
        "lineNumber": entry.line_number,
        "timestamp": entry.timestamp,
        "level": entry.level,
        "message": entry.message,
        "payload": entry.payload,
        "targetIds": entry.target_ids,
        "sessionIds": entry.session_ids,
        "commandId": entry.command_id,
        "relatedIds": entry.related_ids or None,
        "method": entry.method,
        "isCommand": entry.is_command,
        "isResponse": entry.is_response,
        "logType": entry.log_type,
        "raw": entry.raw,
        "tags": entry.tags,
    }
    if entry.lane_config is not None:
        result["laneConfig"] = lane_config_to_dict(entry.lane_config)
    return {k: v for k, v in result.items() if v is not None}
