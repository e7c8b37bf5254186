"""Command/response correlation and lane layout, shared by every dialect.

Pass 1 links each response to its command:
  * positive ``command_id``  -> pending-command map keyed by that id
  * WebDriver entries and id-less commands -> one LIFO stack, with
    synthesized negative ids (-1, -2, ...) for the commands

Pass 2 treats every linked command/response pair as an interval and gives it
the lowest free lane while it is open, snapshotting the open lanes on every
row into ``LaneConfig``.

Known limitations:
  * a second command reusing a live id replaces the first in the pending map,
    so the first command never gets its response
  * the stack assumes id-less traffic is strictly nested; interleaved
    id-less commands pair up in LIFO order regardless of content
"""

import itertools
import logging

from cdplog.models import LaneConfig, LogEntry

logger = logging.getLogger(__name__)


def _link(command: LogEntry, response: LogEntry) -> None:
    response.related_ids.append(command.id)
    command.related_ids.append(response.id)


def _uses_stack(entry: LogEntry) -> bool:
    if entry.log_type == "WebDriver":
        return True
    has_native_id = entry.command_id is not None and entry.command_id >= 0
    return entry.is_command and not has_native_id


def correlate(entries: list[LogEntry]) -> list[LogEntry]:
    """Fill ``related_ids`` (and synthesized ``command_id``s) in place."""
    pending: dict[int, int] = {}  # native command id -> entry index
    stack: list[int] = []
    synthetic_ids = itertools.count(-1, -1)

    for entry in entries:
        entry.related_ids = []

    for i, entry in enumerate(entries):
        if entry.command_id is not None and entry.command_id > 0:
            if entry.is_command:
                if entry.command_id in pending:
                    logger.debug(
                        "Command id %d reused before its response (entry %d)",
                        entry.command_id, entry.id,
                    )
                pending[entry.command_id] = i
            elif entry.is_response:
                cmd_index = pending.pop(entry.command_id, None)
                if cmd_index is not None:
                    _link(entries[cmd_index], entry)
        elif _uses_stack(entry):
            if entry.is_command:
                entry.command_id = next(synthetic_ids)
                stack.append(i)
            elif entry.is_response and stack:
                command = entries[stack.pop()]
                entry.command_id = command.command_id
                _link(command, entry)

    return entries


def assign_lanes(entries: list[LogEntry]) -> list[LogEntry]:
    """Attach a ``LaneConfig`` snapshot to every entry."""
    command_to_lane: dict[int, int] = {}  # command entry id -> lane
    lane_to_command: dict[int, int] = {}  # lane -> command id
    lane_to_entry_index: dict[int, int] = {}  # lane -> entry index
    occupied: set[int] = set()

    def free_lane() -> int:
        lane = 0
        while lane in occupied:
            lane += 1
        return lane

    for i, entry in enumerate(entries):
        start_lane = None
        end_lane = None
        primary = entry.related_ids[0] if entry.related_ids else None

        if entry.is_command and primary is not None and entry.command_id is not None:
            lane = free_lane()
            occupied.add(lane)
            command_to_lane[entry.id] = lane
            lane_to_command[lane] = entry.command_id
            lane_to_entry_index[lane] = i
            start_lane = lane
        elif entry.is_response and primary is not None:
            end_lane = command_to_lane.get(primary)

        active = sorted(occupied)
        entry.lane_config = LaneConfig(
            active_lanes=active,
            lane_details={lane: lane_to_command[lane] for lane in active if lane in lane_to_command},
            lane_entry_indices={
                lane: lane_to_entry_index[lane] for lane in active if lane in lane_to_entry_index
            },
            start_lane=start_lane,
            end_lane=end_lane,
        )

        if end_lane is not None:
            occupied.discard(end_lane)
            command_to_lane.pop(primary, None)
            lane_to_command.pop(end_lane, None)
            lane_to_entry_index.pop(end_lane, None)

    return entries


def post_process(entries: list[LogEntry]) -> list[LogEntry]:
    """Correlate then lay out lanes; mutates and returns *entries*."""
    correlate(entries)
    assign_lanes(entries)
    return entries
