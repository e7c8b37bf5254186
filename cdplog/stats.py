"""Statistics over parsed entries: kinds, log types, correlation coverage and lane pressure."""

import json
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

from cdplog.models import LogEntry

TOP_METHODS = 10


@dataclass
class LogStats:
    total_entries: int = 0
    dialect: str = ""
    log_type_counts: dict[str, int] = field(default_factory=dict)
    commands: int = 0
    responses: int = 0
    events: int = 0
    correlated_pairs: int = 0
    orphan_commands: int = 0
    orphan_responses: int = 0
    peak_lanes: int = 0
    top_methods: dict[str, int] = field(default_factory=dict)


def compute_stats(entries: Iterable[LogEntry], dialect: str = "") -> LogStats:
    """Consume an entry stream and produce aggregated statistics."""
    stats = LogStats(dialect=dialect)
    type_counter = Counter()
    method_counter = Counter()

    for entry in entries:
        stats.total_entries += 1
        type_counter[entry.log_type] += 1
        if entry.method:
            method_counter[entry.method] += 1

        if entry.is_command:
            stats.commands += 1
            if entry.related_ids:
                stats.correlated_pairs += 1
            else:
                stats.orphan_commands += 1
        elif entry.is_response:
            stats.responses += 1
            if not entry.related_ids:
                stats.orphan_responses += 1
        else:
            stats.events += 1

        if entry.lane_config is not None:
            stats.peak_lanes = max(stats.peak_lanes, len(entry.lane_config.active_lanes))

    stats.log_type_counts = dict(type_counter.most_common())
    stats.top_methods = dict(method_counter.most_common(TOP_METHODS))
    return stats


def format_stats_text(stats: LogStats) -> str:
    """Human-readable stats summary."""
    lines = []
    lines.append(f"Total entries: {stats.total_entries}")
    if stats.dialect:
        lines.append(f"Dialect: {stats.dialect}")
    lines.append("")

    lines.append("Log types:")
    for log_type, count in stats.log_type_counts.items():
        lines.append(f"  {log_type:10s} {count}")
    lines.append("")

    lines.append(f"Commands:  {stats.commands}")
    lines.append(f"Responses: {stats.responses}")
    lines.append(f"Events:    {stats.events}")
    lines.append("")

    lines.append(f"Correlated pairs: {stats.correlated_pairs}")
    lines.append(f"Orphan commands:  {stats.orphan_commands}")
    lines.append(f"Orphan responses: {stats.orphan_responses}")
    lines.append(f"Peak open lanes:  {stats.peak_lanes}")
    lines.append("")

    if stats.top_methods:
        lines.append("Top methods:")
        for method, count in stats.top_methods.items():
            lines.append(f"  {count:6d}  {method}")
    else:
        lines.append("No methods found.")

    return "\n".join(lines)


def format_stats_json(stats: LogStats) -> str:
    """JSON stats output."""
    return json.dumps({
        "total_entries": stats.total_entries,
        "dialect": stats.dialect,
        "log_type_counts": stats.log_type_counts,
        "commands": stats.commands,
        "responses": stats.responses,
        "events": stats.events,
        "correlated_pairs": stats.correlated_pairs,
        "orphan_commands": stats.orphan_commands,
        "orphan_responses": stats.orphan_responses,
        "peak_lanes": stats.peak_lanes,
        "top_methods": stats.top_methods,
    }, indent=2)
