"""Whole-file reading and glob expansion for the CLI."""

import glob
import os


def read_text(filepath: str) -> str:
    """Return the whole file as text. Undecodable bytes are replaced."""
    with open(filepath, "r", encoding="utf-8", errors="replace", newline="") as f:
        return f.read()


def expand_paths(raw_paths: list[str]) -> list[str]:
    """Expand globs, deduplicate, and validate that files exist.

    Raises FileNotFoundError if a non-glob path doesn't exist.
    Raises FileNotFoundError if expansion produces zero files.
    """
    expanded = []
    seen = set()

    for raw in raw_paths:
        if any(c in raw for c in ("*", "?", "[")):
            matches = sorted(glob.glob(raw))
            for m in matches:
                if m not in seen and os.path.isfile(m):
                    seen.add(m)
                    expanded.append(m)
        else:
            if not os.path.isfile(raw):
                raise FileNotFoundError(f"File not found: {raw}")
            if raw not in seen:
                seen.add(raw)
                expanded.append(raw)

    if not expanded:
        raise FileNotFoundError("No log files found matching the given paths")

    return expanded
