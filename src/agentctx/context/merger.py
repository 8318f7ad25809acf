"""In-place merge of a Summary into an existing context file.

Only two regions are touched:

    ## Active Technologies
    - <tech stack> (<feature>)      appended once, never duplicated

    ## Recent Changes
    - <feature>: Added <tech stack> newest first, bounded by `retention`

The new change entry takes the place of the first prior entry, so blank
lines between the heading and the list are left alone.

A region runs from its exact heading line to the next ``#``/``##``
heading or end of file. Every other line is copied verbatim except for a
``Last updated: YYYY-MM-DD`` stamp, whose date is refreshed.

The line-level work is done by merge_lines(), which performs no I/O.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path

from agentctx import ACTIVE_TECH_HEADING, RECENT_CHANGES_HEADING
from agentctx.context.generator import Summary, change_entry, tech_entries
from agentctx.context.writer import write_atomic

DEFAULT_RETENTION = 3

_HEADING_RE = re.compile(r"^#{1,2}\s")
_STAMP_RE = re.compile(r"(Last updated(?:\*\*)?:(?:\*\*)?\s*)\d{4}-\d{2}-\d{2}")
_ENTRY_PREFIX = "- "


class Region(Enum):
    OUTSIDE = "outside"
    ACTIVE_TECH = "active_tech"
    RECENT_CHANGES = "recent_changes"


@dataclass
class MergeResult:
    """Outcome of merging a Summary into one file's lines."""

    lines: list[str]
    has_active_tech: bool = False
    has_recent_changes: bool = False
    tech_added: list[str] = field(default_factory=list)
    change_added: str | None = None
    changes_dropped: int = 0
    warnings: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(self.lines)


def _content(line: str) -> str:
    return line.rstrip("\r\n")


def _detect_newline(lines: list[str]) -> str:
    for line in lines:
        if line.endswith("\r\n"):
            return "\r\n"
        if line.endswith("\n"):
            return "\n"
    return "\n"


def _terminated(line: str, newline: str) -> str:
    return line if line.endswith(("\n", "\r")) else line + newline


def refresh_stamp(line: str, today: date) -> str:
    """Rewrite the date following a 'Last updated' label, if present."""
    return _STAMP_RE.sub(lambda m: m.group(1) + today.isoformat(), line)


def _flush_region(region_lines: list[str], pending: list[str], newline: str) -> list[str]:
    """Insert pending entries at the first blank line that follows region content.

    Blank lines directly under the heading are skipped. Without such a blank
    line the entries go after the last non-blank line of the region.
    """
    if not pending:
        return region_lines
    insert_at = 0
    for i, line in enumerate(region_lines):
        if _content(line).strip():
            insert_at = i + 1
        elif insert_at:
            break
    body = list(region_lines)
    if insert_at:
        body[insert_at - 1] = _terminated(body[insert_at - 1], newline)
    return body[:insert_at] + [entry + newline for entry in pending] + body[insert_at:]


def merge_lines(
    lines: list[str],
    summary: Summary,
    feature_id: str,
    today: date | None = None,
    retention: int = DEFAULT_RETENTION,
) -> MergeResult:
    """Merge a Summary into a file's lines (with line endings kept).

    Args:
        lines: Existing file content, as from str.splitlines(keepends=True).
        summary: Derived plan summary.
        feature_id: Feature the new entries are attributed to.
        today: Date for the 'Last updated' stamp (default: today).
        retention: Maximum Recent Changes entries after a new one is added.

    Returns:
        MergeResult with the rewritten lines.
    """
    if retention < 1:
        raise ValueError(f"retention must be at least 1, got {retention}")
    day = today or date.today()
    newline = _detect_newline(lines)

    existing = {_content(line).rstrip() for line in lines}
    pending = [e for e in tech_entries(summary, feature_id) if e not in existing]
    new_change = change_entry(summary, feature_id)
    keep_prior = retention - 1 if new_change else retention

    result = MergeResult(lines=[])
    out = result.lines
    state = Region.OUTSIDE
    tech_body: list[str] = []
    kept = 0
    changes_heading_at = -1

    def leave_active_tech() -> None:
        out.extend(_flush_region(tech_body, pending, newline))
        result.tech_added.extend(pending)
        tech_body.clear()

    def place_change(at: int) -> None:
        if new_change and result.change_added is None:
            out.insert(at, new_change + newline)
            result.change_added = new_change

    def leave_recent_changes() -> None:
        # no prior entries: the new one goes directly under the heading
        if new_change and result.change_added is None:
            out[changes_heading_at] = _terminated(out[changes_heading_at], newline)
            place_change(changes_heading_at + 1)

    for line in lines:
        text = _content(line)
        is_heading = bool(_HEADING_RE.match(text))

        if state is Region.ACTIVE_TECH:
            if not is_heading:
                tech_body.append(refresh_stamp(line, day))
                continue
            leave_active_tech()
            state = Region.OUTSIDE
        elif state is Region.RECENT_CHANGES:
            if not is_heading:
                if text.startswith(_ENTRY_PREFIX):
                    place_change(len(out))
                    if text.rstrip() == new_change or kept >= keep_prior:
                        result.changes_dropped += 1
                        continue
                    kept += 1
                out.append(refresh_stamp(line, day))
                continue
            leave_recent_changes()
            state = Region.OUTSIDE

        if text == ACTIVE_TECH_HEADING and not result.has_active_tech:
            result.has_active_tech = True
            out.append(line)
            state = Region.ACTIVE_TECH
            continue

        if text == RECENT_CHANGES_HEADING and not result.has_recent_changes:
            result.has_recent_changes = True
            state = Region.RECENT_CHANGES
            changes_heading_at = len(out)
            out.append(line)
            continue

        out.append(refresh_stamp(line, day))

    if state is Region.ACTIVE_TECH:
        if pending and out:
            out[-1] = _terminated(out[-1], newline)
        leave_active_tech()
    elif state is Region.RECENT_CHANGES:
        leave_recent_changes()

    if not result.has_active_tech and not result.has_recent_changes:
        result.warnings.append(
            f"no '{ACTIVE_TECH_HEADING}' or '{RECENT_CHANGES_HEADING}' heading; nothing inserted"
        )
    elif not result.has_active_tech:
        result.warnings.append(f"no '{ACTIVE_TECH_HEADING}' heading; tech entries not added")
    elif not result.has_recent_changes:
        result.warnings.append(f"no '{RECENT_CHANGES_HEADING}' heading; change entry not added")

    return result


def merge_file(
    file_path: Path,
    summary: Summary,
    feature_id: str,
    today: date | None = None,
    retention: int = DEFAULT_RETENTION,
    dry_run: bool = False,
) -> tuple[str, MergeResult]:
    """Merge a Summary into an existing context file.

    Returns:
        ("updated" | "unchanged", MergeResult)
    """
    with open(file_path, encoding="utf-8", newline="") as f:
        original = f.read()

    result = merge_lines(
        original.splitlines(keepends=True), summary, feature_id, today, retention,
    )
    if result.text == original:
        return "unchanged", result
    if not dry_run:
        write_atomic(file_path, result.text)
    return "updated", result
