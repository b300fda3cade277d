"""Monthly grouping of match records and the two-level task hierarchy built on it.

Records are bucketed by the month of their ``DD.MM.YYYY`` date.  Anything that
does not parse lands in the ``ohne-datum`` bucket, which always sorts last.
The hierarchy assigns one running identifier to every group first and then to
every child, so parent ids are always smaller than the ids of their children.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .records import MatchRecord

UNDATED_KEY = "ohne-datum"
UNDATED_LABEL = "Ohne Datum"

PARENT_ISSUE_TYPE = "Task"
CHILD_ISSUE_TYPE = "Sub-task"

GERMAN_MONTHS = {
    1: "Januar",
    2: "Februar",
    3: "März",
    4: "April",
    5: "Mai",
    6: "Juni",
    7: "Juli",
    8: "August",
    9: "September",
    10: "Oktober",
    11: "November",
    12: "Dezember",
}


@dataclass(frozen=True)
class TaskGroup:
    key: str
    label: str
    records: Tuple[MatchRecord, ...]

    @property
    def is_undated(self) -> bool:
        return self.key == UNDATED_KEY


@dataclass(frozen=True)
class HierarchyRow:
    summary: str
    description: str
    due_date: str
    issue_type: str
    issue_id: int
    parent_id: Optional[int] = None


def parse_date(value: str) -> Optional[Tuple[int, int, int]]:
    """Parse ``DD.MM.YYYY`` into ``(year, month, day)`` or return ``None``."""

    parts = (value or "").strip().split(".")
    if len(parts) != 3:
        return None
    if not all(part.strip().isdecimal() for part in parts):
        return None
    day, month, year = (int(part) for part in parts)
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        return None
    return year, month, day


def parse_clock(value: str) -> Optional[Tuple[int, int]]:
    parts = (value or "").strip().split(":")
    if len(parts) < 2 or not all(part.strip().isdecimal() for part in parts[:2]):
        return None
    hour, minute = int(parts[0]), int(parts[1])
    if hour > 23 or minute > 59:
        return None
    return hour, minute


def parse_time(value: str) -> Tuple[int, int]:
    return parse_clock(value) or (0, 0)


def group_key(record: MatchRecord) -> str:
    parsed = parse_date(record.date)
    if parsed is None:
        return UNDATED_KEY
    year, month, _ = parsed
    return f"{year:04d}-{month:02d}"


def group_label(key: str) -> str:
    if key == UNDATED_KEY:
        return UNDATED_LABEL
    year, month = key.split("-", 1)
    return f"{GERMAN_MONTHS[int(month)]} {int(year)}"


def _kickoff_sort_key(record: MatchRecord) -> Tuple[int, int, int, int, int]:
    year, month, day = parse_date(record.date) or (0, 0, 0)
    hour, minute = parse_time(record.time)
    return year, month, day, hour, minute


def _group_sort_key(key: str) -> Tuple[int, str]:
    return (1, "") if key == UNDATED_KEY else (0, key)


def group_by_month(records: Iterable[MatchRecord]) -> List[TaskGroup]:
    buckets: Dict[str, List[MatchRecord]] = {}
    for record in records:
        buckets.setdefault(group_key(record), []).append(record)

    groups: List[TaskGroup] = []
    for key in sorted(buckets, key=_group_sort_key):
        # sorted() is stable, equal kickoffs keep their input order.
        children = sorted(buckets[key], key=_kickoff_sort_key)
        groups.append(TaskGroup(key=key, label=group_label(key), records=tuple(children)))
    return groups


def iso_date(record: MatchRecord) -> str:
    parsed = parse_date(record.date)
    if parsed is None:
        return ""
    year, month, day = parsed
    return f"{year:04d}-{month:02d}-{day:02d}"


def describe_record(record: MatchRecord) -> str:
    lines = [f"Mannschaft: {record.team}"]
    competition = record.competition
    if record.competition_type:
        competition = f"{competition} ({record.competition_type})" if competition else record.competition_type
    if competition:
        lines.append(f"Wettbewerb: {competition}")
    kickoff = " ".join(part for part in (record.date, record.time) if part)
    lines.append(f"Anstoß: {kickoff or 'offen'}")
    if record.result:
        lines.append(f"Ergebnis: {record.result}")
    if record.pre_published:
        lines.append("Vorab veröffentlicht")
    return "\n".join(lines)


def build_hierarchy(groups: Sequence[TaskGroup], *, start: int = 1) -> List[HierarchyRow]:
    """Flatten ``groups`` into parent rows followed by all child rows."""

    next_id = start
    group_ids: List[int] = []
    rows: List[HierarchyRow] = []
    for group in groups:
        due_dates = [iso_date(record) for record in group.records]
        rows.append(
            HierarchyRow(
                summary=group.label,
                description=f"{len(group.records)} Spiele",
                due_date=max((value for value in due_dates if value), default=""),
                issue_type=PARENT_ISSUE_TYPE,
                issue_id=next_id,
            )
        )
        group_ids.append(next_id)
        next_id += 1

    for group, parent_id in zip(groups, group_ids):
        for record in group.records:
            rows.append(
                HierarchyRow(
                    summary=f"{record.home} - {record.away}",
                    description=describe_record(record),
                    due_date=iso_date(record),
                    issue_type=CHILD_ISSUE_TYPE,
                    issue_id=next_id,
                    parent_id=parent_id,
                )
            )
            next_id += 1
    return rows
