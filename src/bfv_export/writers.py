"""Serialize match records to CSV, XLSX, iCalendar and Jira import files."""
from __future__ import annotations

import csv
import hashlib
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterable, Optional, Sequence
from zoneinfo import ZoneInfo

from icalendar import Calendar, Event
from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from .config import DEFAULT_TIMEZONE
from .grouping import build_hierarchy, group_by_month, parse_clock, parse_date
from .naming import sanitize_team_name
from .records import EXPORT_HEADERS, MatchRecord

LOGGER = logging.getLogger(__name__)

# BOM so spreadsheet tools pick UTF-8 and keep umlauts intact.
CSV_ENCODING = "utf-8-sig"

HIERARCHY_HEADERS: Sequence[str] = (
    "Summary",
    "Description",
    "Due Date",
    "Issue Type",
    "Issue ID",
    "Parent ID",
)

HEADER_FILL_COLOR = "FF0070C0"
STRIPE_FILL_COLOR = "FFE6F0FA"
EVENT_DURATION = timedelta(hours=2)


@dataclass(frozen=True)
class ExportArtifact:
    """A written export file together with the team it belongs to."""

    path: Path
    team: str
    kind: str


def _warn_if_exists(path: Path) -> None:
    if path.exists():
        LOGGER.warning("Datei %s existiert bereits und wird überschrieben.", path)


def write_csv(records: Iterable[MatchRecord], path: Path, *, delimiter: str = ",") -> Path:
    _warn_if_exists(path)
    with path.open("w", encoding=CSV_ENCODING, newline="") as handle:
        writer = csv.writer(handle, delimiter=delimiter)
        writer.writerow(EXPORT_HEADERS)
        for record in records:
            writer.writerow(record.as_row())
    LOGGER.info("CSV exportiert: %s", path)
    return path


def _cell_text(value: str) -> str:
    return ILLEGAL_CHARACTERS_RE.sub("", value)


def write_xlsx(records: Iterable[MatchRecord], path: Path) -> Path:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Spiele"
    sheet.append(list(EXPORT_HEADERS))
    for record in records:
        sheet.append([_cell_text(value) for value in record.as_row()])

    # API text is data, never a formula.
    for row in sheet.iter_rows(min_row=2):
        for cell in row:
            if cell.value is not None:
                cell.data_type = "s"

    thin = Side(style="thin")
    for cell in sheet[1]:
        cell.font = Font(bold=True, color="FFFFFFFF")
        cell.fill = PatternFill(fill_type="solid", fgColor=HEADER_FILL_COLOR)
        cell.alignment = Alignment(vertical="center", horizontal="center")
        cell.border = Border(top=thin, left=thin, bottom=thin, right=thin)

    stripe = PatternFill(fill_type="solid", fgColor=STRIPE_FILL_COLOR)
    for row in sheet.iter_rows(min_row=2):
        if row[0].row % 2 == 0:
            for cell in row:
                cell.fill = stripe

    for index, column in enumerate(sheet.iter_cols(), start=1):
        width = max(len(str(cell.value)) if cell.value is not None else 0 for cell in column)
        sheet.column_dimensions[get_column_letter(index)].width = width + 2
    sheet.freeze_panes = "A2"

    _warn_if_exists(path)
    workbook.save(path)
    LOGGER.info("XLSX exportiert: %s", path)
    return path


def kickoff_datetime(record: MatchRecord, tz: ZoneInfo) -> Optional[datetime]:
    parsed_date = parse_date(record.date)
    parsed_time = parse_clock(record.time)
    if parsed_date is None or parsed_time is None:
        return None
    year, month, day = parsed_date
    hour, minute = parsed_time
    try:
        return datetime(year, month, day, hour, minute, tzinfo=tz)
    except ValueError:
        return None


def _event_uid(record: MatchRecord) -> str:
    if record.match_id:
        return f"{record.match_id}-{sanitize_team_name(record.team)}@bfv-export"
    digest = hashlib.md5("|".join(record.as_row()).encode("utf-8")).hexdigest()
    return f"{digest}@bfv-export"


def build_calendar(
    records: Iterable[MatchRecord],
    *,
    name: str = "Spielplan",
    timezone_name: str = DEFAULT_TIMEZONE,
) -> Calendar:
    tz = ZoneInfo(timezone_name)
    calendar = Calendar()
    calendar.add("prodid", "-//bfv_export//Spielplan//DE")
    calendar.add("version", "2.0")
    calendar.add("calscale", "GREGORIAN")
    calendar.add("method", "PUBLISH")
    calendar.add("x-wr-calname", name)
    calendar.add("x-wr-timezone", timezone_name)

    stamp = datetime.now(tz=timezone.utc)
    skipped = 0
    for record in records:
        kickoff = kickoff_datetime(record, tz)
        if kickoff is None:
            skipped += 1
            continue
        event = Event()
        event.add("uid", _event_uid(record))
        event.add("summary", f"{record.home} - {record.away}")
        event.add("dtstart", kickoff)
        event.add("dtend", kickoff + EVENT_DURATION)
        event.add("dtstamp", stamp)
        desc = [f"Mannschaft: {record.team}"]
        if record.competition:
            desc.append(f"Wettbewerb: {record.competition}")
        if record.competition_type:
            desc.append(f"Typ: {record.competition_type}")
        if record.result:
            desc.append(f"Ergebnis: {record.result}")
        event.add("description", "\n".join(desc))
        calendar.add_component(event)

    if skipped:
        LOGGER.info("%d Spiele ohne Datum oder Uhrzeit nicht in den Kalender übernommen", skipped)
    return calendar


def write_calendar(
    records: Iterable[MatchRecord],
    path: Path,
    *,
    name: str = "Spielplan",
    timezone_name: str = DEFAULT_TIMEZONE,
) -> Path:
    calendar = build_calendar(records, name=name, timezone_name=timezone_name)
    _warn_if_exists(path)
    path.write_bytes(calendar.to_ical())
    LOGGER.info("Kalender exportiert: %s", path)
    return path


def write_hierarchy_csv(records: Iterable[MatchRecord], path: Path, *, delimiter: str = ",") -> Path:
    rows = build_hierarchy(group_by_month(records))
    _warn_if_exists(path)
    with path.open("w", encoding=CSV_ENCODING, newline="") as handle:
        writer = csv.writer(handle, delimiter=delimiter)
        writer.writerow(HIERARCHY_HEADERS)
        for row in rows:
            writer.writerow(
                [
                    row.summary,
                    row.description,
                    row.due_date,
                    row.issue_type,
                    row.issue_id,
                    "" if row.parent_id is None else row.parent_id,
                ]
            )
    LOGGER.info("Jira-Import exportiert: %s (%d Zeilen)", path, len(rows))
    return path
