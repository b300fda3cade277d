"""Export filenames: ``<Prefix>_<Team>_<YYYY-MM-DD_HH-MM-SS>.<ext>``."""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"
ALL_TEAMS_LABEL = "Alle Teams"
HIERARCHY_PREFIX = "Jira"

TEAM_NAME_TRANSLATION = str.maketrans(
    {
        "ä": "ae",
        "ö": "oe",
        "ü": "ue",
        "Ä": "Ae",
        "Ö": "Oe",
        "Ü": "Ue",
        "ß": "ss",
    }
)

EXPORT_FILENAME_PATTERN = re.compile(
    r"^(?P<prefix>[^_]+)_(?P<team>.+)_(?P<timestamp>\d{4}-\d{2}-\d{2}_\d{2}-\d{2}-\d{2})\.(?P<ext>[A-Za-z0-9]+)$"
)


@dataclass(frozen=True)
class ExportFilename:
    prefix: str
    team: str
    timestamp: str
    ext: str

    @property
    def team_label(self) -> str:
        return self.team.replace("_", " ")


def export_timestamp(now: Optional[datetime] = None) -> str:
    return (now or datetime.now()).strftime(TIMESTAMP_FORMAT)


def sanitize_team_name(name: str) -> str:
    transliterated = (name or "").translate(TEAM_NAME_TRANSLATION)
    sanitized = re.sub(r"[^A-Za-z0-9]+", "_", transliterated).strip("_")
    return sanitized or "Team"


def build_export_filename(prefix: str, team: str, timestamp: str, ext: str) -> str:
    return f"{prefix}_{sanitize_team_name(team)}_{timestamp}.{ext.lstrip('.')}"


def parse_export_filename(name: str) -> Optional[ExportFilename]:
    match = EXPORT_FILENAME_PATTERN.match(name)
    if not match:
        return None
    return ExportFilename(
        prefix=match.group("prefix"),
        team=match.group("team"),
        timestamp=match.group("timestamp"),
        ext=match.group("ext").lower(),
    )
