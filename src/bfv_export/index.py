"""Render ``index.html`` listing the export files of a directory."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from html import escape
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

from .config import DEFAULT_INDEX_TITLE
from .naming import parse_export_filename, sanitize_team_name
from .writers import ExportArtifact

LOGGER = logging.getLogger(__name__)

INDEX_FILENAME = "index.html"
UNKNOWN_TEAM = "Unbekannt"

EXTENSION_LABELS: Mapping[str, str] = {
    "csv": "CSV",
    "xlsx": "Excel",
    "ics": "Kalender",
}
EXTENSION_ICONS: Mapping[str, str] = {
    "csv": "📄",
    "xlsx": "📊",
    "ics": "📅",
}

IndexListing = Dict[str, Dict[str, List["IndexEntry"]]]


@dataclass(frozen=True)
class IndexEntry:
    name: str
    ext: str
    team: str
    size: int
    modified: datetime

    @property
    def size_label(self) -> str:
        return human_file_size(self.size)

    @property
    def modified_label(self) -> str:
        return self.modified.strftime("%d.%m.%Y, %H:%M:%S")

    def as_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "ext": self.ext,
            "team": self.team,
            "size": self.size,
            "modified": self.modified.isoformat(timespec="seconds"),
        }


def human_file_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def _team_for_file(path: Path, known_teams: Mapping[str, str]) -> str:
    team = known_teams.get(path.name)
    if team:
        return team
    parsed = parse_export_filename(path.name)
    if parsed is None:
        return UNKNOWN_TEAM
    return parsed.team_label


def collect_index_entries(
    directory: Path,
    artifacts: Optional[Iterable[ExportArtifact]] = None,
) -> IndexListing:
    """Group the files of ``directory`` by extension and team.

    Team names come from ``artifacts`` where a file was written in this run
    and fall back to the filename convention for older files.
    """

    known_teams = {artifact.path.name: artifact.team for artifact in artifacts or ()}
    # One table per sanitized team name, labelled with the run's own spelling.
    team_labels = {sanitize_team_name(team): team for team in known_teams.values()}
    entries: List[IndexEntry] = []
    for path in sorted(directory.iterdir()):
        if not path.is_file() or path.name == INDEX_FILENAME or path.name.startswith("."):
            continue
        team = _team_for_file(path, known_teams)
        if team != UNKNOWN_TEAM:
            team = team_labels.setdefault(sanitize_team_name(team), team)
        stats = path.stat()
        entries.append(
            IndexEntry(
                name=path.name,
                ext=path.suffix.lstrip(".").lower() or "ohne-endung",
                team=team,
                size=stats.st_size,
                modified=datetime.fromtimestamp(stats.st_mtime),
            )
        )

    listing: IndexListing = {}
    for entry in sorted(entries, key=lambda item: item.name):
        listing.setdefault(entry.ext, {}).setdefault(entry.team, []).append(entry)

    ordered: IndexListing = {}
    for ext in sorted(listing):
        teams = listing[ext]
        team_names = sorted(name for name in teams if name != UNKNOWN_TEAM)
        if UNKNOWN_TEAM in teams:
            team_names.append(UNKNOWN_TEAM)
        ordered[ext] = {
            name: sorted(teams[name], key=lambda item: item.modified, reverse=True)
            for name in team_names
        }
    return ordered


def index_payload(listing: IndexListing) -> Dict[str, Dict[str, List[Dict[str, object]]]]:
    return {
        ext: {team: [entry.as_dict() for entry in files] for team, files in teams.items()}
        for ext, teams in listing.items()
    }


def _format_file_row(entry: IndexEntry) -> str:
    icon = EXTENSION_ICONS.get(entry.ext, "📁")
    name = escape(entry.name)
    return (
        "          <tr>\n"
        f"            <td class=\"icon\">{icon}</td>\n"
        f"            <td><a href=\"{name}\" download>{name}</a></td>\n"
        f"            <td>{escape(entry.size_label)}</td>\n"
        f"            <td>{escape(entry.modified_label)}</td>\n"
        "          </tr>"
    )


def _format_team_table(team: str, entries: List[IndexEntry]) -> str:
    rows = "\n".join(_format_file_row(entry) for entry in entries)
    return (
        "    <div class=\"team\">\n"
        f"      <h3>{escape(team)}</h3>\n"
        "      <table>\n"
        "        <thead>\n"
        "          <tr><th>Typ</th><th>Dateiname</th><th>Größe</th><th>Letzte Änderung</th></tr>\n"
        "        </thead>\n"
        "        <tbody>\n"
        f"{rows}\n"
        "        </tbody>\n"
        "      </table>\n"
        "    </div>"
    )


def build_index_html(
    listing: IndexListing,
    *,
    title: str = DEFAULT_INDEX_TITLE,
    generated_at: Optional[datetime] = None,
) -> str:
    timestamp = (generated_at or datetime.now()).strftime("%d.%m.%Y, %H:%M:%S")
    sections: List[str] = []
    for ext, teams in listing.items():
        label = EXTENSION_LABELS.get(ext, ext.upper())
        tables = "\n".join(_format_team_table(team, entries) for team, entries in teams.items())
        sections.append(
            f"  <section class=\"extension\" id=\"ext-{escape(ext)}\">\n"
            f"    <h2>{escape(label)}</h2>\n"
            f"{tables}\n"
            "  </section>"
        )
    if not sections:
        sections.append("  <p class=\"empty\">Keine Exportdateien vorhanden.</p>")
    sections_html = "\n".join(sections)
    safe_title = escape(title)

    return f"""<!DOCTYPE html>
<html lang="de">
<head>
  <meta charset="UTF-8">
  <title>{safe_title}</title>
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <style>
    body {{ font-family: 'Segoe UI', Arial, sans-serif; margin: 2em; background: #f4f8fb; }}
    h1, h2 {{ color: #0070C0; }}
    table {{ border-collapse: collapse; width: 100%; background: #fff; box-shadow: 0 2px 8px #0001; margin-bottom: 1.5em; }}
    th, td {{ padding: 0.7em 1em; }}
    th {{ background: #0070C0; color: #fff; text-align: left; }}
    td.icon {{ text-align: center; font-size: 1.5em; }}
    tr:nth-child(even) {{ background: #e6f0fa; }}
    tr:hover {{ background: #d0e6f7; }}
    a {{ color: #0070C0; text-decoration: none; }}
    a:hover {{ text-decoration: underline; }}
    .footer {{ margin-top: 2em; color: #888; font-size: 0.95em; }}
    @media (max-width: 600px) {{
      table, thead, tbody, th, td, tr {{ display: block; }}
      th, td {{ padding: 0.5em 0.5em; }}
      tr {{ margin-bottom: 1em; }}
    }}
  </style>
</head>
<body>
  <h1>{safe_title}</h1>
  <p>Hier finden Sie die Exportdateien (CSV, Excel &amp; Kalender) zum Download.</p>
{sections_html}
  <div class="footer">Letzte Aktualisierung: {timestamp}</div>
</body>
</html>
"""


def write_index(
    directory: Path,
    artifacts: Optional[Iterable[ExportArtifact]] = None,
    *,
    title: str = DEFAULT_INDEX_TITLE,
) -> Path:
    listing = collect_index_entries(directory, artifacts)
    path = directory / INDEX_FILENAME
    path.write_text(build_index_html(listing, title=title), encoding="utf-8")
    LOGGER.info("index.html generiert: %s", path)
    return path
