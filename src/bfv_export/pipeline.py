"""Sequential fetch-transform-write pipeline."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

import requests

from .bfv import BfvApi, BfvApiError
from .config import AppConfig, TeamConfig
from .index import write_index
from .naming import (
    ALL_TEAMS_LABEL,
    HIERARCHY_PREFIX,
    build_export_filename,
    export_timestamp,
    sanitize_team_name,
)
from .records import MatchRecord, map_matches
from .writers import ExportArtifact, write_calendar, write_csv, write_hierarchy_csv, write_xlsx

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class TeamExport:
    team: str
    team_id: str = ""
    records: List[MatchRecord] = field(default_factory=list)


@dataclass(slots=True)
class PipelineResult:
    records: List[MatchRecord] = field(default_factory=list)
    artifacts: List[ExportArtifact] = field(default_factory=list)
    index_path: Optional[Path] = None


def fetch_team_exports(client: BfvApi, teams: Sequence[TeamConfig]) -> List[TeamExport]:
    """Fetch every configured team; a failing team is logged and skipped."""

    exports: List[TeamExport] = []
    for team in teams:
        try:
            response = client.list_matches(team.team_id)
        except (requests.RequestException, BfvApiError) as exc:
            LOGGER.error("Fehler beim Abrufen der Spiele für Team %s: %s", team.team_id, exc)
            continue
        name = team.name or response.team_name or team.team_id
        records = map_matches(response.matches, name)
        LOGGER.info("%s: %d Spiele", name, len(records))
        exports.append(TeamExport(team=name, team_id=team.team_id, records=records))
    return exports


def assign_export_labels(team_exports: Sequence[TeamExport]) -> List[str]:
    """Return one label per team whose sanitized form is unique in the run.

    Repeated display names get the team id appended, and the combined
    "Alle Teams" stem is always reserved.
    """

    used = {sanitize_team_name(ALL_TEAMS_LABEL)}
    labels: List[str] = []
    for team_export in team_exports:
        label = team_export.team
        attempt = 1
        while sanitize_team_name(label) in used:
            suffix = team_export.team_id or "Team"
            if attempt > 1:
                suffix = f"{suffix} {attempt}"
            label = f"{team_export.team} {suffix}"
            attempt += 1
        used.add(sanitize_team_name(label))
        labels.append(label)
    return labels


def export_records(
    records: Sequence[MatchRecord],
    team: str,
    config: AppConfig,
    timestamp: str,
) -> List[ExportArtifact]:
    directory = config.export_dir

    def _path(prefix: str, ext: str) -> Path:
        return directory / build_export_filename(prefix, team, timestamp, ext)

    artifacts = [
        ExportArtifact(
            write_csv(records, _path(config.file_prefix, "csv"), delimiter=config.csv_delimiter),
            team,
            "csv",
        ),
        ExportArtifact(write_xlsx(records, _path(config.file_prefix, "xlsx")), team, "xlsx"),
        ExportArtifact(
            write_calendar(
                records,
                _path(config.file_prefix, "ics"),
                name=f"{config.file_prefix} {team}",
                timezone_name=config.timezone,
            ),
            team,
            "ics",
        ),
        ExportArtifact(
            write_hierarchy_csv(records, _path(HIERARCHY_PREFIX, "csv"), delimiter=config.csv_delimiter),
            team,
            "jira",
        ),
    ]
    return artifacts


def run(
    config: AppConfig,
    *,
    client: Optional[BfvApi] = None,
    now: Optional[datetime] = None,
) -> PipelineResult:
    LOGGER.info("Spiele werden abgerufen ...")
    config.export_dir.mkdir(parents=True, exist_ok=True)

    owns_client = client is None
    api = client or BfvApi(config.api.base_url, timeout=config.api.timeout)
    try:
        team_exports = fetch_team_exports(api, config.teams)
    finally:
        if owns_client:
            api.close()

    result = PipelineResult()
    for team_export in team_exports:
        result.records.extend(team_export.records)

    if not result.records:
        LOGGER.info("Keine Spiele für die angegebenen Teams gefunden.")
        return result

    timestamp = export_timestamp(now)
    exported = [team_export for team_export in team_exports if team_export.records]
    for team_export, label in zip(exported, assign_export_labels(exported)):
        result.artifacts.extend(export_records(team_export.records, label, config, timestamp))
    result.artifacts.extend(export_records(result.records, ALL_TEAMS_LABEL, config, timestamp))

    result.index_path = write_index(config.export_dir, result.artifacts, title=config.index_title)
    LOGGER.info("Fertig! %d Dateien exportiert.", len(result.artifacts))
    return result
