"""Configuration helpers for the bfv_export toolkit."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

import yaml

DEFAULT_API_BASE_URL = "https://widget-prod.bfv.de/api/service/widget/v1"
DEFAULT_TEAM_IDS: Sequence[str] = (
    "016PBQB78C000000VV0AG80NVV8OQVTB",
    "02IDHSKCTG000000VS5489B2VU2I8R4H",
)
DEFAULT_EXPORT_DIR = Path("exports")
DEFAULT_FILE_PREFIX = "Spielplan"
DEFAULT_TIMEZONE = "Europe/Berlin"
DEFAULT_INDEX_TITLE = "BFV Exports"
FILE_PREFIX_PATTERN = re.compile(r"[A-Za-z0-9-]+")


@dataclass(slots=True)
class ApiConfig:
    """Settings required to communicate with the BFV widget API."""

    base_url: str = DEFAULT_API_BASE_URL
    timeout: int = 30


@dataclass(slots=True)
class TeamConfig:
    """A single team to export, optionally with a display name override."""

    team_id: str
    name: Optional[str] = None


@dataclass(slots=True)
class AppConfig:
    """Root configuration model."""

    teams: Sequence[TeamConfig] = field(default_factory=tuple)
    api: ApiConfig = field(default_factory=ApiConfig)
    export_dir: Path = DEFAULT_EXPORT_DIR
    file_prefix: str = DEFAULT_FILE_PREFIX
    timezone: str = DEFAULT_TIMEZONE
    csv_delimiter: str = ","
    index_title: str = DEFAULT_INDEX_TITLE

    @classmethod
    def default(cls) -> "AppConfig":
        return cls(teams=tuple(TeamConfig(team_id=team_id) for team_id in DEFAULT_TEAM_IDS))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, object]) -> "AppConfig":
        api_config = ApiConfig()
        api_section = mapping.get("api")
        if isinstance(api_section, Mapping):
            base_url = str(api_section.get("base_url", "") or "").strip().rstrip("/")
            timeout_value = api_section.get("timeout")
            try:
                timeout = int(timeout_value) if timeout_value is not None else 30
            except (TypeError, ValueError):
                timeout = 30
            api_config = ApiConfig(base_url=base_url or DEFAULT_API_BASE_URL, timeout=timeout)

        teams: List[TeamConfig] = []
        raw_teams = mapping.get("teams")
        if isinstance(raw_teams, Sequence) and not isinstance(raw_teams, (str, bytes)):
            for item in raw_teams:
                if isinstance(item, Mapping):
                    team_id = str(item.get("id", "") or "").strip()
                    name = str(item.get("name", "") or "").strip() or None
                else:
                    team_id = str(item or "").strip()
                    name = None
                if not team_id:
                    continue
                teams.append(TeamConfig(team_id=team_id, name=name))
        if not teams:
            raise ValueError("Configuration must list at least one team id under 'teams'.")

        file_prefix = str(mapping.get("file_prefix", "") or DEFAULT_FILE_PREFIX).strip()
        if not FILE_PREFIX_PATTERN.fullmatch(file_prefix):
            raise ValueError(
                "'file_prefix' may only contain letters, digits and '-' (no '_' or path separators)."
            )

        delimiter = str(mapping.get("csv_delimiter", ",") or ",")
        if len(delimiter) != 1:
            raise ValueError("'csv_delimiter' must be a single character.")

        return cls(
            teams=tuple(teams),
            api=api_config,
            export_dir=Path(str(mapping.get("export_dir", "") or DEFAULT_EXPORT_DIR)),
            file_prefix=file_prefix,
            timezone=str(mapping.get("timezone", "") or DEFAULT_TIMEZONE).strip(),
            csv_delimiter=delimiter,
            index_title=str(mapping.get("index_title", "") or DEFAULT_INDEX_TITLE).strip(),
        )


def load_config(path: Path) -> AppConfig:
    """Load a configuration file from YAML."""

    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Configuration file must contain a mapping at the root.")
    return AppConfig.from_mapping(data)
