"""FastAPI application exposing the export listing."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, List

from fastapi import FastAPI, HTTPException

from .config import AppConfig, load_config
from .index import collect_index_entries, index_payload

CONFIG_ENV_VAR = "BFV_EXPORT_CONFIG"

app = FastAPI(title="BFV Spielplan-Exporte")


def get_config() -> AppConfig:
    """Load the config named by ``BFV_EXPORT_CONFIG`` or fall back to defaults."""

    config_path = os.environ.get(CONFIG_ENV_VAR)
    if config_path:
        return load_config(Path(config_path))
    return AppConfig.default()


@app.get("/exports")
def get_exports():
    """Return all export files grouped by extension and team."""

    config = get_config()
    if not config.export_dir.is_dir():
        raise HTTPException(status_code=404, detail="Exportverzeichnis existiert noch nicht.")
    return index_payload(collect_index_entries(config.export_dir))


@app.get("/teams")
def get_teams() -> List[Dict[str, str]]:
    """Return the configured team ids and display names."""

    return [
        {"id": team.team_id, "name": team.name or ""}
        for team in get_config().teams
    ]
