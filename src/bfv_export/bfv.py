"""Helper utilities to talk to the BFV widget REST API."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping

import requests

from .config import DEFAULT_API_BASE_URL

LOGGER = logging.getLogger(__name__)


class BfvApiError(RuntimeError):
    """Raised when the API answers with an error state or an unexpected payload."""


@dataclass(slots=True)
class TeamMatches:
    team_id: str
    team_name: str
    matches: List[Mapping[str, object]] = field(default_factory=list)


class BfvApi:
    """Minimal client for the BFV match widget API."""

    def __init__(self, base_url: str = DEFAULT_API_BASE_URL, *, timeout: int = 30) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(
            {
                "User-Agent": "bfv_export/1.0",
                "Accept": "application/json",
            }
        )

    def _request(self, path: str) -> Dict:
        url = f"{self.base_url}{path}"
        response = self.session.get(url, timeout=self.timeout)
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            LOGGER.error("API request failed: %s", exc)
            raise
        payload = response.json()
        if not isinstance(payload, dict):
            raise BfvApiError(f"Unerwartete Antwort von {url}.")
        state = payload.get("state")
        if state is not None and state != 200:
            raise BfvApiError(
                f"API meldet Status {state} für {url}: {payload.get('message') or 'ohne Meldung'}"
            )
        return payload

    def list_matches(self, team_id: str) -> TeamMatches:
        """Return the team descriptor and the ordered match list for ``team_id``."""

        payload = self._request(f"/team/{team_id}/matches")
        data = payload.get("data")
        if not isinstance(data, dict):
            raise BfvApiError(f"Antwort für Team {team_id} enthält keine Daten.")
        team = data.get("team") if isinstance(data.get("team"), dict) else {}
        raw_matches = data.get("matches")
        if raw_matches is None:
            raw_matches = []
        if not isinstance(raw_matches, list):
            raise BfvApiError(f"Spielliste für Team {team_id} hat ein unerwartetes Format.")
        matches = [item for item in raw_matches if isinstance(item, dict)]
        LOGGER.debug("Team %s: %d Spiele empfangen", team_id, len(matches))
        return TeamMatches(
            team_id=team_id,
            team_name=str(team.get("name") or ""),
            matches=matches,
        )

    def close(self) -> None:
        self.session.close()
