"""Normalized match rows shared by all exporters."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

EXPORT_HEADERS: Sequence[str] = (
    "Mannschaft",
    "Wettbewerb",
    "Wettbewerbstyp",
    "Datum",
    "Uhrzeit",
    "Heim",
    "Gast",
    "Ergebnis",
    "Vorab veröffentlicht",
)

PRE_PUBLISHED_LABELS = {True: "Ja", False: "Nein"}


@dataclass(frozen=True)
class MatchRecord:
    team: str
    competition: str
    competition_type: str
    date: str
    time: str
    home: str
    away: str
    result: str
    pre_published: bool
    match_id: str = ""

    @property
    def pre_published_label(self) -> str:
        return PRE_PUBLISHED_LABELS[bool(self.pre_published)]

    def as_row(self) -> Tuple[str, ...]:
        """Return the nine export columns in :data:`EXPORT_HEADERS` order."""

        return (
            self.team,
            self.competition,
            self.competition_type,
            self.date,
            self.time,
            self.home,
            self.away,
            self.result,
            self.pre_published_label,
        )


def _text(value: Optional[object]) -> str:
    if value is None:
        return ""
    return str(value)


def map_match(raw: Mapping[str, object], team_name: str) -> MatchRecord:
    # No validation on purpose: whatever the API sends ends up in the row.
    return MatchRecord(
        team=team_name,
        competition=_text(raw.get("competitionName")),
        competition_type=_text(raw.get("competitionType")),
        date=_text(raw.get("kickoffDate")),
        time=_text(raw.get("kickoffTime")),
        home=_text(raw.get("homeTeamName")),
        away=_text(raw.get("guestTeamName")),
        result=_text(raw.get("result")),
        pre_published=bool(raw.get("prePublished")),
        match_id=_text(raw.get("matchId")),
    )


def map_matches(raw_matches: Iterable[Mapping[str, object]], team_name: str) -> List[MatchRecord]:
    return [map_match(raw, team_name) for raw in raw_matches]
