from __future__ import annotations

from typing import Dict, List

import pytest

from bfv_export.records import MatchRecord


def make_record(date: str = "", time: str = "", **overrides) -> MatchRecord:
    values = dict(
        team="SV Musterdorf",
        competition="Kreisliga",
        competition_type="Meisterschaft",
        date=date,
        time=time,
        home="SV Musterdorf",
        away="FC Gegner",
        result="",
        pre_published=False,
    )
    values.update(overrides)
    return MatchRecord(**values)


@pytest.fixture
def raw_matches() -> List[Dict[str, object]]:
    return [
        {
            "matchId": "M1",
            "competitionName": "Kreisliga Würzburg",
            "competitionType": "Meisterschaft",
            "kickoffDate": "15.03.2025",
            "kickoffTime": "15:00",
            "homeTeamName": "SV Musterdorf",
            "guestTeamName": "TSV Überall",
            "result": "2:1",
            "prePublished": False,
        },
        {
            "matchId": "M2",
            "competitionName": "Kreispokal",
            "competitionType": "Pokal",
            "kickoffDate": None,
            "kickoffTime": None,
            "homeTeamName": "FC Gegner",
            "guestTeamName": "SV Musterdorf",
            "result": None,
            "prePublished": True,
        },
        {
            "matchId": "M3",
            "competitionName": "Kreisliga Würzburg",
            "competitionType": "Meisterschaft",
            "kickoffDate": "01.03.2025",
            "kickoffTime": "19:30",
            "homeTeamName": "SV Musterdorf",
            "guestTeamName": "SC Nachbar",
            "prePublished": False,
        },
    ]
