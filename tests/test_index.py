import os
from pathlib import Path

from bs4 import BeautifulSoup

from bfv_export.index import (
    UNKNOWN_TEAM,
    build_index_html,
    collect_index_entries,
    human_file_size,
    index_payload,
    write_index,
)
from bfv_export.writers import ExportArtifact


def _touch(directory: Path, name: str, size: int = 10, mtime: int = 1_700_000_000) -> Path:
    path = directory / name
    path.write_bytes(b"x" * size)
    os.utime(path, (mtime, mtime))
    return path


def test_human_file_size():
    assert human_file_size(512) == "512 B"
    assert human_file_size(2048) == "2.0 KB"
    assert human_file_size(3 * 1024 * 1024) == "3.0 MB"


def test_entries_grouped_by_extension_and_team(tmp_path):
    _touch(tmp_path, "Spielplan_SV_Musterdorf_2025-03-01_10-00-00.csv")
    _touch(tmp_path, "Jira_SV_Musterdorf_2025-03-01_10-00-00.csv")
    _touch(tmp_path, "Spielplan_Alle_Teams_2025-03-01_10-00-00.xlsx")
    _touch(tmp_path, "notizen.csv")
    _touch(tmp_path, "index.html")
    _touch(tmp_path, ".hidden")

    listing = collect_index_entries(tmp_path)

    assert list(listing) == ["csv", "xlsx"]
    assert list(listing["csv"]) == ["SV Musterdorf", UNKNOWN_TEAM]
    assert len(listing["csv"]["SV Musterdorf"]) == 2
    assert [entry.name for entry in listing["csv"][UNKNOWN_TEAM]] == ["notizen.csv"]
    assert list(listing["xlsx"]) == ["Alle Teams"]


def test_every_file_listed_exactly_once(tmp_path):
    names = [
        "Spielplan_A_2025-03-01_10-00-00.csv",
        "Spielplan_A_2025-03-01_10-00-00.ics",
        "Spielplan_B_2025-03-01_10-00-00.csv",
        "random.xlsx",
    ]
    for name in names:
        _touch(tmp_path, name)

    listing = collect_index_entries(tmp_path)
    listed = [entry.name for teams in listing.values() for files in teams.values() for entry in files]

    assert sorted(listed) == sorted(names)


def test_artifact_metadata_wins_over_filename(tmp_path):
    path = _touch(tmp_path, "Spielplan_SV_Wuerzburg_2025-03-01_10-00-00.csv")

    listing = collect_index_entries(tmp_path, [ExportArtifact(path, "SV Würzburg", "csv")])

    assert list(listing["csv"]) == ["SV Würzburg"]


def test_older_files_join_the_table_of_the_current_run(tmp_path):
    _touch(tmp_path, "Spielplan_SV_Wuerzburg_2025-03-01_10-00-00.csv", mtime=1_700_000_000)
    current = _touch(tmp_path, "Spielplan_SV_Wuerzburg_2025-03-02_10-00-00.csv", mtime=1_700_100_000)

    listing = collect_index_entries(tmp_path, [ExportArtifact(current, "SV Würzburg", "csv")])

    assert list(listing["csv"]) == ["SV Würzburg"]
    assert [entry.name for entry in listing["csv"]["SV Würzburg"]] == [
        "Spielplan_SV_Wuerzburg_2025-03-02_10-00-00.csv",
        "Spielplan_SV_Wuerzburg_2025-03-01_10-00-00.csv",
    ]


def test_newest_file_first_within_team(tmp_path):
    _touch(tmp_path, "Spielplan_A_2025-03-01_10-00-00.csv", mtime=1_700_000_000)
    _touch(tmp_path, "Spielplan_A_2025-03-02_10-00-00.csv", mtime=1_700_100_000)

    entries = collect_index_entries(tmp_path)["csv"]["A"]

    assert [entry.name for entry in entries] == [
        "Spielplan_A_2025-03-02_10-00-00.csv",
        "Spielplan_A_2025-03-01_10-00-00.csv",
    ]


def test_index_html_links_every_file(tmp_path):
    _touch(tmp_path, "Spielplan_A_2025-03-01_10-00-00.csv", size=2048)
    _touch(tmp_path, "Spielplan_A_2025-03-01_10-00-00.ics")
    _touch(tmp_path, "x<y>.csv")

    path = write_index(tmp_path, title="Test & Co")

    soup = BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")
    assert soup.title.get_text() == "Test & Co"
    hrefs = sorted(link["href"] for link in soup.find_all("a", href=True))
    assert hrefs == sorted(
        ["Spielplan_A_2025-03-01_10-00-00.csv", "Spielplan_A_2025-03-01_10-00-00.ics", "x<y>.csv"]
    )
    assert [h2.get_text() for h2 in soup.find_all("h2")] == ["CSV", "Kalender"]
    assert "2.0 KB" in soup.get_text()


def test_empty_listing_renders_placeholder():
    soup = BeautifulSoup(build_index_html({}), "html.parser")

    assert "Keine Exportdateien vorhanden." in soup.get_text()


def test_index_payload_is_json_friendly(tmp_path):
    _touch(tmp_path, "Spielplan_A_2025-03-01_10-00-00.csv")

    payload = index_payload(collect_index_entries(tmp_path))

    entry = payload["csv"]["A"][0]
    assert entry["name"] == "Spielplan_A_2025-03-01_10-00-00.csv"
    assert entry["size"] == 10
    assert isinstance(entry["modified"], str)
