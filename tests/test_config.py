from pathlib import Path

import pytest

from bfv_export.config import DEFAULT_API_BASE_URL, DEFAULT_TEAM_IDS, AppConfig, load_config


def test_default_config_uses_builtin_teams():
    config = AppConfig.default()

    assert [team.team_id for team in config.teams] == list(DEFAULT_TEAM_IDS)
    assert config.export_dir == Path("exports")
    assert config.api.base_url == DEFAULT_API_BASE_URL


def test_load_config_from_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "teams:\n"
        "  - id: AAA\n"
        "    name: SV Musterdorf\n"
        "  - BBB\n"
        "  - id: ''\n"
        "export_dir: out\n"
        "file_prefix: Plan\n"
        "csv_delimiter: ';'\n"
        "api:\n"
        "  base_url: https://example.invalid/v1/\n"
        "  timeout: 5\n",
        encoding="utf-8",
    )

    config = load_config(path)

    assert [(team.team_id, team.name) for team in config.teams] == [("AAA", "SV Musterdorf"), ("BBB", None)]
    assert config.export_dir == Path("out")
    assert config.file_prefix == "Plan"
    assert config.csv_delimiter == ";"
    assert config.api.base_url == "https://example.invalid/v1"
    assert config.api.timeout == 5
    assert config.timezone == "Europe/Berlin"


def test_config_without_teams_is_rejected():
    with pytest.raises(ValueError):
        AppConfig.from_mapping({"teams": []})


def test_config_root_must_be_mapping(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(path)


@pytest.mark.parametrize("prefix", ["Mein_Plan", "../x", "a/b", "Plan 2025"])
def test_unsafe_file_prefix_is_rejected(prefix):
    with pytest.raises(ValueError):
        AppConfig.from_mapping({"teams": ["AAA"], "file_prefix": prefix})


def test_hyphenated_file_prefix_is_accepted():
    assert AppConfig.from_mapping({"teams": ["AAA"], "file_prefix": "Plan-2025"}).file_prefix == "Plan-2025"
