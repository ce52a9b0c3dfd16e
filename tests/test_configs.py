from pathlib import Path

import pytest

from tmc_submitter.configs import DEFAULT_SETTINGS_PATH, Settings, default_settings_path, load_settings


def test_missing_settings_file_gives_defaults(tmp_path: Path) -> None:
    settings = load_settings(tmp_path / "settings.yml")
    assert settings == Settings()
    assert settings.is_logged_in is False
    assert settings.api_version == 8


def test_settings_are_read_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "settings.yml"
    path.write_text(
        "server_address: https://tmc.example.com\n"
        "username: student\n"
        "access_token: tok\n"
        "colors:\n"
        "  testresults_left: blue\n",
        encoding="utf-8",
    )

    settings = load_settings(path)

    assert settings.is_logged_in is True
    assert settings.server_address == "https://tmc.example.com"
    assert settings.colors.testresults_left == "blue"
    assert settings.colors.testresults_right == "red"


def test_empty_settings_file(tmp_path: Path) -> None:
    path = tmp_path / "settings.yml"
    path.write_text("", encoding="utf-8")
    assert load_settings(path) == Settings()


def test_settings_path_env_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TMC_SETTINGS", str(tmp_path / "custom.yml"))
    assert default_settings_path() == tmp_path / "custom.yml"
    monkeypatch.delenv("TMC_SETTINGS")
    assert default_settings_path() == DEFAULT_SETTINGS_PATH
