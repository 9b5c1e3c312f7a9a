from __future__ import annotations

from pathlib import Path

import pytest

from rpa_web.config.ini_config import IniConfig
from rpa_web.domain.models import AnalysisKind

ASSISTANTS = """
[assistants]
insights = asst_a
achievements = asst_b
research_ideas = asst_c
"""


def write_ini(tmp_path: Path, body: str) -> Path:
    p = tmp_path / "app.ini"
    p.write_text(body, encoding="utf-8")
    return p


def test_defaults_when_only_assistants_given(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    settings = IniConfig(write_ini(tmp_path, ASSISTANTS)).load_settings()

    assert settings.assistant_ids == {
        AnalysisKind.INSIGHTS: "asst_a",
        AnalysisKind.ACHIEVEMENTS: "asst_b",
        AnalysisKind.RESEARCH_IDEAS: "asst_c",
    }
    assert settings.poll_interval_seconds == 2.0
    assert settings.max_poll_attempts == 150
    assert settings.max_upload_bytes == 25 * 1024 * 1024
    assert settings.cleanup_uploaded_file is True
    assert settings.log_level == "INFO"
    assert settings.openai_api_key == ""
    assert settings.flask_host == "127.0.0.1"
    assert settings.flask_port == 5000


def test_explicit_values(tmp_path: Path):
    body = ASSISTANTS + """
[openai]
api_key = sk-test
base_url = http://localhost:8080/v1

[polling]
interval_seconds = 0.5
max_attempts = 10

[upload]
max_bytes = 1024
cleanup_uploaded_file = no

[logging]
level = debug

[flask]
host = 0.0.0.0
port = 8000
debug = yes
"""
    settings = IniConfig(write_ini(tmp_path, body)).load_settings()

    assert settings.openai_api_key == "sk-test"
    assert settings.openai_base_url == "http://localhost:8080/v1"
    assert settings.poll_interval_seconds == 0.5
    assert settings.max_poll_attempts == 10
    assert settings.max_upload_bytes == 1024
    assert settings.cleanup_uploaded_file is False
    assert settings.log_level == "DEBUG"
    assert (settings.flask_host, settings.flask_port, settings.flask_debug) == ("0.0.0.0", 8000, True)


def test_api_key_falls_back_to_env(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env")
    settings = IniConfig(write_ini(tmp_path, ASSISTANTS)).load_settings()
    assert settings.openai_api_key == "sk-from-env"


def test_missing_assistant_id_rejected(tmp_path: Path):
    body = "[assistants]\ninsights = asst_a\nachievements =\n"
    with pytest.raises(ValueError, match="achievements, research_ideas"):
        IniConfig(write_ini(tmp_path, body)).load_settings()


def test_max_attempts_must_be_positive(tmp_path: Path):
    body = ASSISTANTS + "\n[polling]\nmax_attempts = 0\n"
    with pytest.raises(ValueError):
        IniConfig(write_ini(tmp_path, body)).load_settings()


def test_missing_ini_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        IniConfig(tmp_path / "nope.ini")


def test_app_ini_env_var(tmp_path: Path, monkeypatch):
    ini_path = write_ini(tmp_path, ASSISTANTS)
    monkeypatch.setenv("APP_INI", str(ini_path))

    ini = IniConfig.from_env_or_default()

    assert ini.ini_path == ini_path
    assert ini.load_settings().assistant_ids[AnalysisKind.RESEARCH_IDEAS] == "asst_c"


def test_repo_default_ini_loads(monkeypatch):
    monkeypatch.delenv("APP_INI", raising=False)
    settings = IniConfig.from_env_or_default().load_settings()
    assert set(settings.assistant_ids) == set(AnalysisKind)
