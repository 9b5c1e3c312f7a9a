########## ini_config.py

import os
from configparser import ConfigParser
from dataclasses import dataclass
from pathlib import Path
from typing import Dict

from rpa_web.domain.models import AnalysisKind

INI_DEFAULT_NAME = "ResearchPaperAnalyzer.ini"

# INI key in [assistants] per analysis kind
ASSISTANT_KEYS = {
    AnalysisKind.INSIGHTS: "insights",
    AnalysisKind.ACHIEVEMENTS: "achievements",
    AnalysisKind.RESEARCH_IDEAS: "research_ideas",
}


@dataclass(frozen=True)
class AppSettings:
    openai_api_key: str
    openai_base_url: str
    assistant_ids: Dict[AnalysisKind, str]

    poll_interval_seconds: float
    max_poll_attempts: int

    max_upload_bytes: int
    cleanup_uploaded_file: bool

    log_level: str

    flask_host: str
    flask_port: int
    flask_debug: bool


class IniConfig:
    """
    Adapter around ConfigParser.
    Keeps INI handling out of your app/service code.
    """

    def __init__(self, ini_path: Path):
        self._ini_path = ini_path
        self._cfg = ConfigParser()
        read_ok = self._cfg.read(str(ini_path), encoding="utf-8-sig")
        if not read_ok:
            raise FileNotFoundError(f"INI file not found or unreadable: {ini_path}")

    @property
    def ini_path(self) -> Path:
        return self._ini_path

    @staticmethod
    def from_env_or_default() -> "IniConfig":
        ini_raw = (os.getenv("APP_INI") or "").strip()
        # If APP_INI is not set, default to repo-root-relative ini location
        ini_path = Path(ini_raw) if ini_raw else (Path(__file__).resolve().parents[2] / INI_DEFAULT_NAME)
        return IniConfig(ini_path)

    def _str(self, section: str, key: str, fallback: str = "") -> str:
        return (self._cfg.get(section, key, fallback=fallback) or "").strip()

    def _assistant_ids(self) -> Dict[AnalysisKind, str]:
        ids = {kind: self._str("assistants", key) for kind, key in ASSISTANT_KEYS.items()}
        missing = [ASSISTANT_KEYS[k] for k, v in ids.items() if not v]
        if missing:
            raise ValueError(f"Missing assistant id(s) in [assistants]: {', '.join(missing)}")
        return ids

    def load_settings(self) -> AppSettings:
        # OpenAI (api key falls back to env; the SDK also reads OPENAI_API_KEY itself)
        openai_api_key = self._str("openai", "api_key") or (os.getenv("OPENAI_API_KEY") or "").strip()
        openai_base_url = self._str("openai", "base_url")

        assistant_ids = self._assistant_ids()

        # Polling
        poll_interval_seconds = self._cfg.getfloat("polling", "interval_seconds", fallback=2.0)
        max_poll_attempts = self._cfg.getint("polling", "max_attempts", fallback=150)

        # Upload
        max_upload_bytes = self._cfg.getint("upload", "max_bytes", fallback=25 * 1024 * 1024)
        cleanup_uploaded_file = self._cfg.getboolean("upload", "cleanup_uploaded_file", fallback=True)

        # Logging
        log_level = self._str("logging", "level", "INFO").upper() or "INFO"

        # Flask
        flask_host = self._str("flask", "host", "127.0.0.1") or "127.0.0.1"
        flask_port = self._cfg.getint("flask", "port", fallback=5000)
        flask_debug = self._cfg.getboolean("flask", "debug", fallback=False)

        # Validate
        if poll_interval_seconds < 0:
            raise ValueError(f"polling.interval_seconds must be >= 0, got {poll_interval_seconds}")
        if max_poll_attempts < 1:
            raise ValueError(f"polling.max_attempts must be >= 1, got {max_poll_attempts}")
        if max_upload_bytes < 1:
            raise ValueError(f"upload.max_bytes must be >= 1, got {max_upload_bytes}")

        return AppSettings(
            openai_api_key=openai_api_key,
            openai_base_url=openai_base_url,
            assistant_ids=assistant_ids,
            poll_interval_seconds=poll_interval_seconds,
            max_poll_attempts=max_poll_attempts,
            max_upload_bytes=max_upload_bytes,
            cleanup_uploaded_file=cleanup_uploaded_file,
            log_level=log_level,
            flask_host=flask_host,
            flask_port=flask_port,
            flask_debug=flask_debug,
        )
