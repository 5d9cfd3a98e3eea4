# config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    database_url: str
    reports_dir: Path
    log_level: int


def _pick_data_dir() -> Path:
    candidates = []
    env = os.getenv("DATA_DIR")
    if env:
        candidates.append(Path(env))
    candidates += [Path("/data"), Path.cwd() / "data"]

    for p in candidates:
        try:
            p.mkdir(parents=True, exist_ok=True)
            t = p / ".rwtest"
            t.write_text("ok")
            t.unlink(missing_ok=True)
            return p
        except OSError:
            continue
    return Path.cwd()


def _log_level_from_env(name: str, default: str = "INFO") -> int:
    raw = os.getenv(name, default).strip().upper()
    level = logging.getLevelName(raw)
    if not isinstance(level, int):
        raise ValueError(f"Invalid log level in {name}: {raw}")
    return level


def load_settings() -> Settings:
    data_dir = _pick_data_dir()
    default_sqlite = f"sqlite:///{(data_dir / 'workledger.db').as_posix()}"
    database_url = os.getenv("DATABASE_URL", "").strip() or default_sqlite

    reports_env = os.getenv("REPORTS_DIR", "").strip()
    reports_dir = Path(reports_env) if reports_env else data_dir / "reports"

    return Settings(
        data_dir=data_dir,
        database_url=database_url,
        reports_dir=reports_dir,
        log_level=_log_level_from_env("LOG_LEVEL"),
    )


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
