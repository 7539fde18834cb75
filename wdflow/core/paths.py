from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv


load_dotenv(override=False)


def _project_root() -> Path:
    env = os.getenv("WDFLOW_ROOT")
    if env:
        return Path(env)
    # In source layout, this file is under <root>/wdflow/core
    return Path(__file__).resolve().parents[2]


def _config_dir() -> Path:
    return Path(__file__).resolve().parents[1] / "config"


def _work_dir() -> Path:
    return _project_root() / "work"


def ensure_work_dirs() -> dict[str, Path]:
    base = _work_dir()
    logs = base / "logs"
    shot = logs / "shot"
    for p in (logs, shot):
        p.mkdir(parents=True, exist_ok=True)
    return {"logs": logs, "shot": shot}


def resolve_config_path(path: str | Path) -> Path:
    p = Path(path)
    if p.is_absolute():
        return p
    # Support paths with or without leading 'wdflow/config'
    parts = p.parts
    if parts[:2] == ("wdflow", "config"):
        return _config_dir().joinpath(*parts[2:])
    return _config_dir() / p
