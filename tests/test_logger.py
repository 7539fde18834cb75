from __future__ import annotations

from pathlib import Path

import wdflow.core.logger as core_logger
from wdflow.core.paths import ensure_work_dirs, resolve_config_path


def test_logger_is_configured_once(tmp_path: Path) -> None:
    first = core_logger.get_logger()
    second = core_logger.get_logger()
    assert first is second
    assert first.name == "wdflow"
    assert len(first.handlers) == 2

    first.info("hello from tests")
    for handler in first.handlers:
        handler.flush()
    assert "hello from tests" in (tmp_path / "work" / "logs" / "app.log").read_text(encoding="utf-8")


def test_logger_honours_log_dir(tmp_path: Path) -> None:
    logger = core_logger.get_logger(log_dir=tmp_path / "custom")
    logger.info("custom dir")
    for handler in logger.handlers:
        handler.flush()
    assert "custom dir" in (tmp_path / "custom" / "app.log").read_text(encoding="utf-8")

def test_work_dirs_follow_root_env(tmp_path: Path) -> None:
    dirs = ensure_work_dirs()
    assert dirs["shot"] == tmp_path / "root" / "work" / "logs" / "shot"
    assert dirs["shot"].is_dir()


def test_resolve_config_path_prefixes() -> None:
    bundled = resolve_config_path("profiles.yaml")
    assert bundled.name == "profiles.yaml"
    assert resolve_config_path("wdflow/config/profiles.yaml") == bundled
    assert resolve_config_path(bundled) == bundled
