from __future__ import annotations

import faulthandler
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

faulthandler.enable()  # Ensure crashes emit tracebacks.

from selenium.webdriver.remote.webelement import WebElement as WireElement

import wdflow.core.logger as core_logger
from wdflow.session import SessionHandle


@pytest.fixture(autouse=True)
def _isolated_logging(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep log files out of the project workspace."""

    monkeypatch.setenv("WDFLOW_ROOT", str(tmp_path / "root"))
    monkeypatch.setattr(core_logger, "_work_dir", lambda: tmp_path / "work")
    monkeypatch.setattr(core_logger, "_LOGGER", None, raising=False)


@pytest.fixture
def client() -> MagicMock:
    """A stand-in for ``selenium.webdriver.Remote``."""

    fake = MagicMock(name="RemoteClient")
    fake.session_id = "session-1"
    fake.create_web_element.side_effect = lambda element_id: WireElement(fake, element_id)
    return fake


@pytest.fixture
def handle(client: MagicMock) -> SessionHandle:
    return SessionHandle(client, {"browserName": "chrome"})


@pytest.fixture
def make_element():
    """Factory for mock selenium elements carrying an id."""

    def _make(element_id: str = "el-1") -> MagicMock:
        element = MagicMock(name=f"element-{element_id}")
        element.id = element_id
        return element

    return _make
