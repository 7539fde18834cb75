from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from selenium.common import exceptions as wd_exc
from selenium.webdriver.common.options import ArgOptions

import wdflow.webdriver as webdriver_module
from wdflow.capabilities import DesiredCapabilities
from wdflow.core.errors import InvalidArgumentError, SessionNotCreatedError
from wdflow.models import TimeoutConfiguration
from wdflow.session import SessionHandle
from wdflow.webdriver import WebDriver


@pytest.fixture
def remote(monkeypatch: pytest.MonkeyPatch, client: MagicMock) -> MagicMock:
    factory = MagicMock(return_value=client)
    monkeypatch.setattr(webdriver_module.webdriver, "Remote", factory)
    return factory


def test_new_session_applies_default_timeouts(remote: MagicMock, client: MagicMock) -> None:
    driver = WebDriver("http://grid:4444", DesiredCapabilities.firefox())

    remote.assert_called_once()
    kwargs = remote.call_args.kwargs
    assert kwargs["command_executor"] == "http://grid:4444"
    assert isinstance(kwargs["options"], ArgOptions)
    assert kwargs["options"].to_capabilities()["browserName"] == "firefox"

    client.set_script_timeout.assert_called_once_with(60.0)
    client.set_page_load_timeout.assert_called_once_with(60.0)
    client.implicitly_wait.assert_called_once_with(0.0)
    assert driver.capabilities["browserName"] == "firefox"
    assert driver.session_id == "session-1"


def test_custom_timeouts(remote: MagicMock, client: MagicMock) -> None:
    WebDriver("http://grid:4444", DesiredCapabilities.chrome(), timeouts=TimeoutConfiguration(script=5, page_load=None, implicit=None))
    client.set_script_timeout.assert_called_once_with(5)
    client.set_page_load_timeout.assert_not_called()
    client.implicitly_wait.assert_not_called()


def test_injected_client_skips_session_creation(remote: MagicMock, client: MagicMock) -> None:
    driver = WebDriver("http://grid:4444", {"browserName": "chrome"}, client=client)
    remote.assert_not_called()
    assert driver.client is client


def test_session_creation_failure_is_remapped(monkeypatch: pytest.MonkeyPatch) -> None:
    failing = MagicMock(side_effect=wd_exc.SessionNotCreatedException("no matching capabilities"))
    monkeypatch.setattr(webdriver_module.webdriver, "Remote", failing)
    with pytest.raises(SessionNotCreatedError, match="no matching capabilities"):
        WebDriver("http://grid:4444", DesiredCapabilities.safari())


def test_timeout_failure_closes_new_session(remote: MagicMock, client: MagicMock) -> None:
    client.set_script_timeout.side_effect = wd_exc.InvalidArgumentException("bad timeout")
    with pytest.raises(InvalidArgumentError):
        WebDriver("http://grid:4444", DesiredCapabilities.chrome())
    client.quit.assert_called_once_with()


def test_timeout_failure_leaves_injected_client_open(client: MagicMock) -> None:
    client.set_script_timeout.side_effect = wd_exc.InvalidArgumentException("bad timeout")
    with pytest.raises(InvalidArgumentError):
        WebDriver("http://grid:4444", DesiredCapabilities.chrome(), client=client)
    client.quit.assert_not_called()


def test_handle_is_a_shared_clone(remote: MagicMock, client: MagicMock) -> None:
    driver = WebDriver("http://grid:4444", DesiredCapabilities.chrome())
    handle = driver.handle
    assert type(handle) is SessionHandle
    assert handle.client is driver.client


def test_context_manager_quits(remote: MagicMock, client: MagicMock) -> None:
    with WebDriver("http://grid:4444", DesiredCapabilities.chrome()) as driver:
        driver.get("https://example.test")
    client.quit.assert_called_once_with()


def test_context_manager_quits_on_error(remote: MagicMock, client: MagicMock) -> None:
    with pytest.raises(RuntimeError):
        with WebDriver("http://grid:4444", DesiredCapabilities.chrome()):
            raise RuntimeError("boom")
    client.quit.assert_called_once_with()
