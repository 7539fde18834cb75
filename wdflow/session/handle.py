"""Shared session handle forwarding to the selenium client."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.remote.command import Command
from selenium.webdriver.remote.webdriver import WebDriver as RemoteClient

from wdflow.by import By
from wdflow.core.errors import NoSuchCookieError, WebDriverIOError, command_errors
from wdflow.core.logger import get_logger
from wdflow.models import TimeoutConfiguration, WindowRect
from wdflow.webelement import WebElement, to_script_arg

from .scriptret import ScriptRet


class SessionHandle:
    """A shareable reference to an active WebDriver session.

    Handles are cheap: :meth:`clone` returns another handle over the same
    selenium client, and every :class:`WebElement` keeps one so it can run
    scripts against its own session.
    """

    def __init__(self, client: RemoteClient, capabilities: Mapping[str, Any] | None = None) -> None:
        self.client = client
        self.capabilities: dict[str, Any] = dict(capabilities or {})
        self.logger = get_logger()

    def clone(self) -> "SessionHandle":
        return SessionHandle(self.client, self.capabilities)

    @property
    def session_id(self) -> str:
        return self.client.session_id

    @property
    def browser_capabilities(self) -> dict[str, Any]:
        """Capabilities reported by the remote end for this session."""

        return dict(self.client.capabilities or {})

    # ------------------------------------------------------------------
    # Navigation
    def get(self, url: str) -> None:
        self.logger.info("Navigating to %s", url)
        with command_errors():
            self.client.get(url)

    def current_url(self) -> str:
        with command_errors():
            return self.client.current_url

    def title(self) -> str:
        with command_errors():
            return self.client.title

    def page_source(self) -> str:
        with command_errors():
            return self.client.page_source

    def back(self) -> None:
        with command_errors():
            self.client.back()

    def forward(self) -> None:
        with command_errors():
            self.client.forward()

    def refresh(self) -> None:
        with command_errors():
            self.client.refresh()

    # ------------------------------------------------------------------
    # Elements
    def find_element(self, by: By) -> WebElement:
        """Find the first element matching ``by``.

        Raises:
            NoSuchElementError: Nothing matched. The message is ``str(by)``.
        """

        with command_errors(query=str(by)):
            element = self.client.find_element(*by.locator())
        return WebElement(element, self.clone())

    def find_elements(self, by: By) -> list[WebElement]:
        with command_errors(query=str(by)):
            elements = self.client.find_elements(*by.locator())
        return [WebElement(element, self.clone()) for element in elements]

    def active_element(self) -> WebElement:
        with command_errors():
            element = self.client.switch_to.active_element
        return WebElement(element, self.clone())

    # ------------------------------------------------------------------
    # Scripts
    def execute_script(self, script: str, *args: Any) -> ScriptRet:
        """Run a synchronous script. ``WebElement`` arguments are sent as element references."""

        self.logger.debug("execute_script: %s", script)
        with command_errors():
            value = self.client.execute_script(script, *to_script_arg(list(args)))
        return ScriptRet(self.clone(), value)

    def execute_async_script(self, script: str, *args: Any) -> ScriptRet:
        """Run a script that signals completion via its final callback argument."""

        self.logger.debug("execute_async_script: %s", script)
        with command_errors():
            value = self.client.execute_async_script(script, *to_script_arg(list(args)))
        return ScriptRet(self.clone(), value)

    # ------------------------------------------------------------------
    # Windows
    def current_window_handle(self) -> str:
        with command_errors():
            return self.client.current_window_handle

    def window_handles(self) -> list[str]:
        with command_errors():
            return list(self.client.window_handles)

    def switch_to_window(self, handle: str) -> None:
        with command_errors():
            self.client.switch_to.window(handle)

    def new_tab(self) -> str:
        """Open a new tab and return its handle without switching to it."""

        return self._new_window("tab")

    def new_window(self) -> str:
        """Open a new window and return its handle without switching to it."""

        return self._new_window("window")

    def _new_window(self, kind: str) -> str:
        with command_errors():
            response = self.client.execute(Command.NEW_WINDOW, {"type": kind})
        return response["value"]["handle"]

    def close_window(self) -> None:
        with command_errors():
            self.client.close()

    def maximize_window(self) -> None:
        with command_errors():
            self.client.maximize_window()

    def minimize_window(self) -> None:
        with command_errors():
            self.client.minimize_window()

    def fullscreen_window(self) -> None:
        with command_errors():
            self.client.fullscreen_window()

    def get_window_rect(self) -> WindowRect:
        with command_errors():
            data = self.client.get_window_rect()
        return WindowRect(
            x=int(data["x"]),
            y=int(data["y"]),
            width=int(data["width"]),
            height=int(data["height"]),
        )

    def set_window_rect(
        self,
        *,
        x: int | None = None,
        y: int | None = None,
        width: int | None = None,
        height: int | None = None,
    ) -> WindowRect:
        with command_errors():
            self.client.set_window_rect(x=x, y=y, width=width, height=height)
        return self.get_window_rect()

    # ------------------------------------------------------------------
    # Frames
    def enter_frame(self, index: int) -> None:
        with command_errors():
            self.client.switch_to.frame(index)

    def enter_frame_element(self, element: WebElement) -> None:
        with command_errors():
            self.client.switch_to.frame(element.element)

    def enter_parent_frame(self) -> None:
        with command_errors():
            self.client.switch_to.parent_frame()

    def enter_default_frame(self) -> None:
        with command_errors():
            self.client.switch_to.default_content()

    # ------------------------------------------------------------------
    # Alerts
    def get_alert_text(self) -> str:
        with command_errors():
            return self.client.switch_to.alert.text

    def accept_alert(self) -> None:
        with command_errors():
            self.client.switch_to.alert.accept()

    def dismiss_alert(self) -> None:
        with command_errors():
            self.client.switch_to.alert.dismiss()

    def send_alert_text(self, text: str) -> None:
        with command_errors():
            self.client.switch_to.alert.send_keys(text)

    # ------------------------------------------------------------------
    # Cookies
    def get_cookies(self) -> list[dict[str, Any]]:
        with command_errors():
            return list(self.client.get_cookies())

    def get_named_cookie(self, name: str) -> dict[str, Any]:
        with command_errors():
            cookie = self.client.get_cookie(name)
        if cookie is None:
            raise NoSuchCookieError(name)
        return cookie

    def add_cookie(self, cookie: Mapping[str, Any]) -> None:
        with command_errors():
            self.client.add_cookie(dict(cookie))

    def delete_cookie(self, name: str) -> None:
        with command_errors():
            self.client.delete_cookie(name)

    def delete_all_cookies(self) -> None:
        with command_errors():
            self.client.delete_all_cookies()

    # ------------------------------------------------------------------
    # Timeouts
    def get_timeouts(self) -> TimeoutConfiguration:
        with command_errors():
            timeouts = self.client.timeouts
        return TimeoutConfiguration(
            script=timeouts.script,
            page_load=timeouts.page_load,
            implicit=timeouts.implicit_wait,
        )

    def update_timeouts(self, timeouts: TimeoutConfiguration) -> None:
        """Apply the timeouts that are set; ``None`` fields are left as they are."""

        if timeouts.script is not None:
            self.set_script_timeout(timeouts.script)
        if timeouts.page_load is not None:
            self.set_page_load_timeout(timeouts.page_load)
        if timeouts.implicit is not None:
            self.set_implicit_wait_timeout(timeouts.implicit)

    def set_script_timeout(self, seconds: float) -> None:
        with command_errors():
            self.client.set_script_timeout(seconds)

    def set_page_load_timeout(self, seconds: float) -> None:
        with command_errors():
            self.client.set_page_load_timeout(seconds)

    def set_implicit_wait_timeout(self, seconds: float) -> None:
        with command_errors():
            self.client.implicitly_wait(seconds)

    # ------------------------------------------------------------------
    # Actions
    def action_chain(self) -> ActionChains:
        return ActionChains(self.client)

    # ------------------------------------------------------------------
    # Screenshots
    def screenshot_as_png(self) -> bytes:
        with command_errors():
            return self.client.get_screenshot_as_png()

    def screenshot(self, path: str | Path) -> Path:
        png = self.screenshot_as_png()
        target = Path(path)
        try:
            target.write_bytes(png)
        except OSError as exc:
            raise WebDriverIOError(f"Failed to write screenshot to {target}: {exc}") from exc
        self.logger.info("Screenshot saved: %s", target)
        return target

    def __repr__(self) -> str:
        return f"{type(self).__name__}(session_id={self.client.session_id!r})"
