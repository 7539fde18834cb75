"""The ``WebDriver`` entry point owning a remote browser session."""

from __future__ import annotations

from typing import Any, Mapping

from selenium import webdriver
from selenium.webdriver.common.options import ArgOptions
from selenium.webdriver.remote.webdriver import WebDriver as RemoteClient

from wdflow.capabilities import to_options
from wdflow.core.errors import WdflowError, command_errors
from wdflow.core.logger import get_logger
from wdflow.models import TimeoutConfiguration
from wdflow.session.handle import SessionHandle


class WebDriver(SessionHandle):
    """A selenium remote session with the convenience API of :class:`SessionHandle`.

    Example::

        driver = WebDriver("http://localhost:4444", DesiredCapabilities.chrome())
        driver.get("http://webappdemo")
        driver.find_element(By.id("submit")).click()
        driver.quit()

    The browser is not closed when the object goes away; call :meth:`quit`
    or use the driver as a context manager.

    Note: if the session appears to hang, check that the capabilities match
    the browser served by the remote end.
    """

    def __init__(
        self,
        server_url: str,
        capabilities: Mapping[str, Any] | ArgOptions,
        *,
        timeouts: TimeoutConfiguration | None = None,
        client: RemoteClient | None = None,
    ) -> None:
        logger = get_logger()
        options = to_options(capabilities)
        caps = dict(options.to_capabilities())
        owns_client = client is None
        if client is None:
            logger.info("Creating session at %s (%s)", server_url, caps.get("browserName", "unknown browser"))
            with command_errors():
                client = webdriver.Remote(command_executor=server_url, options=options)
        super().__init__(client, caps)
        self.server_url = server_url
        try:
            self.update_timeouts(timeouts or TimeoutConfiguration())
        except WdflowError:
            if owns_client:
                logger.warning("Applying timeouts failed, closing session %s", client.session_id)
                client.quit()
            raise
        self.logger.info("Session %s started", self.session_id)

    @property
    def handle(self) -> SessionHandle:
        """A handle sharing this session, for passing to other components."""

        return self.clone()

    def quit(self) -> None:
        """End the session and close the browser."""

        session_id = self.session_id
        with command_errors():
            self.client.quit()
        self.logger.info("Session %s closed", session_id)

    def __enter__(self) -> "WebDriver":
        return self

    def __exit__(self, exc_type, exc, _tb) -> bool:
        if exc is not None:
            self.logger.error("WebDriver session failed: %s", exc)
        self.quit()
        # Do not suppress exceptions
        return False
