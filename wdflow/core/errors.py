"""Custom exceptions used across wdflow."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from selenium.common import exceptions as wd_exc


class WdflowError(Exception):
    """Base error for the application."""


class ConfigError(WdflowError):
    """Configuration related error."""


class WebDriverError(WdflowError):
    """Raised when a WebDriver operation fails."""


class NoSuchElementError(WebDriverError):
    """No element matched the query. The message is the failing query."""


class StaleElementError(WebDriverError):
    """The element reference is no longer attached to the DOM."""


class ElementNotInteractableError(WebDriverError):
    """The element exists but cannot be interacted with."""


class ElementClickInterceptedError(WebDriverError):
    """Another element would receive the click."""


class NoSuchWindowError(WebDriverError):
    """The target window or tab does not exist."""


class NoSuchFrameError(WebDriverError):
    """The target frame does not exist."""


class NoSuchAlertError(WebDriverError):
    """No alert is currently open."""


class NoSuchCookieError(WebDriverError):
    """No cookie with the requested name exists."""


class InvalidArgumentError(WebDriverError):
    """The remote end rejected a command argument."""


class ScriptError(WebDriverError):
    """A script raised an error in the browser."""


class WebDriverTimeoutError(WebDriverError):
    """A command did not complete within its timeout."""


class SessionNotCreatedError(WebDriverError):
    """The remote end refused to create a session."""


class CommandError(WebDriverError):
    """Any other error returned by the WebDriver client."""


class WebDriverJsonError(WebDriverError):
    """Raised when a script return value or element JSON cannot be decoded."""


class WebDriverIOError(WebDriverError):
    """Raised when writing WebDriver output (e.g. screenshots) to disk fails."""


# Order matters: subclasses before their selenium base classes.
_ERROR_MAP: tuple[tuple[type[wd_exc.WebDriverException], type[WebDriverError]], ...] = (
    (wd_exc.NoSuchElementException, NoSuchElementError),
    (wd_exc.StaleElementReferenceException, StaleElementError),
    (wd_exc.ElementClickInterceptedException, ElementClickInterceptedError),
    (wd_exc.ElementNotInteractableException, ElementNotInteractableError),
    (wd_exc.NoSuchWindowException, NoSuchWindowError),
    (wd_exc.NoSuchFrameException, NoSuchFrameError),
    (wd_exc.NoAlertPresentException, NoSuchAlertError),
    (wd_exc.NoSuchCookieException, NoSuchCookieError),
    (wd_exc.InvalidArgumentException, InvalidArgumentError),
    (wd_exc.JavascriptException, ScriptError),
    (wd_exc.TimeoutException, WebDriverTimeoutError),
    (wd_exc.SessionNotCreatedException, SessionNotCreatedError),
)


def translate_error(exc: wd_exc.WebDriverException, *, query: str | None = None) -> WebDriverError:
    """Map a selenium exception onto the wdflow hierarchy.

    When ``query`` is given and the element was not found, the resulting
    message is the query itself rather than the remote end's message.
    """

    message = (exc.msg or str(exc)).strip()
    for source, target in _ERROR_MAP:
        if isinstance(exc, source):
            if target is NoSuchElementError and query is not None:
                return NoSuchElementError(query)
            return target(message)
    return CommandError(message)


@contextmanager
def command_errors(query: str | None = None) -> Iterator[None]:
    """Re-raise selenium exceptions raised inside the block as ``WebDriverError``."""

    try:
        yield
    except wd_exc.WebDriverException as exc:
        raise translate_error(exc, query=query) from exc
