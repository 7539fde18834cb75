"""Convenience layer over selenium's WebDriver client."""

from .by import By
from .capabilities import DesiredCapabilities
from .core.errors import (
    CommandError,
    ConfigError,
    NoSuchElementError,
    StaleElementError,
    WdflowError,
    WebDriverError,
    WebDriverIOError,
    WebDriverJsonError,
)
from .models import ElementRect, TimeoutConfiguration, WindowRect
from .session import ScriptRet, SessionHandle
from .webdriver import WebDriver
from .webelement import WebElement

__all__ = [
    "By",
    "CommandError",
    "ConfigError",
    "DesiredCapabilities",
    "ElementRect",
    "NoSuchElementError",
    "ScriptRet",
    "SessionHandle",
    "StaleElementError",
    "TimeoutConfiguration",
    "WdflowError",
    "WebDriver",
    "WebDriverError",
    "WebDriverIOError",
    "WebDriverJsonError",
    "WebElement",
    "WindowRect",
]
