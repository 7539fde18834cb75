"""Capability helpers and conversion to selenium options objects."""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Mapping

from selenium.webdriver.common.options import ArgOptions

from wdflow.core.errors import ConfigError

BROWSER_ALIASES = {
    "chrome": "chrome",
    "chromium": "chrome",
    "firefox": "firefox",
    "edge": "MicrosoftEdge",
    "msedge": "MicrosoftEdge",
    "microsoftedge": "MicrosoftEdge",
    "safari": "safari",
}

# Vendor prefixed option blocks, keyed by W3C browser name.
_VENDOR_OPTIONS_KEY = {
    "chrome": "goog:chromeOptions",
    "MicrosoftEdge": "ms:edgeOptions",
    "firefox": "moz:firefoxOptions",
}


def normalize_browser_name(name: str) -> str:
    """Return the W3C ``browserName`` for a user facing browser alias."""

    key = name.strip().lower()
    if key not in BROWSER_ALIASES:
        raise ConfigError(f"Unsupported browser: {name}")
    return BROWSER_ALIASES[key]


class DesiredCapabilities:
    """Fresh capability dictionaries for the common browsers."""

    @staticmethod
    def chrome() -> dict[str, Any]:
        return {"browserName": "chrome"}

    @staticmethod
    def firefox() -> dict[str, Any]:
        return {"browserName": "firefox"}

    @staticmethod
    def edge() -> dict[str, Any]:
        return {"browserName": "MicrosoftEdge"}

    @staticmethod
    def safari() -> dict[str, Any]:
        return {"browserName": "safari"}


def add_arguments(capabilities: Mapping[str, Any], arguments: list[str]) -> dict[str, Any]:
    """Return a copy of ``capabilities`` with browser command line arguments appended."""

    caps = deepcopy(dict(capabilities))
    if not arguments:
        return caps
    browser = caps.get("browserName", "")
    key = _VENDOR_OPTIONS_KEY.get(browser)
    if key is None:
        raise ConfigError(f"Browser arguments are not supported for {browser or 'unknown browser'}")
    vendor = caps.setdefault(key, {})
    existing = list(vendor.get("args", []))
    vendor["args"] = existing + [arg for arg in arguments if arg not in existing]
    return caps


def set_headless(capabilities: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``capabilities`` configured for a headless browser."""

    browser = dict(capabilities).get("browserName", "")
    if browser in ("chrome", "MicrosoftEdge"):
        return add_arguments(capabilities, ["--headless=new"])
    if browser == "firefox":
        return add_arguments(capabilities, ["-headless"])
    raise ConfigError(f"Headless mode is not supported for {browser or 'unknown browser'}")


def to_options(capabilities: Mapping[str, Any] | ArgOptions) -> ArgOptions:
    """Wrap a W3C capabilities mapping in a selenium options object.

    The generic ``ArgOptions`` is used for every browser so vendor blocks
    such as ``goog:chromeOptions`` are sent exactly as given.
    """

    if isinstance(capabilities, ArgOptions):
        return capabilities
    options = ArgOptions()
    for name, value in dict(capabilities).items():
        options.set_capability(name, deepcopy(value))
    return options


__all__ = [
    "BROWSER_ALIASES",
    "DesiredCapabilities",
    "add_arguments",
    "normalize_browser_name",
    "set_headless",
    "to_options",
]
