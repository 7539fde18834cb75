"""Configuration loader for WebDriver sessions.

Named profiles live under the ``webdriver`` section of ``profiles.yaml``.
Environment variables (also read from a ``.env`` file) override profile
values so CI jobs can point at a different grid without editing files.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping

import yaml

from wdflow.capabilities import add_arguments, normalize_browser_name, set_headless
from wdflow.core.errors import ConfigError
from wdflow.core.logger import get_logger
from wdflow.core.paths import resolve_config_path
from wdflow.models import (
    DEFAULT_IMPLICIT_WAIT,
    DEFAULT_PAGE_LOAD_TIMEOUT,
    DEFAULT_SCRIPT_TIMEOUT,
    TimeoutConfiguration,
)

if TYPE_CHECKING:
    from wdflow.webdriver import WebDriver

DEFAULT_SERVER_URL = "http://localhost:4444"
DEFAULT_BROWSER = "chrome"
DEFAULT_PROFILE = "local-chrome"

SERVER_URL_ENV = "WDFLOW_SERVER_URL"
BROWSER_ENV = "WDFLOW_BROWSER"
HEADLESS_ENV = "WDFLOW_HEADLESS"
SCRIPT_TIMEOUT_ENV = "WDFLOW_SCRIPT_TIMEOUT"
PAGE_LOAD_TIMEOUT_ENV = "WDFLOW_PAGE_LOAD_TIMEOUT"
IMPLICIT_WAIT_ENV = "WDFLOW_IMPLICIT_WAIT"

_PLACEHOLDER = re.compile(r"\$\{(\w+)\}")
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(slots=True)
class DriverConfig:
    """Resolved configuration for opening a WebDriver session."""

    server_url: str = DEFAULT_SERVER_URL
    browser: str = DEFAULT_BROWSER
    headless: bool = False
    arguments: tuple[str, ...] = ()
    extra_capabilities: Mapping[str, Any] = field(default_factory=dict)
    timeouts: TimeoutConfiguration = field(default_factory=TimeoutConfiguration)

    @classmethod
    def from_profile(cls, profile_name: str, *, config_path: str | Path | None = None) -> "DriverConfig":
        """Create a configuration instance from profiles.yaml.

        Args:
            profile_name: Profile name under the ``webdriver`` section.
            config_path: Optional override for the config file path.

        Raises:
            ConfigError: If the profile cannot be found or is invalid.
        """

        raw = _load_profiles_file(path=config_path).get(profile_name)
        if raw is None:
            raise ConfigError(f"webdriver profile '{profile_name}' not found in profiles.yaml")
        return cls.from_mapping(raw)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DriverConfig":
        """Create a configuration instance from a mapping."""

        arguments = data.get("arguments") or []
        if not isinstance(arguments, list):
            raise ConfigError("arguments must be a list of strings")
        capabilities = data.get("capabilities") or {}
        if not isinstance(capabilities, Mapping):
            raise ConfigError("capabilities must be a mapping")
        return cls(
            server_url=_expand_env(data.get("server_url", DEFAULT_SERVER_URL)),
            browser=normalize_browser_name(_expand_env(data.get("browser", DEFAULT_BROWSER))),
            headless=_parse_bool(data.get("headless", False), "headless"),
            arguments=tuple(str(_expand_env(arg)) for arg in arguments),
            extra_capabilities={k: _expand_env(v) for k, v in capabilities.items()},
            timeouts=_timeouts_from_mapping(_ensure_mapping(data.get("timeouts"))),
        )

    def capabilities(self) -> dict[str, Any]:
        """Build the W3C capabilities requested for new sessions."""

        caps: dict[str, Any] = {"browserName": self.browser}
        caps.update(self.extra_capabilities)
        caps["browserName"] = self.browser
        if self.arguments:
            caps = add_arguments(caps, list(self.arguments))
        if self.headless:
            caps = set_headless(caps)
        return caps

    def connect(self) -> "WebDriver":
        """Open a new session described by this configuration."""

        from wdflow.webdriver import WebDriver

        return WebDriver(self.server_url, self.capabilities(), timeouts=self.timeouts)


def _read_env(key: str) -> str | None:
    value = os.getenv(key)
    if value is None:
        return None
    return value.strip()


def _read_env_float(key: str) -> float | None:
    value = _read_env(key)
    if value is None or value == "":
        return None
    try:
        return float(value)
    except ValueError as exc:  # noqa: BLE001 - configuration validation
        raise ConfigError(f"Environment variable {key} must be a number") from exc


def _parse_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


def _optional_seconds(data: Mapping[str, Any], key: str, default: float) -> float | None:
    if key not in data:
        return default
    value = data[key]
    if value is None:
        return None
    try:
        seconds = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"timeouts.{key} must be a number of seconds") from exc
    if seconds < 0:
        raise ConfigError(f"timeouts.{key} must not be negative")
    return seconds


def _timeouts_from_mapping(data: Mapping[str, Any] | None) -> TimeoutConfiguration:
    if not data:
        return TimeoutConfiguration()
    return TimeoutConfiguration(
        script=_optional_seconds(data, "script", DEFAULT_SCRIPT_TIMEOUT),
        page_load=_optional_seconds(data, "page_load", DEFAULT_PAGE_LOAD_TIMEOUT),
        implicit=_optional_seconds(data, "implicit", DEFAULT_IMPLICIT_WAIT),
    )


def load_server_url(config: DriverConfig | None = None) -> str:
    """Return the remote end URL from env or configuration."""

    return _read_env(SERVER_URL_ENV) or (config.server_url if config else DEFAULT_SERVER_URL)


def load_browser(config: DriverConfig | None = None) -> str:
    value = _read_env(BROWSER_ENV)
    if value:
        return normalize_browser_name(value)
    return config.browser if config else DEFAULT_BROWSER


def load_headless(config: DriverConfig | None = None) -> bool:
    value = _read_env(HEADLESS_ENV)
    if value:
        return _parse_bool(value, HEADLESS_ENV)
    return config.headless if config else False


def load_timeouts(config: DriverConfig | None = None) -> TimeoutConfiguration:
    """Return session timeouts applying environment overrides."""

    base = config.timeouts if config else TimeoutConfiguration()
    script = _read_env_float(SCRIPT_TIMEOUT_ENV)
    page_load = _read_env_float(PAGE_LOAD_TIMEOUT_ENV)
    implicit = _read_env_float(IMPLICIT_WAIT_ENV)
    return TimeoutConfiguration(
        script=base.script if script is None else script,
        page_load=base.page_load if page_load is None else page_load,
        implicit=base.implicit if implicit is None else implicit,
    )


def resolve_config(profile: str | None = None, *, config_path: str | Path | None = None) -> DriverConfig:
    """Resolve configuration from a profile or defaults, with environment overrides."""

    if profile:
        base = DriverConfig.from_profile(profile, config_path=config_path)
    else:
        base = DriverConfig()
    resolved = DriverConfig(
        server_url=load_server_url(base),
        browser=load_browser(base),
        headless=load_headless(base),
        arguments=base.arguments,
        extra_capabilities=base.extra_capabilities,
        timeouts=load_timeouts(base),
    )
    get_logger().debug("Resolved webdriver config: %s", resolved)
    return resolved


def _ensure_mapping(value: Any) -> Mapping[str, Any] | None:
    if isinstance(value, Mapping):
        return value
    return None


def _expand_env(value: Any) -> Any:
    if not isinstance(value, str):
        return value

    def _lookup(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in os.environ:
            raise ConfigError(f"Environment variable {name} not set for value: {value}")
        return os.environ[name]

    return _PLACEHOLDER.sub(_lookup, value)


def _load_profiles_file(*, path: str | Path | None) -> dict[str, Mapping[str, Any]]:
    cfg_path = resolve_config_path(path or "profiles.yaml")
    if not cfg_path.exists():
        raise ConfigError(f"profiles.yaml not found at {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    section = data.get("webdriver") if isinstance(data, Mapping) else None
    if not isinstance(section, Mapping):
        raise ConfigError("profiles.yaml missing 'webdriver' section")
    profiles: dict[str, Mapping[str, Any]] = {}
    for key, value in section.items():
        if not isinstance(value, Mapping):
            get_logger().warning("Ignoring webdriver profile %s with invalid type", key)
            continue
        profiles[str(key)] = value
    if not profiles:
        raise ConfigError("No webdriver profiles defined in profiles.yaml")
    return profiles


__all__ = [
    "DEFAULT_PROFILE",
    "DriverConfig",
    "BROWSER_ENV",
    "HEADLESS_ENV",
    "IMPLICIT_WAIT_ENV",
    "PAGE_LOAD_TIMEOUT_ENV",
    "SCRIPT_TIMEOUT_ENV",
    "SERVER_URL_ENV",
    "load_browser",
    "load_headless",
    "load_server_url",
    "load_timeouts",
    "resolve_config",
]
