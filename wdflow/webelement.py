"""Element references bound to the session that issued them."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping

from selenium.webdriver.remote.shadowroot import ShadowRoot
from selenium.webdriver.remote.webelement import WebElement as WireElement

from wdflow.by import By
from wdflow.core.errors import (
    NoSuchElementError,
    StaleElementError,
    WebDriverIOError,
    WebDriverJsonError,
    command_errors,
)
from wdflow.core.logger import get_logger
from wdflow.models import ElementRect

if TYPE_CHECKING:
    from wdflow.session.handle import SessionHandle

ELEMENT_KEY = "element-6066-11e4-a52e-4f735466cecf"
SHADOW_ROOT_KEY = "shadow-6066-11e4-a52e-4f735466cecf"
LEGACY_ELEMENT_KEY = "ELEMENT"


def to_json_value(value: Any) -> Any:
    """Replace client element objects inside ``value`` with element JSON."""

    if isinstance(value, WebElement):
        return value.to_json()
    if isinstance(value, WireElement):
        return {ELEMENT_KEY: value.id}
    if isinstance(value, ShadowRoot):
        return {SHADOW_ROOT_KEY: value.id}
    if isinstance(value, Mapping):
        return {key: to_json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_value(item) for item in value]
    return value


def to_script_arg(value: Any) -> Any:
    """Unwrap ``WebElement`` instances so the client sends them as element references."""

    if isinstance(value, WebElement):
        return value.element
    if isinstance(value, Mapping):
        return {key: to_script_arg(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_script_arg(item) for item in value]
    return value


def _property_text(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    # Booleans and numbers come back as their JSON text.
    return json.dumps(to_json_value(value))


class WebElement:
    """A DOM element reference paired with its owning session.

    Element references are only valid within the session that returned
    them; the remote end rejects foreign ids.
    """

    def __init__(self, element: WireElement | ShadowRoot, handle: "SessionHandle") -> None:
        self.element = element
        self.handle = handle
        self.logger = get_logger()

    @classmethod
    def from_json(cls, value: Any, handle: "SessionHandle") -> "WebElement":
        """Build an element from element JSON returned by a script."""

        if isinstance(value, WebElement):
            return cls(value.element, handle)
        if isinstance(value, (WireElement, ShadowRoot)):
            return cls(value, handle)
        if not isinstance(value, Mapping):
            raise WebDriverJsonError(f"Expected element JSON, got {type(value).__name__}: {value!r}")
        if ELEMENT_KEY in value or LEGACY_ELEMENT_KEY in value:
            element_id = value.get(ELEMENT_KEY, value.get(LEGACY_ELEMENT_KEY))
            if not isinstance(element_id, str):
                raise WebDriverJsonError(f"Invalid element id: {element_id!r}")
            return cls(handle.client.create_web_element(element_id), handle)
        if SHADOW_ROOT_KEY in value:
            root_id = value[SHADOW_ROOT_KEY]
            if not isinstance(root_id, str):
                raise WebDriverJsonError(f"Invalid shadow root id: {root_id!r}")
            return cls(ShadowRoot(handle.client, root_id), handle)
        raise WebDriverJsonError(f"Value is not an element reference: {value!r}")

    def to_json(self) -> dict[str, str]:
        if isinstance(self.element, ShadowRoot):
            return {SHADOW_ROOT_KEY: self.element.id}
        return {ELEMENT_KEY: self.element.id}

    @property
    def element_id(self) -> str:
        return self.element.id

    # ------------------------------------------------------------------
    # Accessors
    def rect(self) -> ElementRect:
        with command_errors():
            data = self.element.rect
        return ElementRect(
            x=float(data["x"]),
            y=float(data["y"]),
            width=float(data["width"]),
            height=float(data["height"]),
        )

    def tag_name(self) -> str:
        with command_errors():
            return self.element.tag_name

    def class_name(self) -> str | None:
        return self.get_attribute("class")

    def id(self) -> str | None:
        return self.get_attribute("id")

    def text(self) -> str:
        with command_errors():
            return self.element.text

    def value(self) -> str | None:
        return self.get_attribute("value")

    def get_property(self, name: str) -> str | None:
        with command_errors():
            return _property_text(self.element.get_property(name))

    def get_attribute(self, name: str) -> str | None:
        """Return the attribute, or the property of the same name when it is set."""

        with command_errors():
            return _property_text(self.element.get_attribute(name))

    def get_dom_attribute(self, name: str) -> str | None:
        """Return the attribute exactly as declared in the markup."""

        with command_errors():
            return _property_text(self.element.get_dom_attribute(name))

    def get_css_property(self, name: str) -> str:
        with command_errors():
            return self.element.value_of_css_property(name)

    def inner_html(self) -> str:
        return self.get_property("innerHTML") or ""

    def outer_html(self) -> str:
        return self.get_property("outerHTML") or ""

    # ------------------------------------------------------------------
    # State
    def is_selected(self) -> bool:
        with command_errors():
            return bool(self.element.is_selected())

    def is_displayed(self) -> bool:
        with command_errors():
            return bool(self.element.is_displayed())

    def is_enabled(self) -> bool:
        with command_errors():
            return bool(self.element.is_enabled())

    def is_clickable(self) -> bool:
        return self.is_displayed() and self.is_enabled()

    def is_present(self) -> bool:
        """Return False once the element no longer exists in the document."""

        try:
            self.tag_name()
        except (NoSuchElementError, StaleElementError):
            return False
        return True

    # ------------------------------------------------------------------
    # Interaction
    def click(self) -> None:
        with command_errors():
            self.element.click()

    def clear(self) -> None:
        with command_errors():
            self.element.clear()

    def send_keys(self, keys: str) -> None:
        with command_errors():
            self.element.send_keys(keys)

    def focus(self) -> None:
        self.handle.execute_script("arguments[0].focus();", self)

    def scroll_into_view(self) -> None:
        self.handle.execute_script("arguments[0].scrollIntoView();", self)

    def get_shadow_root(self) -> "WebElement":
        ret = self.handle.execute_script("return arguments[0].shadowRoot", self)
        return ret.get_element()

    # ------------------------------------------------------------------
    # Queries
    def find_element(self, by: By) -> "WebElement":
        # Only the failing query is useful in the error message.
        with command_errors(query=str(by)):
            found = self.element.find_element(*by.locator())
        return WebElement(found, self.handle)

    def find_elements(self, by: By) -> list["WebElement"]:
        with command_errors(query=str(by)):
            found = self.element.find_elements(*by.locator())
        return [WebElement(item, self.handle) for item in found]

    # ------------------------------------------------------------------
    # Screenshots
    def screenshot_as_png(self) -> bytes:
        with command_errors():
            return self.element.screenshot_as_png

    def screenshot(self, path: str | Path) -> Path:
        png = self.screenshot_as_png()
        target = Path(path)
        try:
            target.write_bytes(png)
        except OSError as exc:
            raise WebDriverIOError(f"Failed to write element screenshot to {target}: {exc}") from exc
        self.logger.info("Element screenshot saved: %s", target)
        return target

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WebElement):
            return NotImplemented
        return self.element_id == other.element_id

    def __hash__(self) -> int:
        return hash(self.element_id)

    def __repr__(self) -> str:
        return f"WebElement(element={self.element_id!r})"

    __str__ = __repr__


__all__ = [
    "ELEMENT_KEY",
    "LEGACY_ELEMENT_KEY",
    "SHADOW_ROOT_KEY",
    "WebElement",
    "to_json_value",
    "to_script_arg",
]
