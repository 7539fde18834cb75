"""Element locators.

W3C WebDriver only understands CSS selectors, XPath, link text, partial
link text and tag names. ``id``, ``name`` and ``class_name`` locators are
rewritten to CSS selectors before they are sent.
"""

from __future__ import annotations

from dataclasses import dataclass

from selenium.webdriver.common.by import By as _WireBy


_LABELS = {
    "id": "Id",
    "name": "Name",
    "class_name": "ClassName",
    "tag": "Tag",
    "css": "Css",
    "xpath": "XPath",
    "link_text": "LinkText",
    "partial_link_text": "PartialLinkText",
}


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


@dataclass(slots=True, frozen=True)
class By:
    """An element query: a strategy plus the value to match."""

    strategy: str
    value: str

    def __post_init__(self) -> None:
        if self.strategy not in _LABELS:
            raise ValueError(f"Unknown locator strategy: {self.strategy}")

    @classmethod
    def id(cls, value: str) -> "By":
        return cls("id", value)

    @classmethod
    def name(cls, value: str) -> "By":
        return cls("name", value)

    @classmethod
    def class_name(cls, value: str) -> "By":
        return cls("class_name", value)

    @classmethod
    def tag(cls, value: str) -> "By":
        return cls("tag", value)

    @classmethod
    def css(cls, value: str) -> "By":
        return cls("css", value)

    @classmethod
    def xpath(cls, value: str) -> "By":
        return cls("xpath", value)

    @classmethod
    def link_text(cls, value: str) -> "By":
        return cls("link_text", value)

    @classmethod
    def partial_link_text(cls, value: str) -> "By":
        return cls("partial_link_text", value)

    def locator(self) -> tuple[str, str]:
        """Return the ``(using, value)`` pair sent over the wire."""

        if self.strategy == "id":
            return _WireBy.CSS_SELECTOR, f"[id={_quote(self.value)}]"
        if self.strategy == "name":
            return _WireBy.CSS_SELECTOR, f"[name={_quote(self.value)}]"
        if self.strategy == "class_name":
            return _WireBy.CSS_SELECTOR, f".{self.value}"
        if self.strategy == "tag":
            return _WireBy.TAG_NAME, self.value
        if self.strategy == "css":
            return _WireBy.CSS_SELECTOR, self.value
        if self.strategy == "xpath":
            return _WireBy.XPATH, self.value
        if self.strategy == "link_text":
            return _WireBy.LINK_TEXT, self.value
        return _WireBy.PARTIAL_LINK_TEXT, self.value

    def __str__(self) -> str:
        return f"{_LABELS[self.strategy]}({self.value})"


__all__ = ["By"]
