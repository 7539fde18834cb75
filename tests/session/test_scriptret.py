from __future__ import annotations

from dataclasses import dataclass
from unittest.mock import MagicMock

import pytest
from pydantic import BaseModel
from selenium.webdriver.remote.webelement import WebElement as WireElement

from wdflow.core.errors import WebDriverJsonError
from wdflow.session import ScriptRet, SessionHandle
from wdflow.webelement import ELEMENT_KEY, WebElement


@dataclass
class Point:
    x: int
    y: int


class Viewport(BaseModel):
    width: int
    height: int
    title: str | None = None


def test_convert_builtin_types(handle: SessionHandle) -> None:
    assert ScriptRet(handle, 42).convert(int) == 42
    assert ScriptRet(handle, ["a", "b"]).convert(list[str]) == ["a", "b"]
    assert ScriptRet(handle, None).convert(type(None)) is None


def test_convert_structured_types(handle: SessionHandle) -> None:
    assert ScriptRet(handle, {"x": 1, "y": 2}).convert(Point) == Point(1, 2)
    viewport = ScriptRet(handle, {"width": 1280, "height": 720}).convert(Viewport)
    assert viewport.width == 1280
    assert viewport.title is None


def test_convert_failure(handle: SessionHandle) -> None:
    with pytest.raises(WebDriverJsonError):
        ScriptRet(handle, {"x": "left"}).convert(Point)


@pytest.mark.parametrize(
    ("value", "type_"),
    [
        ("5", int),
        ("true", bool),
        (1, bool),
        ("1.5", float),
        (3.5, int),
    ],
)
def test_convert_does_not_coerce(handle: SessionHandle, value: object, type_: type) -> None:
    with pytest.raises(WebDriverJsonError):
        ScriptRet(handle, value).convert(type_)


def test_convert_accepts_int_for_float(handle: SessionHandle) -> None:
    assert ScriptRet(handle, 3).convert(float) == 3.0


def test_value_normalizes_client_elements(handle: SessionHandle, client: MagicMock) -> None:
    ret = ScriptRet(handle, (WireElement(client, "a"), 1))
    assert ret.value == [{ELEMENT_KEY: "a"}, 1]


def test_get_element(handle: SessionHandle, client: MagicMock) -> None:
    ret = ScriptRet(handle, WireElement(client, "single"))
    element = ret.get_element()
    assert isinstance(element, WebElement)
    assert element.element_id == "single"
    assert element.handle is handle


def test_get_element_rejects_non_element(handle: SessionHandle) -> None:
    with pytest.raises(WebDriverJsonError):
        ScriptRet(handle, "hello").get_element()


def test_get_elements_share_handle(handle: SessionHandle) -> None:
    ret = ScriptRet(handle, [{ELEMENT_KEY: "a"}, {ELEMENT_KEY: "b"}])
    elements = ret.get_elements()
    assert [item.element_id for item in elements] == ["a", "b"]
    assert all(item.handle is handle for item in elements)


def test_get_elements_requires_array(handle: SessionHandle) -> None:
    with pytest.raises(WebDriverJsonError):
        ScriptRet(handle, {ELEMENT_KEY: "a"}).get_elements()


def test_get_elements_rejects_mixed_array(handle: SessionHandle) -> None:
    with pytest.raises(WebDriverJsonError):
        ScriptRet(handle, [{ELEMENT_KEY: "a"}, 5]).get_elements()
