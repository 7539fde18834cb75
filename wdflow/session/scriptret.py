"""Return values of scripts executed in the browser."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from wdflow.core.errors import WebDriverJsonError
from wdflow.webelement import WebElement, to_json_value

if TYPE_CHECKING:
    from .handle import SessionHandle

T = TypeVar("T")


class ScriptRet:
    """Helper for getting return values from scripts.

    Created by :meth:`SessionHandle.execute_script` and
    :meth:`SessionHandle.execute_async_script`. Elements returned by the
    script are kept as element JSON until :meth:`get_element` or
    :meth:`get_elements` binds them back to the session.
    """

    def __init__(self, handle: "SessionHandle", value: Any) -> None:
        self.handle = handle
        self._value = to_json_value(value)

    @property
    def value(self) -> Any:
        """The raw JSON value."""

        return self._value

    def convert(self, type_: type[T]) -> T:
        """Deserialize the value into ``type_``.

        Any type pydantic can validate is accepted: builtins, generics such
        as ``list[str]``, dataclasses and models. Validation is strict, so
        ``"5"`` is not an ``int`` and ``1`` is not a ``bool``.
        """

        try:
            return TypeAdapter(type_).validate_json(json.dumps(self._value), strict=True)
        except ValidationError as exc:
            raise WebDriverJsonError(f"Script value cannot be converted to {type_!r}: {exc}") from exc

    def get_element(self) -> WebElement:
        """Get a single element. The script must return exactly one element."""

        return WebElement.from_json(self._value, self.handle)

    def get_elements(self) -> list[WebElement]:
        """Get a list of elements. The script must return an array of elements."""

        if not isinstance(self._value, list):
            raise WebDriverJsonError(f"Expected an array of elements, got {type(self._value).__name__}")
        return [WebElement.from_json(item, self.handle) for item in self._value]

    def __repr__(self) -> str:
        return f"ScriptRet(value={self._value!r})"
