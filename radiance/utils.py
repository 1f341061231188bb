"""Small helpers shared across the renderer: path handling, text loading and checks."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import Any, TypeVar

T = TypeVar("T")

_PPM_COMMENT = re.compile(r"#[^\n]*")


class Reflectable:
    """Mixin that exposes selected attributes by key with a fixed value type."""

    def _reflect_map(self) -> dict[str, tuple[str, type]]:
        return self.__dict__.setdefault("_reflected_attributes", {})

    def register_reflect(self, key: str, attribute: str) -> None:
        """Expose the attribute named ``attribute`` under ``key``."""
        current = getattr(self, attribute)
        self._reflect_map()[key] = (attribute, type(current))

    def _lookup(self, key: str) -> tuple[str, type]:
        try:
            return self._reflect_map()[key]
        except KeyError:
            raise KeyError(f"Key: {key} is not serialized.") from None

    def set_value(self, key: str, value: Any) -> None:
        """Assign ``value`` to the attribute registered under ``key``."""
        attribute, kind = self._lookup(key)
        if type(value) is not kind:
            raise TypeError(f"Key: {key}'s value type does not match.")
        setattr(self, attribute, value)

    def get_value(self, key: str) -> Any:
        """Return the current value of the attribute registered under ``key``."""
        attribute, _ = self._lookup(key)
        return getattr(self, attribute)


def format_sequence(values: Iterable[Any], stride: int = -1) -> str:
    """Render values as ``v, `` items, breaking the line after every ``stride`` items."""
    parts: list[str] = []
    for count, value in enumerate(values, start=1):
        parts.append(f"{value}, ")
        if stride != -1 and count % stride == 0:
            parts.append("\n")
    return "".join(parts)


def require_non_null(value: T | None, name: str) -> T:
    """Return ``value`` or raise ``ValueError`` if it is ``None``."""
    if value is None:
        raise ValueError(f"Pointer: {name} should not be null")
    return value


def require_optional(value: T | None, name: str) -> T:
    """Return ``value`` or raise ``ValueError`` if it holds nothing."""
    if value is None:
        raise ValueError(f"Optional: {name} does not contain a value")
    return value


def remove_quotes(text: str) -> str:
    """Strip matching surrounding double quotes, then single quotes, repeatedly."""
    while len(text) > 2 and text[0] == '"' and text[-1] == '"':
        text = text[1:-1]
    while len(text) > 2 and text[0] == "'" and text[-1] == "'":
        text = text[1:-1]
    return text


def to_unix_style_path(path: str) -> str:
    """Replace every backslash with a forward slash."""
    return path.replace("\\", "/")


def _last_separator(path: str) -> int:
    return max(path.rfind("/"), path.rfind("\\"))


def get_directory(path: str) -> str:
    """Return everything before the last path separator, or ``""`` if there is none."""
    found = _last_separator(path)
    return "" if found == -1 else path[:found]


def get_ext(path: str) -> str:
    """Return the text after the last dot, or ``""`` if there is none."""
    found = path.rfind(".")
    return "" if found == -1 else path[found + 1:]


def get_file_name(path: str) -> str:
    """Return the text after the last path separator, or ``""`` if there is none."""
    found = _last_separator(path)
    return "" if found == -1 else path[found + 1:]


def load_text_file(path: str) -> str:
    """Read a text file line by line, each line followed by a newline.

    Raises ``FileNotFoundError`` (or another ``OSError``) if it cannot be read.
    """
    with open(path, encoding="utf-8", newline="") as stream:
        content = stream.read()
    return content + "\n"


def triangulate(face: Sequence[T]) -> list[T]:
    """Fan-triangulate a polygon given as a sequence of vertices."""
    return [
        item
        for current, following in zip(face[1:-1], face[2:])
        for item in (face[0], current, following)
    ]


def remove_ppm_comments(text: str) -> str:
    """Remove ``#`` comments up to (not including) the end of their line."""
    return _PPM_COMMENT.sub("", text)