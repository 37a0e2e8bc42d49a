from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

from .utils import check_xml_name


def _require_type(name: str, value: Any, expected: type) -> None:
    if not isinstance(value, expected):
        raise TypeError(f"{name} must be {expected.__name__}")


@dataclass(frozen=True)
class _IndentOptions:
    with_indent: bool = False
    prefix: str = ""
    indent: str = "\t"

    def __post_init__(self) -> None:
        _require_type("with_indent", self.with_indent, bool)
        _require_type("prefix", self.prefix, str)
        _require_type("indent", self.indent, str)

    def replace(self, **changes: Any):
        """Return a copy with the given fields changed."""

        return dataclasses.replace(self, **changes)


@dataclass(frozen=True)
class J2XOptions(_IndentOptions):
    """Options of json2xml conversion.

    ``root_tag`` names the element wrapping the whole converted document.
    ``prefix`` and ``indent`` are used only when ``with_indent`` is set.
    """

    root_tag: str = "doc"

    def __post_init__(self) -> None:
        super().__post_init__()
        _require_type("root_tag", self.root_tag, str)
        if not self.root_tag.strip():
            raise ValueError("root_tag cannot be empty")
        try:
            check_xml_name(self.root_tag)
        except ValueError as exc:
            raise ValueError(f"root_tag must be an xml name: {self.root_tag!r}") from exc


@dataclass(frozen=True)
class X2JOptions(_IndentOptions):
    """Options of xml2json conversion.

    With ``omit_root`` the document root element is dropped and its content
    becomes the top level of the JSON output.
    """

    omit_root: bool = False

    def __post_init__(self) -> None:
        super().__post_init__()
        _require_type("omit_root", self.omit_root, bool)


__all__ = ["J2XOptions", "X2JOptions"]
