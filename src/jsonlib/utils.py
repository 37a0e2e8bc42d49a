from __future__ import annotations

import math
import re
from typing import Any, Dict, Mapping, Optional, Tuple
from urllib.parse import urlsplit

JSON_CONTENT_TYPE = "application/json"

# RFC 7230 token
_METHOD_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
_NUMBER_RE = re.compile(r"^-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?$")
_BOOLEANS = {"true": True, "false": False}
_XML_NAME_RE = re.compile(r"^(?:[^\W\d]|:)[\w.\-:]*$")


def merge_headers(headers: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Return default JSON headers overridden by caller headers (case-insensitive)."""

    merged: Dict[str, str] = {"Content-Type": JSON_CONTENT_TYPE}
    for key, value in (headers or {}).items():
        for existing in [k for k in merged if k.lower() == key.lower()]:
            del merged[existing]
        merged[key] = value
    return merged


def check_request_target(method: str, url: str) -> None:
    """Raise ValueError unless method is an HTTP token and url an absolute http(s) URL."""

    if not isinstance(method, str) or not _METHOD_RE.match(method):
        raise ValueError(f"invalid method {method!r}")
    if not isinstance(url, str):
        raise ValueError("url must be str")
    parts = urlsplit(url)
    if parts.scheme.lower() not in ("http", "https"):
        raise ValueError(f"unsupported protocol scheme {parts.scheme!r}")
    if not parts.hostname:
        raise ValueError(f"no host in request URL {url!r}")


def cast_scalar(value: Any) -> Any:
    """Turn XML text holding a JSON number or boolean literal into that value.

    Numbers that do not fit a finite float (or exceed the int digit limit)
    stay strings so the result is always representable as JSON.
    """

    if not isinstance(value, str):
        return value
    if value in _BOOLEANS:
        return _BOOLEANS[value]
    if not _NUMBER_RE.match(value):
        return value
    try:
        if "." in value or "e" in value or "E" in value:
            number = float(value)
            return number if math.isfinite(number) else value
        return int(value)
    except ValueError:
        return value


def check_xml_name(name: Any) -> None:
    """Raise ValueError unless name can be used as an XML element or attribute name."""

    if not isinstance(name, str) or not _XML_NAME_RE.match(name):
        raise ValueError(f"invalid xml name {name!r}")


def check_xml_tree(value: Any) -> None:
    """Raise ValueError when a tree cannot be written as XML.

    Every element and ``@`` attribute key must be an XML name, and a list may
    not directly hold another list since repeated tags cannot nest arrays.
    """

    if isinstance(value, dict):
        for key, child in value.items():
            if key == "#text":
                continue
            if isinstance(key, str) and key.startswith("@"):
                check_xml_name(key[1:])
                continue
            check_xml_name(key)
            check_xml_tree(child)
    elif isinstance(value, list):
        for item in value:
            if isinstance(item, list):
                raise ValueError("nested arrays cannot be represented as xml")
            check_xml_tree(item)


def cast_postprocessor(path: Any, key: str, value: Any) -> Tuple[str, Any]:
    """xmltodict postprocessor applying cast_scalar to every text and attribute."""

    return key, cast_scalar(value)


def format_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def text_preprocessor(key: str, value: Any) -> Tuple[str, Any]:
    """xmltodict preprocessor turning non-string mixed text into XML text."""

    if isinstance(value, list):
        return key, [_stringify_text(item) for item in value]
    return key, _stringify_text(value)


def _stringify_text(value: Any) -> Any:
    if isinstance(value, dict) and "#text" in value and not isinstance(value["#text"], str):
        value = dict(value)
        value["#text"] = format_scalar(value["#text"])
    return value


def prefix_lines(text: str, prefix: str) -> str:
    """Put prefix after every newline of indented output."""

    if not prefix:
        return text
    return text.replace("\n", "\n" + prefix)


__all__ = [
    "JSON_CONTENT_TYPE",
    "merge_headers",
    "check_request_target",
    "cast_scalar",
    "cast_postprocessor",
    "check_xml_name",
    "check_xml_tree",
    "format_scalar",
    "text_preprocessor",
    "prefix_lines",
]
