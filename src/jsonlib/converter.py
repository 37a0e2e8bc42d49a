"""JSON <-> XML conversion over a plain dict tree.

Attributes live under ``@``-prefixed keys and mixed element text under
``#text``. A tag repeated under one parent becomes a list, a tag seen once
keeps its bare value, so the shape of the output follows the input document.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Optional
from xml.parsers.expat import ExpatError

import xmltodict

from .exceptions import ConversionError, InvalidJSONError, InvalidXMLError
from .structures import J2XOptions, X2JOptions
from .utils import cast_postprocessor, check_xml_tree, prefix_lines, text_preprocessor

DEFAULT_J2X_OPTIONS = J2XOptions()
DEFAULT_X2J_OPTIONS = X2JOptions()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def json_to_tree(json_text: str) -> Dict[str, Any]:
    """Parse JSON text holding an object."""

    try:
        tree = json.loads(json_text, parse_constant=_reject_constant)
    except (TypeError, ValueError) as exc:
        raise InvalidJSONError(f"json2xml: failed to unmarshal json data: {exc}") from exc
    if not isinstance(tree, dict):
        raise InvalidJSONError("json2xml: json document must be an object")
    return tree


def tree_to_xml(tree: Dict[str, Any], options: Optional[J2XOptions] = None) -> str:
    """Serialize a tree as XML wrapped in ``options.root_tag``.

    Raises:
        InvalidJSONError: a key is not an XML name or an array holds an array.
    """

    opts = options or DEFAULT_J2X_OPTIONS
    try:
        check_xml_tree(tree)
        xml = xmltodict.unparse(
            {opts.root_tag: tree},
            full_document=False,
            preprocessor=text_preprocessor,
            pretty=opts.with_indent,
            indent=opts.indent,
            newl="\n",
        )
    except ValueError as exc:
        raise InvalidJSONError(f"json2xml: failed to marshal xml data: {exc}") from exc
    if opts.with_indent and opts.prefix:
        return opts.prefix + prefix_lines(xml, opts.prefix)
    return xml


def xml_to_tree(xml_text: str) -> Dict[str, Any]:
    """Parse XML text into a tree keyed by the document root element."""

    if not isinstance(xml_text, (str, bytes)):
        raise InvalidXMLError("xml2json: xml data must be str or bytes")
    try:
        tree = xmltodict.parse(
            xml_text.strip(),
            postprocessor=cast_postprocessor,
            dict_constructor=dict,
        )
    except ExpatError as exc:
        raise InvalidXMLError(f"xml2json: failed to unmarshal xml data: {exc}") from exc
    return tree


def tree_to_json(tree: Any, options: Optional[X2JOptions] = None) -> str:
    opts = options or DEFAULT_X2J_OPTIONS
    try:
        if opts.with_indent:
            text = json.dumps(tree, indent=opts.indent, ensure_ascii=False, allow_nan=False)
            return prefix_lines(text, opts.prefix)
        return json.dumps(tree, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise ConversionError(f"xml2json: failed to marshal json data: {exc}") from exc


def json_to_xml(json_text: str, options: Optional[J2XOptions] = None) -> str:
    """Convert a JSON object document to XML text.

    Raises:
        InvalidJSONError: input is not a well-formed JSON object.
    """

    return tree_to_xml(json_to_tree(json_text), options)


def xml_to_json(xml_text: str, options: Optional[X2JOptions] = None) -> str:
    """Convert an XML document to JSON text.

    With ``options.omit_root`` the root element key is dropped and its value
    becomes the whole JSON document.

    Raises:
        InvalidXMLError: input is not well-formed XML.
    """

    opts = options or DEFAULT_X2J_OPTIONS
    tree: Any = xml_to_tree(xml_text)
    if opts.omit_root:
        # a parsed document always has exactly one root key
        tree = next(iter(tree.values()))
    return tree_to_json(tree, opts)


__all__ = [
    "DEFAULT_J2X_OPTIONS",
    "DEFAULT_X2J_OPTIONS",
    "json_to_tree",
    "tree_to_xml",
    "xml_to_tree",
    "tree_to_json",
    "json_to_xml",
    "xml_to_json",
]
