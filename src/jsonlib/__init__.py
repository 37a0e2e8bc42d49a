from __future__ import annotations

from .client import (
    DEFAULT,
    DEFAULT_TIMEOUT,
    JSONLibrary,
    delete_json,
    get_json,
    httpx,
    parse_json_request,
    post_json,
    put_json,
    request_json,
    requests,
)
from .converter import json_to_tree, json_to_xml, tree_to_json, tree_to_xml, xml_to_json, xml_to_tree
from .exceptions import (
    BadRequestError,
    ConversionError,
    DecodeError,
    ForbiddenError,
    HTTPStatusError,
    InvalidJSONError,
    InvalidXMLError,
    JSONLibError,
    MarshalError,
    NotFoundError,
    RequestConstructionError,
    RequestError,
    RequestTimeoutError,
    ResponseReadError,
    ServerError,
    TransportError,
    UnauthorizedError,
    UnmarshalError,
)
from .structures import J2XOptions, X2JOptions

__all__ = [
    "JSONLibrary",
    "DEFAULT",
    "DEFAULT_TIMEOUT",
    "J2XOptions",
    "X2JOptions",
    "request_json",
    "get_json",
    "post_json",
    "put_json",
    "delete_json",
    "parse_json_request",
    "json_to_xml",
    "xml_to_json",
    "json_to_tree",
    "tree_to_xml",
    "xml_to_tree",
    "tree_to_json",
    "httpx",
    "requests",
    "JSONLibError",
    "RequestError",
    "MarshalError",
    "RequestConstructionError",
    "TransportError",
    "RequestTimeoutError",
    "ResponseReadError",
    "HTTPStatusError",
    "BadRequestError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ServerError",
    "UnmarshalError",
    "DecodeError",
    "ConversionError",
    "InvalidJSONError",
    "InvalidXMLError",
]
