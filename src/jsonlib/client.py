from __future__ import annotations

import contextlib
import json
import logging
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Dict, Mapping, Optional, Tuple, Type, Union

import httpx
import requests

from . import converter
from .exceptions import (
    BadRequestError,
    DecodeError,
    ForbiddenError,
    HTTPStatusError,
    MarshalError,
    NotFoundError,
    RequestConstructionError,
    RequestTimeoutError,
    ResponseReadError,
    ServerError,
    TransportError,
    UnauthorizedError,
    UnmarshalError,
)
from .structures import J2XOptions, X2JOptions
from .utils import check_request_target, merge_headers

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

HttpClient = Union[httpx.Client, requests.Session]


@dataclass
class JSONLibrary:
    """JSON over HTTP and JSON/XML conversion.

    ``client`` is shared by every request of the instance and must be safe
    for concurrent use. When omitted, an ``httpx.Client`` with ``timeout``
    seconds is created and owned by the instance. A ``requests.Session``
    can be passed instead; it then gets ``timeout`` on every request.
    """

    client: Optional[HttpClient] = None
    timeout: float = DEFAULT_TIMEOUT
    _owns_client: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.client is None:
            self.client = httpx.Client(timeout=self.timeout)
            self._owns_client = True

    def close(self) -> None:
        if self._owns_client and self.client is not None:
            self.client.close()

    def __enter__(self) -> "JSONLibrary":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @staticmethod
    def _status_error(status_code: int) -> Type[HTTPStatusError]:
        if status_code == HTTPStatus.BAD_REQUEST:
            return BadRequestError
        if status_code == HTTPStatus.UNAUTHORIZED:
            return UnauthorizedError
        if status_code == HTTPStatus.FORBIDDEN:
            return ForbiddenError
        if status_code == HTTPStatus.NOT_FOUND:
            return NotFoundError
        if HTTPStatus.INTERNAL_SERVER_ERROR <= status_code <= 599:
            return ServerError
        return HTTPStatusError

    def _send_httpx(
        self,
        method: str,
        url: str,
        content: Optional[bytes],
        headers: Dict[str, str],
        context: Dict[str, Any],
    ) -> Tuple[int, bytes]:
        try:
            request = self.client.build_request(method, url, content=content, headers=headers)
        except (httpx.InvalidURL, TypeError, ValueError) as exc:
            raise RequestConstructionError("jsonlib: failed to new request", cause=exc, **context) from exc

        try:
            response = self.client.send(request, stream=True)
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError("jsonlib: request timeout exceeded", cause=exc, **context) from exc
        except httpx.HTTPError as exc:
            raise TransportError("jsonlib: failed to send request", cause=exc, **context) from exc

        try:
            body = response.read()
        except httpx.HTTPError as exc:
            raise ResponseReadError(
                "jsonlib: failed to read response", status=response.status_code, cause=exc, **context
            ) from exc
        finally:
            response.close()
        return response.status_code, body

    def _send_requests(
        self,
        method: str,
        url: str,
        content: Optional[bytes],
        headers: Dict[str, str],
        context: Dict[str, Any],
    ) -> Tuple[int, bytes]:
        try:
            prepared = self.client.prepare_request(requests.Request(method, url, data=content, headers=headers))
        except (requests.RequestException, TypeError, ValueError) as exc:
            raise RequestConstructionError("jsonlib: failed to new request", cause=exc, **context) from exc

        try:
            response = self.client.send(prepared, stream=True, timeout=self.timeout)
        except requests.Timeout as exc:
            raise RequestTimeoutError("jsonlib: request timeout exceeded", cause=exc, **context) from exc
        except requests.RequestException as exc:
            raise TransportError("jsonlib: failed to send request", cause=exc, **context) from exc

        try:
            body = response.content
        except requests.RequestException as exc:
            raise ResponseReadError(
                "jsonlib: failed to read response", status=response.status_code, cause=exc, **context
            ) from exc
        finally:
            response.close()
        return response.status_code, body

    def request_json(
        self,
        method: str,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        payload: Any = None,
        *,
        decode: bool = True,
    ) -> Any:
        """Send ``payload`` as JSON and return the decoded JSON response.

        Any status outside 200-299 raises HTTPStatusError. With ``decode``
        false the response body is not parsed and None is returned.
        """

        context: Dict[str, Any] = {"method": method, "url": url}
        content: Optional[bytes] = None
        if payload is not None:
            try:
                content = json.dumps(payload, allow_nan=False).encode("utf-8")
            except (TypeError, ValueError) as exc:
                raise MarshalError("jsonlib: failed to marshal request", cause=exc, **context) from exc
            context["request"] = content

        try:
            check_request_target(method, url)
        except ValueError as exc:
            raise RequestConstructionError("jsonlib: failed to new request", cause=exc, **context) from exc

        logger.debug("jsonlib: %s %s", method, url)
        send = self._send_requests if isinstance(self.client, requests.Session) else self._send_httpx
        status_code, body = send(method, url, content, merge_headers(headers), context)

        if (status_code // 100) * 100 != HTTPStatus.OK:
            logger.debug("jsonlib: %s %s returned %s", method, url, status_code)
            raise self._status_error(status_code)(
                "jsonlib: failed to receive response", status=status_code, response=body, **context
            )

        if not decode:
            return None
        try:
            return json.loads(body)
        except ValueError as exc:
            raise UnmarshalError(
                "jsonlib: failed to unmarshal response", status=status_code, response=body, cause=exc, **context
            ) from exc

    def get_json(self, url: str, headers: Optional[Mapping[str, str]] = None, *, decode: bool = True) -> Any:
        return self.request_json("GET", url, headers, decode=decode)

    def post_json(
        self, url: str, headers: Optional[Mapping[str, str]] = None, payload: Any = None, *, decode: bool = True
    ) -> Any:
        return self.request_json("POST", url, headers, payload, decode=decode)

    def put_json(
        self, url: str, headers: Optional[Mapping[str, str]] = None, payload: Any = None, *, decode: bool = True
    ) -> Any:
        return self.request_json("PUT", url, headers, payload, decode=decode)

    def delete_json(
        self, url: str, headers: Optional[Mapping[str, str]] = None, payload: Any = None, *, decode: bool = True
    ) -> Any:
        return self.request_json("DELETE", url, headers, payload, decode=decode)

    @staticmethod
    def parse_json_request(request: Any) -> Any:
        """Decode the JSON body of an inbound request.

        ``request`` is either a readable binary stream or an object with such
        a stream in its ``body`` attribute. The stream is closed on return.
        """

        stream = getattr(request, "body", request)
        with contextlib.closing(stream):
            try:
                return json.load(stream)
            except ValueError as exc:
                raise DecodeError(f"jsonlib: failed to decode request body: {exc}") from exc

    @staticmethod
    def json_to_xml(json_text: str, options: Optional[J2XOptions] = None) -> str:
        return converter.json_to_xml(json_text, options)

    @staticmethod
    def xml_to_json(xml_text: str, options: Optional[X2JOptions] = None) -> str:
        return converter.xml_to_json(xml_text, options)


DEFAULT = JSONLibrary()


def request_json(
    method: str,
    url: str,
    headers: Optional[Mapping[str, str]] = None,
    payload: Any = None,
    *,
    decode: bool = True,
) -> Any:
    return DEFAULT.request_json(method, url, headers, payload, decode=decode)


def get_json(url: str, headers: Optional[Mapping[str, str]] = None, *, decode: bool = True) -> Any:
    return DEFAULT.get_json(url, headers, decode=decode)


def post_json(url: str, headers: Optional[Mapping[str, str]] = None, payload: Any = None, *, decode: bool = True) -> Any:
    return DEFAULT.post_json(url, headers, payload, decode=decode)


def put_json(url: str, headers: Optional[Mapping[str, str]] = None, payload: Any = None, *, decode: bool = True) -> Any:
    return DEFAULT.put_json(url, headers, payload, decode=decode)


def delete_json(
    url: str, headers: Optional[Mapping[str, str]] = None, payload: Any = None, *, decode: bool = True
) -> Any:
    return DEFAULT.delete_json(url, headers, payload, decode=decode)


def parse_json_request(request: Any) -> Any:
    return DEFAULT.parse_json_request(request)


__all__ = [
    "JSONLibrary",
    "DEFAULT",
    "DEFAULT_TIMEOUT",
    "request_json",
    "get_json",
    "post_json",
    "put_json",
    "delete_json",
    "parse_json_request",
    "httpx",
    "requests",
]
