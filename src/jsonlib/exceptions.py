from __future__ import annotations

from typing import Optional


class JSONLibError(Exception):
    """Base jsonlib error."""


class RequestError(JSONLibError):
    """Failed JSON exchange with the full request context attached.

    Fields that were not known when the failure happened keep their defaults:
    ``status`` is ``0`` until a response arrived, ``request`` and ``response``
    are ``None`` when no bytes were captured.
    """

    def __init__(
        self,
        message: str,
        *,
        method: str,
        url: str,
        request: Optional[bytes] = None,
        status: int = 0,
        response: Optional[bytes] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        self.message = message
        self.method = method
        self.url = url
        self.request = request
        self.status = status
        self.response = response
        self.cause = cause
        super().__init__(self._describe())

    def _describe(self) -> str:
        parts = [
            f"message={self.message}",
            f"method={self.method}",
            f"url={self.url}",
            f"status={self.status}",
        ]
        if self.request is not None:
            parts.append(f"request={self.request!r}")
        if self.response is not None:
            parts.append(f"response={self.response!r}")
        if self.cause is not None:
            parts.append(f"error={self.cause}")
        return "; ".join(parts)


class MarshalError(RequestError):
    """Raised when the request payload is not representable as JSON."""


class RequestConstructionError(RequestError):
    """Raised for a malformed method or URL."""


class TransportError(RequestError):
    """Raised when the JSON request never got a response (network, DNS, TLS)."""


class RequestTimeoutError(TransportError):
    """Raised when the client timeout expired before the exchange finished."""


class ResponseReadError(RequestError):
    """Raised when the response body cannot be read."""


class HTTPStatusError(RequestError):
    """Raised for any status outside the 2xx band."""


class BadRequestError(HTTPStatusError):
    """The server rejected the JSON request as malformed (400)."""


class UnauthorizedError(HTTPStatusError):
    """The JSON endpoint requires authentication (401)."""


class ForbiddenError(HTTPStatusError):
    """The JSON endpoint refused access (403)."""


class NotFoundError(HTTPStatusError):
    """No JSON resource at the requested URL (404)."""


class ServerError(HTTPStatusError):
    """The server failed while handling the JSON request (5xx)."""


class UnmarshalError(RequestError):
    """Raised when a successful response body is not valid JSON."""


class DecodeError(JSONLibError, ValueError):
    """Raised when an inbound request body is not valid JSON."""


class ConversionError(JSONLibError, ValueError):
    """Base error of the JSON/XML converter."""


class InvalidJSONError(ConversionError):
    """Raised by json2xml when the input is not a well-formed JSON object."""


class InvalidXMLError(ConversionError):
    """Raised by xml2json when the input is not well-formed XML."""


__all__ = [
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
