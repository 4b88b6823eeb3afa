"""Error taxonomy raised by :class:`restconn.client.RestClient`.

Every failure is a :class:`RestError` carrying the same payload: a message,
the HTTP status (``None`` when no response was obtained) and the decoded
response body. The ``kind`` attribute tags which failure it is, so callers can
either switch on it or catch one of the specialised classes::

    try:
        client.get("/v1/user/self")
    except NotFoundError:
        ...
    except RestError as err:
        if err.kind is ErrorKind.SERVER_ERROR:
            ...
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    GENERIC = "generic"
    TRANSPORT = "transport"
    AUTHENTICATION = "authentication"
    ACCESS_DENIED = "access_denied"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    NOT_IMPLEMENTED = "not_implemented"
    JSON_PARSE = "json_parse"


class RestError(Exception):
    kind: ErrorKind = ErrorKind.GENERIC

    def __init__(self, message: str | None, status: int | None = None, body: Any = None):
        super().__init__(message or "")
        self.message = message
        self.status = status
        self.body = body

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, status={self.status!r}, message={self.message!r})"


class GenericApiError(RestError):
    kind = ErrorKind.GENERIC


class TransportError(RestError):
    """No HTTP response was obtained (DNS, refused connection, timeout)."""

    kind = ErrorKind.TRANSPORT


class AuthenticationError(RestError):
    kind = ErrorKind.AUTHENTICATION


class AccessDeniedError(RestError):
    kind = ErrorKind.ACCESS_DENIED


class NotFoundError(RestError):
    kind = ErrorKind.NOT_FOUND


class ServerError(RestError):
    kind = ErrorKind.SERVER_ERROR


class RestNotImplementedError(RestError):
    kind = ErrorKind.NOT_IMPLEMENTED


class JsonParseError(RestError):
    kind = ErrorKind.JSON_PARSE


STATUS_ERRORS: dict[int, type[RestError]] = {
    401: AuthenticationError,
    403: AccessDeniedError,
    404: NotFoundError,
    500: ServerError,
    501: RestNotImplementedError,
}


def error_for_status(status: int, body: Any, message: str | None = None) -> RestError:
    """Build the error matching an unaccepted HTTP status.

    The body's ``message`` field is used as the error text when it is a string
    and no explicit message was given.
    """
    if message is None and isinstance(body, dict) and isinstance(body.get("message"), str):
        message = body["message"]
    cls = STATUS_ERRORS.get(status, GenericApiError)
    return cls(message, status, body)
