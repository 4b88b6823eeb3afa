"""Minimal JSON REST client built on requests."""

import logging

from .client import RestClient
from .config import ClientConfig, HeaderFormatError
from .errors import (
    AccessDeniedError,
    AuthenticationError,
    ErrorKind,
    GenericApiError,
    JsonParseError,
    NotFoundError,
    RestError,
    RestNotImplementedError,
    ServerError,
    TransportError,
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AccessDeniedError",
    "AuthenticationError",
    "ClientConfig",
    "ErrorKind",
    "GenericApiError",
    "HeaderFormatError",
    "JsonParseError",
    "NotFoundError",
    "RestClient",
    "RestError",
    "RestNotImplementedError",
    "ServerError",
    "TransportError",
]
