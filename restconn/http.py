from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

import requests

logger = logging.getLogger(__name__)


def new_session() -> requests.Session:
    s = requests.Session()
    # No ~/.netrc auth, proxy or CA bundle from the environment.
    s.trust_env = False
    return s


class PersistentConnection:
    """One ``requests.Session`` reused for every call until :meth:`close`."""

    persistent = True

    def __init__(self) -> None:
        self._session: requests.Session | None = None

    @contextmanager
    def session(self) -> Iterator[requests.Session]:
        if self._session is None:
            logger.debug("opening persistent session")
            self._session = new_session()
        yield self._session

    def close(self) -> None:
        if self._session is not None:
            logger.debug("closing persistent session")
            self._session.close()
            self._session = None


class ScopedConnection:
    """A fresh session per call, closed as soon as the call ends."""

    persistent = False

    @contextmanager
    def session(self) -> Iterator[requests.Session]:
        s = new_session()
        try:
            yield s
        finally:
            s.close()

    def close(self) -> None:
        pass


def connection_for(persistent: bool) -> PersistentConnection | ScopedConnection:
    return PersistentConnection() if persistent else ScopedConnection()
