from __future__ import annotations

import json
import logging
from typing import Any

import requests
from requests.auth import HTTPBasicAuth

from .config import TIMEOUT_S, ClientConfig
from .errors import JsonParseError, TransportError, error_for_status
from .http import connection_for

logger = logging.getLogger(__name__)

READ_OK = frozenset({200})
WRITE_OK = frozenset({200, 201, 422, 400})


class RestClient:
    """JSON REST client bound to one base URL.

    POST and PUT return the decoded body for 400 and 422 as well as for
    200/201, so validation errors have to be checked in the returned data.
    Redirects are not followed; a 3xx raises like any other unaccepted status.

    Not thread-safe: share an instance across threads only with external
    locking.
    """

    def __init__(
        self,
        url: str | None = None,
        public_key: str | None = None,
        private_key: str | None = None,
        *,
        config: ClientConfig | None = None,
    ):
        if config is None:
            if url is None:
                raise TypeError("RestClient needs a url or a config")
            config = ClientConfig(base_url=url, public_key=public_key, private_key=private_key)
        self._config = config
        self._conn = connection_for(config.persistent)

    @classmethod
    def from_config(cls, config: ClientConfig) -> "RestClient":
        return cls(config=config)

    @property
    def config(self) -> ClientConfig:
        return self._config

    def get(self, path: str, params: Any = None) -> Any:
        return self._call("GET", path, _optional_body(params), READ_OK)

    def post(self, path: str, params: Any = None) -> Any:
        # Write verbs always carry a body, ``null`` when params are omitted.
        return self._call("POST", path, _body(params), WRITE_OK)

    def put(self, path: str, params: Any = None) -> Any:
        return self._call("PUT", path, _body(params), WRITE_OK)

    def delete(self, path: str, params: Any = None) -> Any:
        return self._call("DELETE", path, _optional_body(params), READ_OK)

    def set_ca_file(self, path: str) -> None:
        self._config = self._config.with_ca_file(path)

    def set_persistent_connection(self, value: object) -> None:
        config = self._config.with_persistent(value)
        if config.persistent != self._conn.persistent:
            self._conn.close()
            self._conn = connection_for(config.persistent)
        self._config = config

    def set_additional_headers(self, headers: object) -> None:
        self._config = self._config.with_headers(headers)

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "RestClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def url_for(self, path: str) -> str:
        base = self._config.base_url
        if path.startswith(base):
            path = path[len(base):]
        return base + path

    def _call(self, method: str, path: str, body: bytes | None, accepted: frozenset[int]) -> Any:
        content, status = self._request(method, path, body)
        data = parse_json(content)
        if status in accepted:
            return data
        raise error_for_status(status, data)

    def _request(self, method: str, path: str, body: bytes | None) -> tuple[bytes, int]:
        cfg = self._config
        url = self.url_for(path)
        auth = HTTPBasicAuth(cfg.public_key, cfg.private_key) if cfg.has_credentials else None

        logger.debug("%s %s", method, url)
        with self._conn.session() as session:
            try:
                resp = session.request(
                    method,
                    url,
                    data=body,
                    headers=cfg.headers(),
                    auth=auth,
                    timeout=TIMEOUT_S,
                    verify=cfg.verify,
                    allow_redirects=False,
                )
            except requests.RequestException as e:
                logger.debug("%s %s failed: %s", method, url, e)
                raise TransportError(str(e)) from e
            content = resp.content
        logger.debug("%s %s -> %s", method, url, resp.status_code)
        return content, resp.status_code


def _body(params: Any) -> bytes:
    return json.dumps(params).encode("utf-8")


def _optional_body(params: Any) -> bytes | None:
    return _body(params) if params is not None else None


def parse_json(content: bytes | str) -> Any:
    """Decode a response body, treating an empty body or ``null`` as invalid.

    Bytes are parsed directly so UTF-8/16/32 is detected regardless of the
    charset the server advertised.
    """
    try:
        parsed = json.loads(content)
    except ValueError:
        parsed = None
    if parsed is None:
        text = content.decode("utf-8", errors="replace") if isinstance(content, bytes) else content
        raise JsonParseError("Error while parsing json: " + text[:250], 200, text)
    return parsed
