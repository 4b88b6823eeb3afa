from __future__ import annotations

from dataclasses import dataclass, field, replace

from requests.structures import CaseInsensitiveDict


USER_AGENT = "restconn Python Library"
TIMEOUT_S = 60.0

BASE_HEADERS = (
    ("Accept", "application/json"),
    ("Content-Type", "application/json"),
    ("User-Agent", USER_AGENT),
)


class HeaderFormatError(ValueError):
    """Raised when extra headers are not given as a list of pairs."""


@dataclass(frozen=True)
class ClientConfig:
    base_url: str
    public_key: str | None = None
    private_key: str | None = None
    ca_file: str | None = None
    persistent: bool = True
    extra_headers: tuple[tuple[str, str], ...] = ()

    # Derived from the URL scheme when left as None.
    ssl: bool | None = field(default=None)

    def __post_init__(self) -> None:
        if self.ssl is None:
            object.__setattr__(self, "ssl", self.base_url.startswith("https"))

    @property
    def has_credentials(self) -> bool:
        return self.public_key is not None and self.private_key is not None

    @property
    def verify(self) -> bool | str:
        """Value for the ``verify`` argument of requests."""
        if not self.ssl:
            return False
        return self.ca_file or True

    def with_ca_file(self, path: str) -> "ClientConfig":
        return replace(self, ca_file=path, ssl=True)

    def with_persistent(self, value: object) -> "ClientConfig":
        return replace(self, persistent=bool(value))

    def with_headers(self, headers: object) -> "ClientConfig":
        return replace(self, extra_headers=parse_headers(headers))

    def headers(self) -> CaseInsensitiveDict:
        """Fixed headers plus extras; a repeated name is comma-joined, never replaced."""
        merged = CaseInsensitiveDict(BASE_HEADERS)
        merged["Accept-Encoding"] = "gzip"
        for key, value in self.extra_headers:
            if key in merged:
                merged[key] = f"{merged[key]}, {value}"
            else:
                merged[key] = value
        return merged


def parse_headers(headers: object) -> tuple[tuple[str, str], ...]:
    """Normalise a header list into ``(key, value)`` pairs.

    Accepts:
    - ``("X-Token", "abc")`` pairs
    - ``"X-Token: abc"`` strings

    Anything that is not a list is rejected.
    """
    if not isinstance(headers, list):
        raise HeaderFormatError("Wrong headers format")

    out: list[tuple[str, str]] = []
    for h in headers:
        if isinstance(h, str):
            key, sep, value = h.partition(":")
            if not sep or not key.strip():
                raise HeaderFormatError(f"Wrong headers format: {h!r}")
            out.append((key.strip(), value.strip()))
        elif isinstance(h, (tuple, list)) and len(h) == 2:
            out.append((str(h[0]), str(h[1])))
        else:
            raise HeaderFormatError(f"Wrong headers format: {h!r}")
    return tuple(out)
