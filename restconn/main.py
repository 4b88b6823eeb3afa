from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from . import __version__
from .client import RestClient
from .config import ClientConfig, HeaderFormatError, parse_headers
from .errors import RestError

ENV_KEYS = {
    "url": "RESTCONN_URL",
    "public_key": "RESTCONN_PUBLIC_KEY",
    "private_key": "RESTCONN_PRIVATE_KEY",
    "ca_file": "RESTCONN_CA_FILE",
}


def _json_arg(value: str):
    try:
        return json.loads(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid JSON: {e}")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="restconn")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("-v", "--verbose", action="store_true", help="Log requests to stderr")

    p.add_argument("method", nargs="?", choices=["get", "post", "put", "delete"])
    p.add_argument("path", nargs="?", help="Path relative to --url, or a full URL under it")
    p.add_argument("--data", type=_json_arg, default=None, help="JSON request body")
    p.add_argument("--url", default=os.environ.get(ENV_KEYS["url"]), help="Base API URL")
    p.add_argument("--public-key", default=os.environ.get(ENV_KEYS["public_key"]))
    p.add_argument("--private-key", default=os.environ.get(ENV_KEYS["private_key"]))
    p.add_argument("--ca-file", default=os.environ.get(ENV_KEYS["ca_file"]), help="CA bundle for TLS verification")
    p.add_argument("--header", action="append", default=[], help="Extra header 'Key: Value' (repeatable)")
    p.add_argument("--no-persistent", action="store_true", help="Open a new connection per request")

    return p


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    if args.version:
        print(__version__)
        return 0

    if args.method is None or args.path is None:
        p.print_help()
        return 0

    if not args.url:
        p.error(f"--url is required (or set {ENV_KEYS['url']})")

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        headers = parse_headers(args.header)
    except HeaderFormatError as e:
        p.error(str(e))

    cfg = ClientConfig(
        base_url=args.url,
        public_key=args.public_key,
        private_key=args.private_key,
        persistent=not args.no_persistent,
        extra_headers=headers,
    )
    if args.ca_file:
        cfg = cfg.with_ca_file(args.ca_file)

    with RestClient.from_config(cfg) as client:
        try:
            data = getattr(client, args.method)(args.path, args.data)
        except RestError as exc:
            print(f"ERROR ({exc.kind.value}, status={exc.status}): {exc}", file=sys.stderr)
            return 1

    print(json.dumps(data, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
