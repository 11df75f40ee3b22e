"""
nucleus.__main__

Entrypoint for authenticating a token via `python -m nucleus`.

Responsibilities:
- Load settings from NUCLEUS_* environment variables and command line flags.
- Configure structlog output (stderr) and the trust store.
- Print the identity as JSON, or the rendered error with a non-zero exit code.
"""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence

from pydantic import ValidationError

from nucleus.client import NucleusClient
from nucleus.errors import CertificateError, InvalidTokenError, MultipleErrors, NucleusError
from nucleus.observability.logging import configure_logging, get_logger
from nucleus.settings import Settings

EXIT_FAILURE = 1
EXIT_INVALID_TOKEN = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nucleus",
        description="Authenticate a token against nucleus nodes.",
    )
    parser.add_argument("token", nargs="?", help="token to check (default: $NUCLEUS_TOKEN)")
    parser.add_argument("--address", help="host, URL or _srv-record (default: _nucleus)")
    parser.add_argument("--timeout", type=float, help="seconds, 0 disables the timeout")
    parser.add_argument("--retries", type=int, help="number of full resolution rounds")
    parser.add_argument("--user-agent", dest="user_agent")
    parser.add_argument(
        "--certificate",
        action="append",
        default=[],
        metavar="PATH",
        help="PEM file with a trusted CA; may be repeated",
    )
    parser.add_argument(
        "--system-roots",
        dest="trust_system_roots",
        action="store_true",
        default=None,
        help="also trust the platform CA roots",
    )
    parser.add_argument("--log-level", dest="log_level")
    parser.add_argument("--console", action="store_true", help="human readable logs instead of JSON")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings()
        for field in (
            "address",
            "timeout",
            "retries",
            "user_agent",
            "log_level",
            "trust_system_roots",
        ):
            value = getattr(args, field)
            if value is not None:
                setattr(settings, field, value)
    except ValidationError as e:
        parser.error(str(e))

    token = args.token or os.environ.get("NUCLEUS_TOKEN")
    if not token:
        parser.error("a token is required (argument or NUCLEUS_TOKEN)")

    configure_logging(
        service_name=settings.service_name, level=settings.log_level, json=not args.console
    )
    settings.logger = get_logger("nucleus", address=settings.address)

    try:
        # The environment carries PEM data itself, mirroring how CI secrets are usually exposed.
        pem = os.environ.get("NUCLEUS_CERTIFICATE")
        if pem:
            settings.add_certificate(pem)
        for path in args.certificate:
            settings.add_certificate_file(path)
    except CertificateError as e:
        print(e, file=sys.stderr)
        return EXIT_FAILURE

    try:
        identity = NucleusClient(settings=settings).authenticate(token)
    except NucleusError as e:
        print(e, file=sys.stderr)
        if isinstance(e, InvalidTokenError) or (
            isinstance(e, MultipleErrors) and e.has(InvalidTokenError)
        ):
            return EXIT_INVALID_TOKEN
        return EXIT_FAILURE

    print(identity.model_dump_json(by_alias=True, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())


# --- Module Notes -----------------------------------------------------------
# Logs go to stderr so stdout stays machine-readable JSON.
