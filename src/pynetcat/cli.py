from __future__ import annotations

import argparse
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from pynetcat.config import Config, IpVersion, Protocol
from pynetcat.dispatch import dispatch
from pynetcat.errors import NetcatError
from pynetcat.log import init_logging


def _version() -> str:
    try:
        return version("pynetcat")
    except PackageNotFoundError:
        return "unknown"


def _port(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {value!r}") from None
    if not 0 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port out of range 0-65535: {port}")
    return port


def _timeout(value: str) -> int:
    try:
        seconds = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid timeout: {value!r}") from None
    if seconds < 0:
        raise argparse.ArgumentTypeError("timeout must be >= 0")
    return seconds


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pynetcat",
        description=(
            "Move a byte stream between a file, stdin/stdout or a command and a TCP or UDP endpoint. "
            "Without -l the input is sent to address:port; with -l one stream is received per connection."
        ),
    )
    parser.add_argument("-f", "--file", type=Path, help="Read from / write to this file instead of stdin/stdout")
    parser.add_argument("-i", "--ip-version", type=int, choices=[4, 6], default=4)
    parser.add_argument(
        "-p",
        "--protocol",
        default="tcp",
        help="The protocol to use. Possible choices: TCP|UDP",
    )
    parser.add_argument("-t", "--timeout", type=_timeout, default=0, help="Timeout in seconds (0 waits forever)")
    parser.add_argument("-l", "--listen", action="store_true", help="Listen mode")
    parser.add_argument("-e", "--exec", dest="exec_command", help="Pipe received data into this shell command")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_version()}")
    parser.add_argument("address", nargs="?")
    parser.add_argument("port", nargs="?", type=_port)
    return parser


def config_from_args(args: argparse.Namespace) -> Config:
    return Config(
        address=args.address,
        port=args.port,
        protocol=Protocol.parse(args.protocol),
        ip_version=IpVersion.parse(args.ip_version),
        listen=args.listen,
        timeout=args.timeout,
        file=args.file,
        exec_command=args.exec_command,
        verbose=args.verbose,
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logger = init_logging(args.verbose)
    logger.info("Starting with arguments: %s", vars(args))

    try:
        config = config_from_args(args)
        dispatch(config, logger)
    except NetcatError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
