from __future__ import annotations

import logging
import sys

from pynetcat.command import execute_command
from pynetcat.config import Config
from pynetcat.errors import SinkError, SourceError

log = logging.getLogger("pynetcat")


def deliver(buffer: bytes, config: Config, logger: logging.Logger | None = None) -> None:
    """Hand a fully received buffer to its sink: command, then file, then stdout."""
    logger = logger or log

    if config.exec_command is not None:
        execute_command(buffer, config.exec_command, logger)
        return

    if config.file is not None:
        logger.debug("Writing %d bytes to %s", len(buffer), config.file)
        try:
            config.file.write_bytes(buffer)
        except OSError as exc:
            raise SinkError(f"Failed to write {config.file}: {exc}") from exc
        return

    try:
        sys.stdout.buffer.write(buffer)
        sys.stdout.buffer.flush()
    except OSError as exc:
        raise SinkError(f"Failed to write to stdout: {exc}") from exc


def read_source(config: Config) -> bytes:
    """Read the whole outbound buffer from ``config.file`` or stdin."""
    if config.file is not None:
        try:
            return config.file.read_bytes()
        except OSError as exc:
            raise SourceError(f"Failed to read {config.file}: {exc}") from exc

    try:
        return sys.stdin.buffer.read()
    except OSError as exc:
        raise SourceError(f"Failed to read stdin: {exc}") from exc
