from __future__ import annotations

import logging
import subprocess
import sys

from pynetcat.errors import SinkError

log = logging.getLogger("pynetcat")


def execute_command(data: bytes, command: str, logger: logging.Logger | None = None) -> None:
    """Run ``command`` through ``sh -c``, feeding it ``data`` on stdin.

    The child's stdout and stderr are relayed to ours once it exits.
    """
    logger = logger or log
    logger.info("Executing command: %s", command)
    try:
        result = subprocess.run(
            ["sh", "-c", command],
            input=data,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except OSError as exc:
        raise SinkError(f"Failed to run command {command!r}: {exc}") from exc

    if result.returncode != 0:
        logger.debug("Command %r exited with status %d", command, result.returncode)

    try:
        sys.stdout.buffer.write(result.stdout)
        sys.stdout.buffer.flush()
        sys.stderr.buffer.write(result.stderr)
        sys.stderr.buffer.flush()
    except OSError as exc:
        raise SinkError(f"Failed to relay output of {command!r}: {exc}") from exc
