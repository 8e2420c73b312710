from __future__ import annotations

import dataclasses
import logging

from pynetcat.address import is_valid_address
from pynetcat.client import run_client
from pynetcat.config import Config, IpVersion, Protocol
from pynetcat.errors import ConfigurationError
from pynetcat.server import run_server


def validate_config(config: Config) -> Config:
    """Reject a configuration before any network I/O happens.

    Returns the configuration with protocol and IP version as enum members.
    """
    config.endpoint()
    config = dataclasses.replace(
        config,
        protocol=Protocol.parse(config.protocol),
        ip_version=IpVersion.parse(config.ip_version),
    )
    if not is_valid_address(config.address, config.ip_version):  # type: ignore[arg-type]
        raise ConfigurationError(
            f"Invalid IP address: {config.address} for version {int(config.ip_version)}"
        )
    return config


def dispatch(config: Config, logger: logging.Logger | None = None) -> None:
    config = validate_config(config)
    if config.listen:
        run_server(config, config.protocol, config.timeout, logger)
    else:
        run_client(config, config.protocol, config.timeout, logger)
